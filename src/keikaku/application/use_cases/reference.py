"""
Read-only access to the bundled reference data.
"""

from dataclasses import dataclass

from ulid import ULID

from keikaku.domain import JapaneseLevel, UserRepository
from keikaku.domain.reference_data import (
    KanjiDictionary,
    KanjiInfo,
    WellKnownSets,
    kanji_dictionary,
    load_well_known_set,
)

from .common import load_user


@dataclass(frozen=True)
class WellKnownSetSummary:
    set_id: WellKnownSets
    level: JapaneseLevel
    title: str
    description: str
    word_count: int


class ListWellKnownSetsUseCase:
    """Lists every bundled set, described in the user's native language."""

    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def execute(self, user_id: ULID) -> list[WellKnownSetSummary]:
        user = await load_user(self._repo, user_id)
        summaries = []
        for set_id in WellKnownSets:
            well_known_set = load_well_known_set(set_id)
            content = well_known_set.content_for(user.native_language)
            summaries.append(
                WellKnownSetSummary(
                    set_id=set_id,
                    level=well_known_set.level,
                    title=content.title,
                    description=content.description,
                    word_count=len(well_known_set.words),
                )
            )
        return summaries


class KanjiInfoUseCase:
    def __init__(self, dictionary: KanjiDictionary | None = None):
        self._dictionary = dictionary

    async def execute(self, kanji: str) -> KanjiInfo:
        return (self._dictionary or kanji_dictionary()).get_kanji_info(kanji)


class KanjiListUseCase:
    def __init__(self, dictionary: KanjiDictionary | None = None):
        self._dictionary = dictionary

    async def execute(self, level: JapaneseLevel) -> list[KanjiInfo]:
        return (self._dictionary or kanji_dictionary()).get_kanji_list(level)
