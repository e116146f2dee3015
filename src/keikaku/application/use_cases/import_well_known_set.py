"""
Bulk import of a well-known word set (JLPT lists) into a user's knowledge set.

Each word becomes a vocabulary card with an LLM-generated meaning. The batch
never aborts on a single word: duplicates are skipped, other failures are
logged and reported back per word. The user is saved once at the end.
"""

import logging
from dataclasses import dataclass, field

from ulid import ULID

from keikaku.domain import (
    DuplicateCard,
    KeikakuError,
    LlmService,
    Question,
    UserRepository,
    VocabularyCard,
)
from keikaku.domain.reference_data import WellKnownSets, load_well_known_set

from .common import load_user
from .create_card import generate_meaning

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    created_count: int = 0
    skipped_words: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)  # (word, reason)


class ImportWellKnownSetUseCase:
    def __init__(self, repository: UserRepository, llm: LlmService):
        self._repo = repository
        self._llm = llm

    async def execute(self, user_id: ULID, set_id: WellKnownSets) -> ImportResult:
        user = await load_user(self._repo, user_id)
        well_known_set = load_well_known_set(set_id)
        result = ImportResult()

        for word in well_known_set.words:
            if user.knowledge_set.contains_question(word):
                logger.info(f"Skipping '{word}': already in the knowledge set")
                result.skipped_words.append(word)
                continue
            try:
                meaning = await generate_meaning(self._llm, word, user.native_language)
                user.create_card(VocabularyCard(word=Question(word), meaning=meaning))
            except DuplicateCard:
                logger.info(f"Skipping '{word}': already in the knowledge set")
                result.skipped_words.append(word)
                continue
            except KeikakuError as e:
                logger.error(f"Failed to import '{word}' from {set_id.value}: {e}")
                result.failed.append((word, str(e)))
                continue
            result.created_count += 1

        if result.created_count:
            await self._repo.save(user)
        logger.info(
            f"Imported {set_id.value} for user {user_id}: {result.created_count} created, "
            f"{len(result.skipped_words)} skipped, {len(result.failed)} failed"
        )
        return result
