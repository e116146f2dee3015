"""
Read-only reference data shipped with the package.

Well-known word sets (JLPT lists) and the kanji dictionary are parsed from
YAML on first access and cached for the life of the process. Callers only
ever receive immutable values.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import cache
from importlib import resources
from types import MappingProxyType
from typing import Any

import yaml

from .errors import InvalidValues, WellKnownSetError
from .value_objects import JapaneseLevel, NativeLanguage

logger = logging.getLogger(__name__)

_DATA_PACKAGE = "keikaku.domain"
_DATA_DIR = "data"


class WellKnownSets(str, Enum):
    JLPT_N5 = "jlpt_n5"
    JLPT_N4 = "jlpt_n4"
    JLPT_N3 = "jlpt_n3"
    JLPT_N2 = "jlpt_n2"
    JLPT_N1 = "jlpt_n1"

    @classmethod
    def for_level(cls, level: JapaneseLevel) -> "WellKnownSets":
        return cls(f"jlpt_{level.value.lower()}")

    @classmethod
    def parse(cls, value: str) -> "WellKnownSets":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidValues(f"unknown word set '{value}'") from None


@dataclass(frozen=True)
class WellKnownSetContent:
    title: str
    description: str


@dataclass(frozen=True)
class WellKnownSet:
    level: JapaneseLevel
    words: tuple[str, ...]
    content: MappingProxyType  # NativeLanguage -> WellKnownSetContent

    def content_for(self, language: NativeLanguage) -> WellKnownSetContent:
        try:
            return self.content[language]
        except KeyError:
            raise WellKnownSetError(
                f"no {language.value} description for {self.level.value} set"
            ) from None


@dataclass(frozen=True)
class KanjiInfo:
    kanji: str
    level: JapaneseLevel
    description: str
    radicals: tuple[str, ...]
    stroke_count: int
    example_words: tuple[tuple[str, str], ...]  # (word, meaning)


def _read_yaml(filename: str) -> Any:
    resource = resources.files(_DATA_PACKAGE) / _DATA_DIR / filename
    try:
        text = resource.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError) as e:
        raise WellKnownSetError(f"cannot read {filename}: {e}") from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise WellKnownSetError(f"cannot parse {filename}: {e}") from e


@cache
def load_well_known_set(set_id: WellKnownSets) -> WellKnownSet:
    raw = _read_yaml(f"{set_id.value}.yaml")
    try:
        content = {
            NativeLanguage(lang): WellKnownSetContent(
                title=str(entry["title"]), description=str(entry["description"])
            )
            for lang, entry in raw["content"].items()
        }
        words = tuple(str(w).strip() for w in raw["words"] if str(w).strip())
        well_known_set = WellKnownSet(
            level=JapaneseLevel(raw["level"]),
            words=words,
            content=MappingProxyType(content),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise WellKnownSetError(f"malformed set {set_id.value}: {e}") from e

    logger.debug(f"Loaded well-known set {set_id.value} ({len(words)} words)")
    return well_known_set


class KanjiDictionary:
    """Kanji reference entries keyed by character."""

    def __init__(self, entries: dict[str, KanjiInfo]):
        self._entries = MappingProxyType(dict(entries))

    def get_kanji_info(self, kanji: str) -> KanjiInfo:
        try:
            return self._entries[kanji.strip()]
        except KeyError:
            raise InvalidValues(f"kanji '{kanji}' is not in the dictionary") from None

    def get_kanji_list(self, level: JapaneseLevel) -> list[KanjiInfo]:
        return [info for info in self._entries.values() if info.level == level]

    def __len__(self) -> int:
        return len(self._entries)


@cache
def kanji_dictionary() -> KanjiDictionary:
    raw = _read_yaml("kanji.yaml")
    entries: dict[str, KanjiInfo] = {}
    try:
        for kanji, entry in raw.items():
            entries[kanji] = KanjiInfo(
                kanji=kanji,
                level=JapaneseLevel(entry["level"]),
                description=str(entry["description"]),
                radicals=tuple(entry.get("radicals", [])),
                stroke_count=int(entry["stroke_count"]),
                example_words=tuple(
                    (str(ex["word"]), str(ex["meaning"]))
                    for ex in entry.get("example_words", [])
                ),
            )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise WellKnownSetError(f"malformed kanji dictionary: {e}") from e

    logger.debug(f"Loaded kanji dictionary ({len(entries)} entries)")
    return KanjiDictionary(entries)
