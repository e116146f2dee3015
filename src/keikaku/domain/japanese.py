"""
Character classification and question normalization for Japanese text.

Reading-based equivalence (furigana) is provided by a text-analysis
collaborator; this module only covers what can be decided from code points.
"""

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def is_hiragana(char: str) -> bool:
    return "\u3040" <= char <= "\u309f"


def is_katakana(char: str) -> bool:
    return "\u30a0" <= char <= "\u30ff"


def is_kanji(char: str) -> bool:
    return (
        "\u4e00" <= char <= "\u9fff"
        or "\u3400" <= char <= "\u4dbf"
        or "\U00020000" <= char <= "\U0002a6df"
    )


def is_japanese(char: str) -> bool:
    return is_hiragana(char) or is_katakana(char) or is_kanji(char)


def is_japanese_text(text: str) -> bool:
    return bool(text) and all(is_japanese(c) for c in text)


def contains_japanese(text: str) -> bool:
    return any(is_japanese(c) for c in text)


def contains_kanji(text: str) -> bool:
    return any(is_kanji(c) for c in text)


def normalize_question(text: str) -> str:
    """
    Normalize question text for duplicate detection.

    NFKC folds full-width latin and half-width katakana onto their canonical
    forms, then whitespace is collapsed and case is folded.
    """
    normalized = unicodedata.normalize("NFKC", text)
    normalized = _WHITESPACE_RE.sub(" ", normalized).strip()
    return normalized.casefold()
