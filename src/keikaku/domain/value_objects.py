from dataclasses import dataclass
from enum import Enum

from .errors import InvalidAnswer, InvalidQuestion, InvalidValues


@dataclass(frozen=True)
class Question:
    text: str

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text.strip():
            raise InvalidQuestion("question text must not be empty")
        object.__setattr__(self, "text", self.text.strip())

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Answer:
    text: str

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text.strip():
            raise InvalidAnswer("answer text must not be empty")
        object.__setattr__(self, "text", self.text.strip())

    def __str__(self) -> str:
        return self.text


class JapaneseLevel(str, Enum):
    """JLPT level, from easiest (N5) to hardest (N1)."""

    N5 = "N5"
    N4 = "N4"
    N3 = "N3"
    N2 = "N2"
    N1 = "N1"

    @classmethod
    def parse(cls, value: str) -> "JapaneseLevel":
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidValues(f"unknown JLPT level '{value}'") from None


class NativeLanguage(str, Enum):
    ENGLISH = "english"
    RUSSIAN = "russian"

    @classmethod
    def parse(cls, value: str) -> "NativeLanguage":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidValues(f"unsupported native language '{value}'") from None
