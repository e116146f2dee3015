"""
Error taxonomy for keikaku.

Every failure the core can report is a KeikakuError subclass carrying the value
that caused it, so callers can branch on the kind (e.g. batch importers skip
DuplicateCard but report LlmError).
"""

from ulid import ULID


class KeikakuError(Exception):
    """Base class for all domain and collaborator errors."""


# ---------- Not found ----------


class UserNotFound(KeikakuError):
    def __init__(self, user_id: ULID):
        self.user_id = user_id
        super().__init__(f"User with id {user_id} not found")


class CardNotFound(KeikakuError):
    def __init__(self, card_id: ULID):
        self.card_id = card_id
        super().__init__(f"Card with id {card_id} not found")


# ---------- Duplicate ----------


class DuplicateCard(KeikakuError):
    def __init__(self, question: str):
        self.question = question
        super().__init__(f"Card with question '{question}' already exists")


# ---------- Validation and collaborator failures ----------


class ReasonError(KeikakuError):
    """An error described by a free-form reason."""

    label = "Error"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"{self.label}: {reason}")


class InvalidQuestion(ReasonError):
    label = "Invalid question"


class InvalidAnswer(ReasonError):
    label = "Invalid answer"


class InvalidStability(ReasonError):
    label = "Invalid stability"


class InvalidDifficulty(ReasonError):
    label = "Invalid difficulty"


class InvalidMemoryState(ReasonError):
    label = "Invalid memory state"


class InvalidValues(ReasonError):
    label = "Invalid values"


class SrsCalculationFailed(ReasonError):
    label = "SRS calculation failed"


class RepositoryError(ReasonError):
    label = "Repository error"


class LlmError(ReasonError):
    label = "LLM error"


class FuriganaError(ReasonError):
    label = "Furigana error"


class TranslationError(ReasonError):
    label = "Translation error"


class WellKnownSetError(ReasonError):
    label = "Well-known set error"
