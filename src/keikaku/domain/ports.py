"""
Ports (interfaces) for the collaborators around the knowledge core.

These define the contract that infrastructure adapters must implement.
Use cases depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta

from ulid import ULID

from .memory import MemoryState, Rating
from .user import User


@dataclass(frozen=True)
class ScheduledReview:
    """Outcome of one scheduling step: the next memory state and its interval."""

    memory_state: MemoryState
    interval: timedelta


class UserRepository(ABC):
    """
    Port for loading and saving whole User aggregates.

    Implementations:
        - InMemoryUserRepository: Snapshots kept in a dict (tests, demos).
        - FileUserRepository: One JSON document per user on disk.

    All failures surface as RepositoryError.
    """

    @abstractmethod
    async def list(self) -> list[User]:
        pass

    @abstractmethod
    async def find_by_id(self, user_id: ULID) -> User | None:
        pass

    @abstractmethod
    async def save(self, user: User) -> None:
        """
        Persist the user atomically.

        Raises RepositoryError if the stored user changed since this instance
        was loaded (at most one writer per user).
        """
        pass

    @abstractmethod
    async def delete(self, user_id: ULID) -> None:
        pass


class SrsService(ABC):
    """
    Port for the spaced-repetition calculator.

    Implementations:
        - FsrsSrsService: FSRS scheduler from the `fsrs` package.
    """

    @abstractmethod
    async def review(
        self,
        previous: MemoryState | None,
        last_reviewed_at: datetime | None,
        rating: Rating,
        now: datetime,
    ) -> ScheduledReview:
        """
        Compute the next memory state after rating an item at `now`.

        Args:
            previous: Current memory state, or None for a never-reviewed item.
            last_reviewed_at: Timestamp of the previous review, if any.
            rating: The user's recall judgment.
            now: Review time (timezone-aware, UTC).

        Raises:
            SrsCalculationFailed: If no next state can be produced.
        """
        pass


class LlmService(ABC):
    """
    Port for LLM-backed content generation. Failures surface as LlmError.

    Implementations:
        - OpenAiLlmService: Any OpenAI-compatible chat completions endpoint.
        - GeminiLlmService: Google's generateContent API.
    """

    @abstractmethod
    async def generate_text(self, prompt: str) -> str:
        pass

    async def close(self) -> None:
        """Release network resources held by the service."""
        pass
