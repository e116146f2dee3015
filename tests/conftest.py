from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from keikaku.domain import (
    Answer,
    Difficulty,
    JapaneseLevel,
    MemoryState,
    NativeLanguage,
    Question,
    ScheduledReview,
    Stability,
    User,
    VocabularyCard,
)
from keikaku.infrastructure.persistence import InMemoryUserRepository

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def vocab(word: str, meaning: str = "meaning") -> VocabularyCard:
    return VocabularyCard(word=Question(word), meaning=Answer(meaning))


def memory_state(
    stability: float = 3.0,
    difficulty: float = 5.0,
    due: datetime = NOW + timedelta(days=3),
) -> MemoryState:
    return MemoryState(
        stability=Stability(stability),
        difficulty=Difficulty(difficulty),
        next_review_date=due,
    )


class FakeSrs:
    """Deterministic scheduler: stability grows with the rating, due = now + stability days."""

    def __init__(self):
        self.calls = []

    async def review(self, previous, last_reviewed_at, rating, now):
        self.calls.append((previous, last_reviewed_at, rating, now))
        base = previous.stability.value if previous else 1.0
        stability = base * int(rating)
        interval = timedelta(days=stability)
        return ScheduledReview(
            memory_state=memory_state(stability, 5.0, now + interval),
            interval=interval,
        )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def data_dir(tmp_path, mock_home, monkeypatch):
    d = tmp_path / "data"
    d.mkdir()
    monkeypatch.setenv("KEIKAKU_DATA_DIR", str(d))
    return d


@pytest.fixture
def user():
    return User.new("hana", JapaneseLevel.N5, NativeLanguage.ENGLISH)


@pytest.fixture
def repo():
    return InMemoryUserRepository()


@pytest_asyncio.fixture
async def saved_user(repo, user):
    await repo.save(user)
    return await repo.find_by_id(user.id)


@pytest.fixture
def fake_srs():
    return FakeSrs()
