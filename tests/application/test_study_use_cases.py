from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from ulid import ULID

from conftest import NOW, vocab

from keikaku.application.use_cases import (
    CompleteLessonUseCase,
    CreateCardUseCase,
    RateCardUseCase,
    SelectCardsToFixationUseCase,
    SelectCardsToLessonUseCase,
)
from keikaku.domain import (
    CardNotFound,
    InvalidValues,
    Rating,
    SrsCalculationFailed,
    SrsService,
    UserSettings,
)
from keikaku.infrastructure.persistence import user_to_dict


async def add_cards(repo, user_id, words):
    create = CreateCardUseCase(repo)
    return [await create.execute(user_id, vocab(word)) for word in words]


class TestRateCard:
    @pytest.mark.asyncio
    async def test_rating_records_review(self, repo, saved_user, fake_srs):
        (card,) = await add_cards(repo, saved_user.id, ["猫"])

        rated = await RateCardUseCase(repo, fake_srs).execute(
            saved_user.id, card.card_id, Rating.GOOD, now=NOW
        )

        assert rated.memory.current.stability.value == 3.0
        assert rated.memory.reviews[0].interval == timedelta(days=3)
        stored = await repo.find_by_id(saved_user.id)
        stats = stored.knowledge_set.knowledge_stats()
        assert stats.new_words == 0
        assert stats.in_progress_words == 1

    @pytest.mark.asyncio
    async def test_scheduler_sees_previous_state(self, repo, saved_user, fake_srs):
        (card,) = await add_cards(repo, saved_user.id, ["猫"])
        use_case = RateCardUseCase(repo, fake_srs)

        await use_case.execute(saved_user.id, card.card_id, Rating.GOOD, now=NOW)
        await use_case.execute(
            saved_user.id, card.card_id, Rating.EASY, now=NOW + timedelta(days=3)
        )

        previous, last_reviewed_at, rating, now = fake_srs.calls[1]
        assert previous.stability.value == 3.0
        assert last_reviewed_at == NOW
        assert rating is Rating.EASY
        assert now == NOW + timedelta(days=3)

    @pytest.mark.asyncio
    async def test_unknown_card_leaves_user_unchanged(self, repo, saved_user, fake_srs):
        await add_cards(repo, saved_user.id, ["猫"])
        before = user_to_dict(await repo.find_by_id(saved_user.id))

        with pytest.raises(CardNotFound):
            await RateCardUseCase(repo, fake_srs).execute(saved_user.id, ULID(), Rating.GOOD)

        assert user_to_dict(await repo.find_by_id(saved_user.id)) == before
        assert fake_srs.calls == []

    @pytest.mark.asyncio
    async def test_scheduler_failure_leaves_history_unchanged(self, repo, saved_user):
        (card,) = await add_cards(repo, saved_user.id, ["猫"])
        failing = AsyncMock(spec=SrsService)
        failing.review.side_effect = ArithmeticError("overflow")
        before = user_to_dict(await repo.find_by_id(saved_user.id))

        with pytest.raises(SrsCalculationFailed):
            await RateCardUseCase(repo, failing).execute(
                saved_user.id, card.card_id, Rating.AGAIN, now=NOW
            )

        stored = await repo.find_by_id(saved_user.id)
        assert stored.knowledge_set.get_card(card.card_id).memory.is_new
        assert user_to_dict(stored) == before

    @pytest.mark.asyncio
    async def test_srs_calculation_failed_propagates(self, repo, saved_user):
        (card,) = await add_cards(repo, saved_user.id, ["猫"])
        failing = AsyncMock(spec=SrsService)
        failing.review.side_effect = SrsCalculationFailed("bad state")

        with pytest.raises(SrsCalculationFailed) as exc:
            await RateCardUseCase(repo, failing).execute(
                saved_user.id, card.card_id, Rating.GOOD, now=NOW
            )
        assert exc.value.reason == "bad state"


class TestSelectCards:
    @pytest.mark.asyncio
    async def test_lesson_limit_comes_from_settings(self, repo, saved_user):
        saved_user.update_settings(UserSettings(new_cards_per_lesson=2))
        await repo.save(saved_user)
        cards = await add_cards(repo, saved_user.id, ["猫", "犬", "鳥"])

        lesson = await SelectCardsToLessonUseCase(repo).execute(saved_user.id)

        assert [sc.card_id for sc in lesson] == [cards[0].card_id, cards[1].card_id]

    @pytest.mark.asyncio
    async def test_explicit_limit_wins(self, repo, saved_user):
        await add_cards(repo, saved_user.id, ["猫", "犬", "鳥"])
        lesson = await SelectCardsToLessonUseCase(repo).execute(saved_user.id, limit=1)
        assert len(lesson) == 1

    @pytest.mark.asyncio
    async def test_zero_limit_selects_nothing(self, repo, saved_user):
        await add_cards(repo, saved_user.id, ["猫", "犬", "鳥"])

        lesson = await SelectCardsToLessonUseCase(repo).execute(saved_user.id, limit=0)
        fixation = await SelectCardsToFixationUseCase(repo).execute(
            saved_user.id, now=NOW, limit=0
        )

        assert lesson == []
        assert fixation == []

    @pytest.mark.asyncio
    async def test_fixation_returns_due_then_new(self, repo, saved_user, fake_srs):
        reviewed, new = await add_cards(repo, saved_user.id, ["猫", "犬"])
        await RateCardUseCase(repo, fake_srs).execute(
            saved_user.id, reviewed.card_id, Rating.AGAIN, now=NOW
        )

        before_due = await SelectCardsToFixationUseCase(repo).execute(saved_user.id, now=NOW)
        after_due = await SelectCardsToFixationUseCase(repo).execute(
            saved_user.id, now=NOW + timedelta(days=2)
        )

        assert [sc.card_id for sc in before_due] == [new.card_id]
        assert [sc.card_id for sc in after_due] == [reviewed.card_id, new.card_id]


class TestCompleteLesson:
    @pytest.mark.asyncio
    async def test_complete_lesson_updates_today(self, repo, saved_user, fake_srs):
        (card,) = await add_cards(repo, saved_user.id, ["猫"])
        await RateCardUseCase(repo, fake_srs).execute(
            saved_user.id, card.card_id, Rating.GOOD, now=NOW
        )

        day = await CompleteLessonUseCase(repo).execute(
            saved_user.id, timedelta(minutes=15), now=NOW
        )

        assert day.lessons_completed == 1
        assert day.in_progress_words == 1
        assert day.total_duration == timedelta(minutes=15)
        stored = await repo.find_by_id(saved_user.id)
        assert stored.knowledge_set.current_day.lessons_completed == 1

    @pytest.mark.asyncio
    async def test_negative_duration(self, repo, saved_user):
        with pytest.raises(InvalidValues):
            await CompleteLessonUseCase(repo).execute(saved_user.id, timedelta(minutes=-1))
