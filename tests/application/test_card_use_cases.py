from unittest.mock import AsyncMock

import pytest
from ulid import ULID

from conftest import vocab

from keikaku.application.use_cases import (
    CreateCardUseCase,
    CreateKanjiCardUseCase,
    CreateVocabularyCardUseCase,
    DeleteCardUseCase,
)
from keikaku.domain import (
    CardNotFound,
    DuplicateCard,
    InvalidValues,
    JapaneseLevel,
    KanjiCard,
    LlmError,
    LlmService,
    NativeLanguage,
    User,
    UserNotFound,
)
from keikaku.infrastructure.persistence import user_to_dict


@pytest.fixture
def mock_llm():
    llm = AsyncMock(spec=LlmService)
    llm.generate_text.return_value = "  cat \n"
    return llm


async def snapshot(repo, user_id):
    return user_to_dict(await repo.find_by_id(user_id))


class TestCreateCard:
    @pytest.mark.asyncio
    async def test_create_card_persists(self, repo, saved_user):
        study_card = await CreateCardUseCase(repo).execute(saved_user.id, vocab("猫", "cat"))

        stored = await repo.find_by_id(saved_user.id)
        assert study_card.card_id in stored.knowledge_set
        assert stored.knowledge_set.get_card(study_card.card_id).card.answer().text == "cat"

    @pytest.mark.asyncio
    async def test_duplicate_leaves_user_unchanged(self, repo, saved_user):
        use_case = CreateCardUseCase(repo)
        await use_case.execute(saved_user.id, vocab("猫"))
        before = await snapshot(repo, saved_user.id)

        with pytest.raises(DuplicateCard):
            await use_case.execute(saved_user.id, vocab("猫", "kitty"))

        assert await snapshot(repo, saved_user.id) == before

    @pytest.mark.asyncio
    async def test_unknown_user(self, repo):
        with pytest.raises(UserNotFound):
            await CreateCardUseCase(repo).execute(ULID(), vocab("猫"))


class TestCreateVocabularyCard:
    @pytest.mark.asyncio
    async def test_meaning_comes_from_llm(self, repo, saved_user, mock_llm):
        study_card = await CreateVocabularyCardUseCase(repo, mock_llm).execute(
            saved_user.id, "猫"
        )

        assert study_card.card.answer().text == "cat"
        prompt = mock_llm.generate_text.await_args.args[0]
        assert "'猫'" in prompt
        assert "English" in prompt

    @pytest.mark.asyncio
    async def test_prompt_uses_native_language(self, repo, mock_llm):
        user = User.new("ivan", JapaneseLevel.N5, NativeLanguage.RUSSIAN)
        await repo.save(user)

        await CreateVocabularyCardUseCase(repo, mock_llm).execute(user.id, "犬")

        assert "русском" in mock_llm.generate_text.await_args.args[0]

    @pytest.mark.asyncio
    async def test_duplicate_is_detected_before_llm_call(self, repo, saved_user, mock_llm):
        await CreateCardUseCase(repo).execute(saved_user.id, vocab("猫"))

        with pytest.raises(DuplicateCard):
            await CreateVocabularyCardUseCase(repo, mock_llm).execute(saved_user.id, " 猫 ")

        mock_llm.generate_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_llm_failure_is_wrapped_and_nothing_saved(self, repo, saved_user, mock_llm):
        mock_llm.generate_text.side_effect = RuntimeError("rate limited")
        before = await snapshot(repo, saved_user.id)

        with pytest.raises(LlmError) as exc:
            await CreateVocabularyCardUseCase(repo, mock_llm).execute(saved_user.id, "猫")

        assert "rate limited" in str(exc.value)
        assert await snapshot(repo, saved_user.id) == before

    @pytest.mark.asyncio
    async def test_empty_llm_answer(self, repo, saved_user, mock_llm):
        mock_llm.generate_text.return_value = "   "
        with pytest.raises(LlmError):
            await CreateVocabularyCardUseCase(repo, mock_llm).execute(saved_user.id, "猫")


class TestCreateKanjiCard:
    @pytest.mark.asyncio
    async def test_card_is_built_from_dictionary(self, repo, saved_user):
        study_card = await CreateKanjiCardUseCase(repo).execute(saved_user.id, "日")

        card = study_card.card
        assert isinstance(card, KanjiCard)
        assert card.kanji.text == "日"
        assert card.stroke_count == 4
        assert card.example_words

    @pytest.mark.asyncio
    async def test_unknown_kanji(self, repo, saved_user):
        with pytest.raises(InvalidValues):
            await CreateKanjiCardUseCase(repo).execute(saved_user.id, "鬱")


class TestDeleteCard:
    @pytest.mark.asyncio
    async def test_delete_card(self, repo, saved_user):
        study_card = await CreateCardUseCase(repo).execute(saved_user.id, vocab("猫"))

        await DeleteCardUseCase(repo).execute(saved_user.id, study_card.card_id)

        stored = await repo.find_by_id(saved_user.id)
        assert len(stored.knowledge_set) == 0

    @pytest.mark.asyncio
    async def test_unknown_card_leaves_user_unchanged(self, repo, saved_user):
        await CreateCardUseCase(repo).execute(saved_user.id, vocab("猫"))
        before = await snapshot(repo, saved_user.id)

        with pytest.raises(CardNotFound):
            await DeleteCardUseCase(repo).execute(saved_user.id, ULID())

        assert await snapshot(repo, saved_user.id) == before
