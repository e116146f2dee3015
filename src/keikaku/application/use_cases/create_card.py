"""
Card creation use cases.

CreateCardUseCase stores a ready-made card. The vocabulary and kanji variants
build the card first: vocabulary asks the LLM for a meaning in the user's
native language, kanji reads the bundled dictionary.
"""

import logging

from ulid import ULID

from keikaku.domain import (
    Answer,
    Card,
    DuplicateCard,
    ExampleKanjiWord,
    KanjiCard,
    KeikakuError,
    LlmError,
    LlmService,
    NativeLanguage,
    Question,
    StudyCard,
    UserRepository,
    VocabularyCard,
)
from keikaku.domain.reference_data import KanjiDictionary, kanji_dictionary

from .common import load_user

logger = logging.getLogger(__name__)

_MEANING_PROMPTS = {
    NativeLanguage.ENGLISH: (
        "Give a short English meaning for the Japanese word '{word}'. "
        "Answer with the meaning only, without explanations."
    ),
    NativeLanguage.RUSSIAN: (
        "Дай краткое значение японского слова '{word}' на русском языке. "
        "Ответь только значением, без пояснений."
    ),
}


def meaning_prompt(word: str, language: NativeLanguage) -> str:
    return _MEANING_PROMPTS[language].format(word=word)


async def generate_meaning(llm: LlmService, word: str, language: NativeLanguage) -> Answer:
    """
    Ask the LLM for a meaning and wrap it as an Answer.

    Raises:
        LlmError: If the service fails or returns nothing usable.
    """
    try:
        text = await llm.generate_text(meaning_prompt(word, language))
    except KeikakuError:
        raise
    except Exception as e:
        logger.error(f"LLM request failed for '{word}': {e}")
        raise LlmError(str(e)) from e

    if not text or not text.strip():
        raise LlmError(f"empty meaning returned for '{word}'")
    return Answer(text)


class CreateCardUseCase:
    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def execute(self, user_id: ULID, card: Card) -> StudyCard:
        user = await load_user(self._repo, user_id)
        study_card = user.create_card(card)
        await self._repo.save(user)
        logger.info(
            f"Created {card.kind.value} card '{card.question().text}' "
            f"({study_card.card_id}) for user {user_id}"
        )
        return study_card


class CreateVocabularyCardUseCase:
    def __init__(self, repository: UserRepository, llm: LlmService):
        self._repo = repository
        self._llm = llm

    async def execute(self, user_id: ULID, word: str) -> StudyCard:
        user = await load_user(self._repo, user_id)
        question = Question(word)
        # Checked up front so a duplicate never costs an LLM call.
        if user.knowledge_set.contains_question(question.text):
            raise DuplicateCard(question.text)

        meaning = await generate_meaning(self._llm, question.text, user.native_language)
        study_card = user.create_card(VocabularyCard(word=question, meaning=meaning))
        await self._repo.save(user)
        logger.info(f"Created vocabulary card '{question.text}' for user {user_id}")
        return study_card


def kanji_card_from_dictionary(kanji: str, dictionary: KanjiDictionary) -> KanjiCard:
    info = dictionary.get_kanji_info(kanji)
    return KanjiCard(
        kanji=Question(info.kanji),
        description=Answer(info.description),
        example_words=tuple(
            ExampleKanjiWord(word=word, meaning=meaning) for word, meaning in info.example_words
        ),
        radicals=info.radicals,
        stroke_count=info.stroke_count,
    )


class CreateKanjiCardUseCase:
    def __init__(self, repository: UserRepository, dictionary: KanjiDictionary | None = None):
        self._repo = repository
        self._dictionary = dictionary

    async def execute(self, user_id: ULID, kanji: str) -> StudyCard:
        user = await load_user(self._repo, user_id)
        dictionary = self._dictionary or kanji_dictionary()
        card = kanji_card_from_dictionary(kanji, dictionary)
        study_card = user.create_card(card)
        await self._repo.save(user)
        logger.info(f"Created kanji card '{card.kanji.text}' for user {user_id}")
        return study_card
