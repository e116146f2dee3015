import pytest

from keikaku.domain import (
    Answer,
    CardKind,
    ExampleKanjiWord,
    ExamplePhrase,
    GrammarRuleCard,
    InvalidAnswer,
    InvalidQuestion,
    InvalidValues,
    JapaneseLevel,
    KanjiCard,
    NativeLanguage,
    Question,
    StudyCard,
    VocabularyCard,
)


class TestQuestionAnswer:
    def test_strips_text(self):
        assert Question("  猫 ").text == "猫"
        assert str(Answer(" cat ")) == "cat"

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_rejects_blank(self, text):
        with pytest.raises(InvalidQuestion):
            Question(text)
        with pytest.raises(InvalidAnswer):
            Answer(text)


class TestCardVariants:
    def test_vocabulary_projection(self):
        card = VocabularyCard(
            word=Question("猫"),
            meaning=Answer("cat"),
            example_phrases=[ExamplePhrase("猫がいる", "There is a cat")],
        )
        assert card.kind is CardKind.VOCABULARY
        assert card.question().text == "猫"
        assert card.answer().text == "cat"
        assert card.example_phrases == (ExamplePhrase("猫がいる", "There is a cat"),)

    def test_kanji_projection(self):
        card = KanjiCard(
            kanji=Question("日"),
            description=Answer("sun, day"),
            example_words=[ExampleKanjiWord("日本", "Japan")],
            radicals=["日"],
            stroke_count=4,
        )
        assert card.kind is CardKind.KANJI
        assert card.question().text == "日"
        assert card.radicals == ("日",)

    def test_kanji_card_requires_a_kanji(self):
        with pytest.raises(InvalidQuestion):
            KanjiCard(kanji=Question("ねこ"), description=Answer("cat"))

    def test_kanji_card_rejects_non_positive_stroke_count(self):
        with pytest.raises(InvalidValues):
            KanjiCard(kanji=Question("日"), description=Answer("sun"), stroke_count=0)

    def test_grammar_projection(self):
        card = GrammarRuleCard(
            title=Question("〜ている"),
            description=Answer("ongoing action"),
            attachment_rules="verb te-form + いる",
        )
        assert card.kind is CardKind.GRAMMAR
        assert card.question().text == "〜ている"
        assert card.answer().text == "ongoing action"
        assert card.examples == ()

    def test_cards_are_value_equal(self):
        assert VocabularyCard(Question("犬"), Answer("dog")) == VocabularyCard(
            Question("犬"), Answer("dog")
        )


class TestStudyCard:
    def test_new_study_card_has_empty_memory(self):
        study_card = StudyCard.new(VocabularyCard(Question("犬"), Answer("dog")))
        assert study_card.is_new
        assert study_card.memory.current is None

    def test_new_ids_increase(self):
        card = VocabularyCard(Question("犬"), Answer("dog"))
        ids = [StudyCard.new(card).card_id for _ in range(50)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 50


class TestEnums:
    def test_level_parse(self):
        assert JapaneseLevel.parse("n3") is JapaneseLevel.N3
        with pytest.raises(InvalidValues):
            JapaneseLevel.parse("N6")

    def test_language_parse(self):
        assert NativeLanguage.parse("Russian") is NativeLanguage.RUSSIAN
        with pytest.raises(InvalidValues):
            NativeLanguage.parse("klingon")
