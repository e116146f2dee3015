import pytest

from keikaku.domain import InvalidValues, JapaneseLevel, NativeLanguage
from keikaku.domain.reference_data import (
    WellKnownSets,
    kanji_dictionary,
    load_well_known_set,
)


class TestWellKnownSets:
    @pytest.mark.parametrize("set_id", list(WellKnownSets))
    def test_every_bundled_set_loads(self, set_id):
        well_known_set = load_well_known_set(set_id)
        assert well_known_set.words
        assert set_id.value.endswith(well_known_set.level.value.lower())
        for language in NativeLanguage:
            assert well_known_set.content_for(language).title

    def test_for_level(self):
        assert WellKnownSets.for_level(JapaneseLevel.N3) is WellKnownSets.JLPT_N3

    def test_n5_contains_basic_words(self):
        words = load_well_known_set(WellKnownSets.JLPT_N5).words
        assert "猫" in words
        assert "犬" in words
        assert len(set(words)) == len(words)

    def test_loading_is_cached(self):
        assert load_well_known_set(WellKnownSets.JLPT_N5) is load_well_known_set(
            WellKnownSets.JLPT_N5
        )


class TestKanjiDictionary:
    def test_lookup(self):
        info = kanji_dictionary().get_kanji_info("日")
        assert info.level is JapaneseLevel.N5
        assert info.stroke_count == 4
        assert info.example_words

    def test_unknown_kanji(self):
        with pytest.raises(InvalidValues):
            kanji_dictionary().get_kanji_info("鬱")

    def test_list_by_level(self):
        n5 = kanji_dictionary().get_kanji_list(JapaneseLevel.N5)
        assert n5
        assert all(info.level is JapaneseLevel.N5 for info in n5)
