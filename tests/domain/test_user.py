from datetime import timedelta

import pytest

from conftest import NOW, memory_state, vocab

from keikaku.domain import (
    InvalidValues,
    JapaneseLevel,
    NativeLanguage,
    Rating,
    User,
    UserSettings,
    new_id,
)


def test_new_user_defaults(user):
    assert user.username == "hana"
    assert user.current_level is JapaneseLevel.N5
    assert user.native_language is NativeLanguage.ENGLISH
    assert user.settings == UserSettings(new_cards_per_lesson=10, fixation_cards_limit=50)
    assert len(user.knowledge_set) == 0


def test_blank_username_is_rejected():
    with pytest.raises(InvalidValues):
        User(new_id(), "  ", NativeLanguage.ENGLISH, JapaneseLevel.N5)


@pytest.mark.parametrize("kwargs", [{"new_cards_per_lesson": 0}, {"fixation_cards_limit": -1}])
def test_settings_must_be_positive(kwargs):
    with pytest.raises(InvalidValues):
        UserSettings(**kwargs)


def test_user_delegates_to_knowledge_set(user):
    study_card = user.create_card(vocab("猫"))
    user.rate_card(
        study_card.card_id, Rating.GOOD, timedelta(days=3), memory_state(), now=NOW
    )
    user.add_lesson_duration(timedelta(minutes=5), now=NOW)
    day = user.complete_lesson(now=NOW)

    assert day.in_progress_words == 1
    assert user.knowledge_set.total_study_duration == timedelta(minutes=5)

    user.delete_card(study_card.card_id)
    assert len(user.knowledge_set) == 0


def test_level_and_settings_updates(user):
    user.set_current_level(JapaneseLevel.N4)
    user.update_settings(UserSettings(new_cards_per_lesson=5))

    assert user.current_level is JapaneseLevel.N4
    assert user.settings.new_cards_per_lesson == 5
    assert user.settings.fixation_cards_limit == 50
