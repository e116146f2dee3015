from datetime import timedelta

from conftest import NOW, memory_state

from keikaku.domain import DailyHistoryItem, KnowledgeStats


def test_stats_of_empty_set():
    stats = KnowledgeStats.from_states([])
    assert stats.total_words == 0
    assert stats.avg_stability is None
    assert stats.avg_difficulty is None


def test_buckets_partition_the_total():
    states = [
        None,
        None,
        memory_state(stability=2.0, difficulty=8.0),
        memory_state(stability=25.0, difficulty=3.0),
        memory_state(stability=40.0, difficulty=9.0),
    ]
    stats = KnowledgeStats.from_states(states)

    assert stats.total_words == 5
    assert stats.new_words == 2
    assert stats.in_progress_words == 1
    assert stats.known_words == 2
    assert stats.new_words + stats.in_progress_words + stats.known_words == stats.total_words
    # High difficulty overlaps with the reviewed buckets.
    assert stats.high_difficulty_words == 2


def test_averages_cover_reviewed_cards_only():
    stats = KnowledgeStats.from_states([None, memory_state(2.0, 4.0), memory_state(4.0, 6.0)])
    assert stats.avg_stability == 3.0
    assert stats.avg_difficulty == 5.0


def test_update_counts_lessons():
    item = DailyHistoryItem(timestamp=NOW)
    stats = KnowledgeStats.from_states([memory_state()])

    item.update(stats)
    item.update(stats)

    assert item.lessons_completed == 2
    assert item.in_progress_words == 1
    assert not item.is_empty


def test_duration_accumulates_independently():
    item = DailyHistoryItem(timestamp=NOW)
    item.add_lesson_duration(timedelta(minutes=3))
    item.add_lesson_duration(timedelta(minutes=4))

    assert item.total_duration == timedelta(minutes=7)
    assert item.lessons_completed == 0
    assert not item.is_empty


def test_is_same_day_uses_utc_date():
    item = DailyHistoryItem(timestamp=NOW)
    assert item.is_same_day(NOW + timedelta(hours=11))
    assert not item.is_same_day(NOW + timedelta(hours=12))
