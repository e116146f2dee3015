"""
JSON-compatible snapshots of the User aggregate.

The snapshot is lossless: user_from_dict(user_to_dict(u)) rebuilds an equal
aggregate. Timestamps are ISO-8601 strings, durations are seconds.
"""

from datetime import datetime, timedelta
from typing import Any

from keikaku.domain import (
    Answer,
    Card,
    CardKind,
    DailyHistoryItem,
    Difficulty,
    ExampleKanjiWord,
    ExamplePhrase,
    GrammarRuleCard,
    JapaneseLevel,
    KanjiCard,
    KnowledgeSet,
    MemoryHistory,
    MemoryState,
    NativeLanguage,
    Question,
    Rating,
    ReviewLog,
    Stability,
    StudyCard,
    User,
    UserSettings,
    VocabularyCard,
    parse_id,
)

SCHEMA_VERSION = 1


# ---------- Cards ----------


def card_to_dict(card: Card) -> dict[str, Any]:
    match card:
        case VocabularyCard():
            return {
                "kind": card.kind.value,
                "word": card.word.text,
                "meaning": card.meaning.text,
                "example_phrases": [
                    {"text": p.text, "translation": p.translation} for p in card.example_phrases
                ],
            }
        case KanjiCard():
            return {
                "kind": card.kind.value,
                "kanji": card.kanji.text,
                "description": card.description.text,
                "example_words": [
                    {"word": w.word, "meaning": w.meaning} for w in card.example_words
                ],
                "radicals": list(card.radicals),
                "stroke_count": card.stroke_count,
            }
        case GrammarRuleCard():
            return {
                "kind": card.kind.value,
                "title": card.title.text,
                "description": card.description.text,
                "attachment_rules": card.attachment_rules,
                "examples": [{"text": p.text, "translation": p.translation} for p in card.examples],
            }
    raise TypeError(f"unsupported card type {type(card).__name__}")


def card_from_dict(data: dict[str, Any]) -> Card:
    kind = CardKind(data["kind"])
    if kind is CardKind.VOCABULARY:
        return VocabularyCard(
            word=Question(data["word"]),
            meaning=Answer(data["meaning"]),
            example_phrases=tuple(ExamplePhrase(**p) for p in data.get("example_phrases", [])),
        )
    if kind is CardKind.KANJI:
        return KanjiCard(
            kanji=Question(data["kanji"]),
            description=Answer(data["description"]),
            example_words=tuple(ExampleKanjiWord(**w) for w in data.get("example_words", [])),
            radicals=tuple(data.get("radicals", [])),
            stroke_count=data.get("stroke_count"),
        )
    return GrammarRuleCard(
        title=Question(data["title"]),
        description=Answer(data["description"]),
        attachment_rules=data.get("attachment_rules", ""),
        examples=tuple(ExamplePhrase(**p) for p in data.get("examples", [])),
    )


# ---------- Memory ----------


def memory_state_to_dict(state: MemoryState) -> dict[str, Any]:
    return {
        "stability": state.stability.value,
        "difficulty": state.difficulty.value,
        "next_review_date": state.next_review_date.isoformat(),
    }


def memory_state_from_dict(data: dict[str, Any]) -> MemoryState:
    return MemoryState(
        stability=Stability(data["stability"]),
        difficulty=Difficulty(data["difficulty"]),
        next_review_date=datetime.fromisoformat(data["next_review_date"]),
    )


def review_to_dict(review: ReviewLog) -> dict[str, Any]:
    return {
        "timestamp": review.timestamp.isoformat(),
        "rating": int(review.rating),
        "interval": review.interval.total_seconds(),
        "memory_state": memory_state_to_dict(review.memory_state),
    }


def review_from_dict(data: dict[str, Any]) -> ReviewLog:
    return ReviewLog(
        timestamp=datetime.fromisoformat(data["timestamp"]),
        rating=Rating(data["rating"]),
        interval=timedelta(seconds=data["interval"]),
        memory_state=memory_state_from_dict(data["memory_state"]),
    )


# ---------- Knowledge set ----------


def study_card_to_dict(study_card: StudyCard) -> dict[str, Any]:
    return {
        "card_id": str(study_card.card_id),
        "card": card_to_dict(study_card.card),
        "reviews": [review_to_dict(r) for r in study_card.memory.reviews],
    }


def study_card_from_dict(data: dict[str, Any]) -> StudyCard:
    return StudyCard(
        card_id=parse_id(data["card_id"]),
        card=card_from_dict(data["card"]),
        memory=MemoryHistory(review_from_dict(r) for r in data.get("reviews", [])),
    )


def daily_history_to_dict(item: DailyHistoryItem) -> dict[str, Any]:
    return {
        "timestamp": item.timestamp.isoformat(),
        "avg_stability": item.avg_stability,
        "avg_difficulty": item.avg_difficulty,
        "total_words": item.total_words,
        "new_words": item.new_words,
        "known_words": item.known_words,
        "in_progress_words": item.in_progress_words,
        "high_difficulty_words": item.high_difficulty_words,
        "lessons_completed": item.lessons_completed,
        "total_duration": item.total_duration.total_seconds(),
    }


def daily_history_from_dict(data: dict[str, Any]) -> DailyHistoryItem:
    fields = dict(data)
    fields["timestamp"] = datetime.fromisoformat(fields["timestamp"])
    fields["total_duration"] = timedelta(seconds=fields.get("total_duration", 0))
    return DailyHistoryItem(**fields)


def knowledge_set_to_dict(knowledge_set: KnowledgeSet) -> dict[str, Any]:
    return {
        "study_cards": [
            study_card_to_dict(sc)
            for sc in sorted(knowledge_set.study_cards.values(), key=lambda sc: sc.card_id)
        ],
        "history": [daily_history_to_dict(day) for day in knowledge_set.daily_history[:-1]],
        "current_day": daily_history_to_dict(knowledge_set.current_day),
    }


def knowledge_set_from_dict(data: dict[str, Any]) -> KnowledgeSet:
    current_day = data.get("current_day")
    return KnowledgeSet(
        study_cards=(study_card_from_dict(sc) for sc in data.get("study_cards", [])),
        history=(daily_history_from_dict(day) for day in data.get("history", [])),
        current_day=daily_history_from_dict(current_day) if current_day else None,
    )


# ---------- User ----------


def user_to_dict(user: User) -> dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "id": str(user.id),
        "username": user.username,
        "native_language": user.native_language.value,
        "current_level": user.current_level.value,
        "settings": {
            "new_cards_per_lesson": user.settings.new_cards_per_lesson,
            "fixation_cards_limit": user.settings.fixation_cards_limit,
        },
        "knowledge_set": knowledge_set_to_dict(user.knowledge_set),
    }


def user_from_dict(data: dict[str, Any]) -> User:
    return User(
        user_id=parse_id(data["id"]),
        username=data["username"],
        native_language=NativeLanguage(data["native_language"]),
        current_level=JapaneseLevel(data["current_level"]),
        settings=UserSettings(**data.get("settings", {})),
        knowledge_set=knowledge_set_from_dict(data.get("knowledge_set", {})),
    )
