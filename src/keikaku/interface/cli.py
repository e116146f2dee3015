"""keikaku CLI: root commands and subgroup registration."""

import asyncio
import json
import logging
import sys
from collections.abc import Coroutine, Iterator
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import SecretStr

from keikaku import __version__
from keikaku.application.config import AppConfig, resolve_config
from keikaku.application.factory import get_llm_service, get_srs_service, get_user_repository
from keikaku.application.use_cases import (
    CompleteLessonUseCase,
    CreateCardUseCase,
    CreateKanjiCardUseCase,
    CreateUserUseCase,
    CreateVocabularyCardUseCase,
    DeleteCardUseCase,
    GetUserInfoUseCase,
    ImportWellKnownSetUseCase,
    KanjiInfoUseCase,
    KanjiListUseCase,
    ListUsersUseCase,
    ListWellKnownSetsUseCase,
    RateCardUseCase,
    SelectCardsToFixationUseCase,
    SelectCardsToLessonUseCase,
    UserInfo,
)
from keikaku.application.use_cases.common import load_user
from keikaku.domain import (
    Answer,
    JapaneseLevel,
    KeikakuError,
    LlmService,
    NativeLanguage,
    Question,
    Rating,
    StudyCard,
    VocabularyCard,
    parse_id,
)
from keikaku.domain.reference_data import WellKnownSets

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="keikaku: spaced-repetition study planner for Japanese.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_LOG_LEVELS = {0: logging.ERROR, 1: logging.WARNING, 2: logging.INFO}

# ---------------------------------------------------------------------------
# Subgroups
# ---------------------------------------------------------------------------

user_app = typer.Typer(help="Manage users.", no_args_is_help=True)
card_app = typer.Typer(help="Manage a user's cards.", no_args_is_help=True)
study_app = typer.Typer(help="Lessons, reviews and ratings.", no_args_is_help=True)
sets_app = typer.Typer(help="Bundled JLPT word sets.", no_args_is_help=True)
kanji_app = typer.Typer(help="Bundled kanji dictionary.", no_args_is_help=True)
config_app = typer.Typer(help="Manage keikaku configuration.", no_args_is_help=True)

app.add_typer(user_app, name="user")
app.add_typer(card_app, name="card")
app.add_typer(study_app, name="study")
app.add_typer(sets_app, name="sets")
app.add_typer(kanji_app, name="kanji")
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@contextmanager
def _errors() -> Iterator[None]:
    """Map domain errors to a red message and exit code 1."""
    try:
        yield
    except KeikakuError as e:
        logger.debug(f"Command failed: {e!r}")
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e


def _config(ctx: typer.Context) -> AppConfig:
    return ctx.obj["config"]


async def _with_llm(llm: LlmService, work: Coroutine[Any, Any, Any]) -> Any:
    try:
        return await work
    finally:
        await llm.close()


def _describe(study_card: StudyCard) -> str:
    card = study_card.card
    state = study_card.memory.current
    due = state.next_review_date.strftime("%Y-%m-%d %H:%M") if state else "new"
    return (
        f"{study_card.card_id}  [{card.kind.value}] {card.question().text} = "
        f"{card.answer().text}  ({due})"
    )


def _print_cards(cards: list[StudyCard], empty: str) -> None:
    if not cards:
        typer.secho(empty, fg="yellow")
        return
    for study_card in cards:
        typer.echo(_describe(study_card))


def _print_user(info: UserInfo) -> None:
    stats = info.stats
    typer.secho(f"{info.username} ({info.id})", bold=True)
    typer.echo(f"  Level: {info.current_level.value}  Language: {info.native_language.value}")
    typer.echo(
        f"  Cards: {stats.total_words} total, {stats.new_words} new, "
        f"{stats.in_progress_words} in progress, {stats.known_words} known, "
        f"{stats.high_difficulty_words} difficult"
    )
    if stats.avg_stability is not None:
        typer.echo(
            f"  Avg stability: {stats.avg_stability:.2f}d  "
            f"Avg difficulty: {stats.avg_difficulty:.2f}"
        )
    typer.echo(
        f"  Lessons today: {info.lessons_completed_today}  "
        f"Total study time: {info.total_study_duration}"
    )


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    data_dir: Annotated[
        Path | None, typer.Option(help="Directory holding user data.")
    ] = None,
):
    """Global settings for keikaku."""
    ctx.ensure_object(dict)
    try:
        config = resolve_config({"data_dir": data_dir})
    except ValueError as e:
        typer.secho(f"Invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(1) from e

    level = _LOG_LEVELS.get(config.verbose + verbose, logging.DEBUG)
    logging.getLogger().setLevel(level)
    ctx.obj["config"] = config


# ---------------------------------------------------------------------------
# user
# ---------------------------------------------------------------------------


@user_app.command("create")
def user_create(
    ctx: typer.Context,
    username: Annotated[str, typer.Argument(help="Display name.")],
    level: Annotated[str, typer.Option(help="Current JLPT level (N5..N1).")] = "N5",
    language: Annotated[str, typer.Option(help="Native language.")] = "english",
):
    """Register a new user."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        user = asyncio.run(
            CreateUserUseCase(repo).execute(
                username, JapaneseLevel.parse(level), NativeLanguage.parse(language)
            )
        )
    typer.secho(f"Created user {user.username}: {user.id}", fg="green")


@user_app.command("list")
def user_list(ctx: typer.Context):
    """List every user."""
    with _errors():
        users = asyncio.run(ListUsersUseCase(get_user_repository(_config(ctx))).execute())
    if not users:
        typer.secho("No users found.", fg="yellow")
        return
    for info in users:
        typer.echo(
            f"{info.id}  {info.username}  {info.current_level.value}  "
            f"{info.stats.total_words} cards"
        )


@user_app.command("show")
def user_show(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
):
    """Show a user's settings and knowledge summary."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        info = asyncio.run(GetUserInfoUseCase(repo).execute(parse_id(user_id)))
    _print_user(info)


# ---------------------------------------------------------------------------
# card
# ---------------------------------------------------------------------------


@card_app.command("add")
def card_add(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
    word: Annotated[str, typer.Argument(help="Japanese word (the question).")],
    meaning: Annotated[
        str | None,
        typer.Argument(help="Meaning (the answer). Asked from the configured LLM when omitted."),
    ] = None,
):
    """Add a vocabulary card."""
    config = _config(ctx)
    with _errors():
        repo = get_user_repository(config)
        if meaning is None:
            llm = get_llm_service(config)
            use_case = CreateVocabularyCardUseCase(repo, llm)
            study_card = asyncio.run(_with_llm(llm, use_case.execute(parse_id(user_id), word)))
            typer.echo(f"{study_card.card.question().text} = {study_card.card.answer().text}")
        else:
            card = VocabularyCard(word=Question(word), meaning=Answer(meaning))
            study_card = asyncio.run(CreateCardUseCase(repo).execute(parse_id(user_id), card))
    typer.secho(f"Added card {study_card.card_id}", fg="green")


@card_app.command("kanji")
def card_kanji(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
    kanji: Annotated[str, typer.Argument(help="Kanji from the bundled dictionary.")],
):
    """Add a kanji card built from the bundled dictionary."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        study_card = asyncio.run(CreateKanjiCardUseCase(repo).execute(parse_id(user_id), kanji))
    typer.secho(f"Added kanji card {study_card.card_id}", fg="green")


@card_app.command("delete")
def card_delete(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
    card_id: Annotated[str, typer.Argument(help="Card id.")],
):
    """Delete a card and its review history."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        asyncio.run(DeleteCardUseCase(repo).execute(parse_id(user_id), parse_id(card_id)))
    typer.secho(f"Deleted card {card_id}", fg="green")


@card_app.command("list")
def card_list(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
):
    """List every card of a user."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        user = asyncio.run(load_user(repo, parse_id(user_id)))
    cards = sorted(user.knowledge_set.study_cards.values(), key=lambda sc: sc.card_id)
    _print_cards(cards, "No cards found.")


# ---------------------------------------------------------------------------
# study
# ---------------------------------------------------------------------------


@study_app.command("lesson")
def study_lesson(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
    limit: Annotated[int | None, typer.Option(min=0, help="Maximum number of cards.")] = None,
):
    """Show new cards for the next lesson."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        cards = asyncio.run(
            SelectCardsToLessonUseCase(repo).execute(parse_id(user_id), limit=limit)
        )
    _print_cards(cards, "No new cards to learn.")


@study_app.command("due")
def study_due(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
    limit: Annotated[int | None, typer.Option(min=0, help="Maximum number of cards.")] = None,
):
    """Show cards due for review, then new cards."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        cards = asyncio.run(
            SelectCardsToFixationUseCase(repo).execute(parse_id(user_id), limit=limit)
        )
    _print_cards(cards, "Nothing to review.")


@study_app.command("rate")
def study_rate(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
    card_id: Annotated[str, typer.Argument(help="Card id.")],
    rating: Annotated[str, typer.Argument(help="again, hard, good, easy (or 1-4).")],
):
    """Record a review and schedule the card."""
    config = _config(ctx)
    with _errors():
        use_case = RateCardUseCase(get_user_repository(config), get_srs_service(config))
        study_card = asyncio.run(
            use_case.execute(parse_id(user_id), parse_id(card_id), Rating.parse(rating))
        )
    state = study_card.memory.current
    typer.secho(
        f"Next review {state.next_review_date.strftime('%Y-%m-%d %H:%M')} "
        f"(stability {state.stability.value:.2f}d, difficulty {state.difficulty.value:.2f})",
        fg="green",
    )


@study_app.command("complete")
def study_complete(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
    minutes: Annotated[float, typer.Option(min=0, help="Lesson duration in minutes.")] = 0.0,
):
    """Mark a lesson as completed."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        day = asyncio.run(
            CompleteLessonUseCase(repo).execute(parse_id(user_id), timedelta(minutes=minutes))
        )
    typer.secho(
        f"Lesson completed ({day.lessons_completed} today, {day.total_duration} studied)",
        fg="green",
    )


# ---------------------------------------------------------------------------
# sets / kanji
# ---------------------------------------------------------------------------


@sets_app.command("list")
def sets_list(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id (selects the description language).")],
):
    """List the bundled JLPT word sets."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        summaries = asyncio.run(ListWellKnownSetsUseCase(repo).execute(parse_id(user_id)))
    for summary in summaries:
        typer.secho(f"{summary.set_id.value}: {summary.title}", bold=True)
        typer.echo(f"  {summary.description} ({summary.word_count} words)")


@sets_app.command("import")
def sets_import(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
    set_id: Annotated[str, typer.Argument(help="Word set id, e.g. jlpt_n5.")],
):
    """Import a JLPT word set; meanings come from the configured LLM."""
    config = _config(ctx)
    with _errors():
        well_known_set = WellKnownSets.parse(set_id)
        uid = parse_id(user_id)
        llm = get_llm_service(config)
        use_case = ImportWellKnownSetUseCase(get_user_repository(config), llm)
        result = asyncio.run(_with_llm(llm, use_case.execute(uid, well_known_set)))

    for word, reason in result.failed:
        typer.secho(f"  {word}: {reason}", fg="red", err=True)
    typer.secho(
        f"Imported {result.created_count} words "
        f"({len(result.skipped_words)} skipped, {len(result.failed)} failed)",
        fg="yellow" if result.failed else "green",
    )
    if result.failed and not result.created_count:
        raise typer.Exit(1)


@kanji_app.command("show")
def kanji_show(kanji: Annotated[str, typer.Argument(help="A single kanji.")]):
    """Show a kanji dictionary entry."""
    with _errors():
        info = asyncio.run(KanjiInfoUseCase().execute(kanji))
    typer.secho(f"{info.kanji}  {info.level.value}  {info.stroke_count} strokes", bold=True)
    typer.echo(f"  {info.description}")
    if info.radicals:
        typer.echo(f"  Radicals: {' '.join(info.radicals)}")
    for word, meaning in info.example_words:
        typer.echo(f"  {word}: {meaning}")


@kanji_app.command("list")
def kanji_list(level: Annotated[str, typer.Option(help="JLPT level (N5..N1).")] = "N5"):
    """List dictionary kanji of one level."""
    with _errors():
        entries = asyncio.run(KanjiListUseCase().execute(JapaneseLevel.parse(level)))
    if not entries:
        typer.secho("No kanji for this level.", fg="yellow")
        return
    for info in entries:
        typer.echo(f"{info.kanji}  {info.description}")


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@app.command()
def version():
    """Print the keikaku version."""
    typer.echo(f"keikaku {__version__}")


# ---------------------------------------------------------------------------
# stats
# ---------------------------------------------------------------------------


@app.command()
def stats(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="User id.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show the daily study history."""
    with _errors():
        repo = get_user_repository(_config(ctx))
        user = asyncio.run(load_user(repo, parse_id(user_id)))
    history = user.knowledge_set.daily_history

    if json_output:
        typer.echo(
            json.dumps(
                [
                    {
                        "date": day.timestamp.date().isoformat(),
                        "lessons_completed": day.lessons_completed,
                        "total_words": day.total_words,
                        "new_words": day.new_words,
                        "in_progress_words": day.in_progress_words,
                        "known_words": day.known_words,
                        "high_difficulty_words": day.high_difficulty_words,
                        "avg_stability": day.avg_stability,
                        "avg_difficulty": day.avg_difficulty,
                        "total_duration_seconds": day.total_duration.total_seconds(),
                    }
                    for day in history
                ],
                indent=2,
            )
        )
        return

    for day in history:
        typer.echo(
            f"{day.timestamp.date().isoformat()}  lessons={day.lessons_completed}  "
            f"words={day.total_words}  known={day.known_words}  "
            f"in_progress={day.in_progress_words}  time={day.total_duration}"
        )


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    # SecretStr renders masked through str()
    d = {
        k: str(v) if isinstance(v, (Path, SecretStr)) else v
        for k, v in config.model_dump().items()
    }
    typer.echo(json.dumps(d, indent=2))


if __name__ == "__main__":
    app()
