import pytest
from ulid import ULID

from conftest import vocab

from keikaku.application.use_cases import (
    CreateUserUseCase,
    GetUserInfoUseCase,
    ListUsersUseCase,
)
from keikaku.domain import JapaneseLevel, NativeLanguage, UserNotFound


@pytest.mark.asyncio
async def test_create_user_persists(repo):
    user = await CreateUserUseCase(repo).execute(
        "taro", JapaneseLevel.N4, NativeLanguage.RUSSIAN
    )

    stored = await repo.find_by_id(user.id)
    assert stored is not None
    assert stored.username == "taro"
    assert stored.native_language is NativeLanguage.RUSSIAN


@pytest.mark.asyncio
async def test_user_info_summarizes_knowledge(repo, saved_user):
    saved_user.create_card(vocab("猫"))
    saved_user.create_card(vocab("犬"))
    await repo.save(saved_user)

    info = await GetUserInfoUseCase(repo).execute(saved_user.id)

    assert info.username == "hana"
    assert info.stats.total_words == 2
    assert info.stats.new_words == 2
    assert info.new_cards_per_lesson == 10
    assert info.lessons_completed_today == 0


@pytest.mark.asyncio
async def test_user_info_unknown_user(repo):
    missing = ULID()
    with pytest.raises(UserNotFound) as exc:
        await GetUserInfoUseCase(repo).execute(missing)
    assert exc.value.user_id == missing


@pytest.mark.asyncio
async def test_list_users_in_creation_order(repo):
    create = CreateUserUseCase(repo)
    first = await create.execute("a", JapaneseLevel.N5, NativeLanguage.ENGLISH)
    second = await create.execute("b", JapaneseLevel.N5, NativeLanguage.ENGLISH)

    users = await ListUsersUseCase(repo).execute()

    assert [u.id for u in users] == [first.id, second.id]
