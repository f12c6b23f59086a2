import pytest

from fakes import names
from menu_catalog.schemas import Translation
from menu_catalog.services.editor import EditorSession
from menu_catalog.utils.enums import EditorState
from menu_catalog.utils.exceptions import EditorClosedError, NotFoundError, SyncError

pytestmark = pytest.mark.anyio


async def test_new_session_creates_active_category(store, repository):
    session = EditorSession.open()
    assert session.target == EditorSession.NEW
    assert session.fields() == {"tr": "", "en": ""}

    session.set_field("tr", "Çorbalar")
    draft = session.set_field("en", "Soups")
    assert draft == Translation({"tr": "Çorbalar", "en": "Soups"})

    created = await session.commit(repository)

    assert session.state == EditorState.COMMITTED
    assert created.is_active is True
    assert repository.items == (created,)
    assert store.rows[created.id]["name"] == {"tr": "Çorbalar", "en": "Soups"}


async def test_edit_session_is_seeded_from_existing(store, repository):
    store.seed([
        {"id": "1", "name": {"tr": "Çorbalar"}, "order_index": 0},
        {"id": "2", "name": {"tr": "Salatalar"}, "is_active": False, "order_index": 1},
    ])
    await repository.load()
    existing = repository.get("2")

    session = EditorSession.open(existing)
    assert session.target_id == "2"
    assert session.fields() == {"tr": "Salatalar", "en": ""}

    session.set_field("en", "Salads")
    updated = await session.commit(repository)

    assert updated.is_active is False
    assert updated.order_index == 1
    assert existing.name == Translation({"tr": "Salatalar"})
    assert repository.get("2").name.get("en") == "Salads"


async def test_set_active_is_passed_on_commit(store, repository):
    store.seed(names("Çorbalar"))
    await repository.load()

    session = EditorSession.open(repository.get("1"))
    session.set_active(False)
    await session.commit(repository)

    assert repository.get("1").is_active is False


async def test_failed_commit_keeps_session_open(store, repository):
    session = EditorSession.open(languages=["tr"])
    session.set_field("tr", "Tatlılar")

    store.fail("insert_category")
    with pytest.raises(SyncError):
        await session.commit(repository)

    assert session.state == EditorState.OPEN
    assert repository.items == ()

    created = await session.commit(repository)
    assert created.name.get("tr") == "Tatlılar"


async def test_commit_for_removed_target_propagates_not_found(store, repository):
    store.seed(names("Çorbalar"))
    await repository.load()
    session = EditorSession.open(repository.get("1"))
    await repository.remove("1")

    with pytest.raises(NotFoundError):
        await session.commit(repository)


async def test_cancel_discards_draft_without_store_calls(store, repository):
    session = EditorSession.open()
    session.set_field("tr", "Çorbalar")

    session.cancel()

    assert session.state == EditorState.CANCELLED
    assert session.draft == Translation()
    assert store.calls == []
    with pytest.raises(EditorClosedError):
        session.set_field("en", "Soups")
    with pytest.raises(EditorClosedError):
        await session.commit(repository)


async def test_committed_session_is_consumed(repository):
    session = EditorSession.open()
    session.set_field("en", "Soups")
    await session.commit(repository)

    with pytest.raises(EditorClosedError):
        session.cancel()
    with pytest.raises(EditorClosedError):
        await session.commit(repository)


async def test_commit_is_final_even_if_a_listener_fails(store, repository):
    async def broken_listener(establishment_id, snapshot):
        raise RuntimeError("listener exploded")

    repository.subscribe(broken_listener)
    session = EditorSession.open()
    session.set_field("tr", "Çorbalar")

    await session.commit(repository)

    assert session.state == EditorState.COMMITTED
    with pytest.raises(EditorClosedError):
        await session.commit(repository)
    assert len(store.rows) == 1
