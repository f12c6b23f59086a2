from contextlib import asynccontextmanager

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from menu_catalog.database import create_tables
from menu_catalog.schemas import Translation
from menu_catalog.services.category import CategoryRepository
from menu_catalog.services.sql_store import SQLCategoryStore
from menu_catalog.utils.exceptions import BatchWriteError, NotFoundError, SyncError, TransportError

pytestmark = pytest.mark.anyio


@pytest.fixture
async def sql_store():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_tables(engine)
    yield SQLCategoryStore(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


async def insert(store, establishment_id, order_index, **name):
    return await store.insert_category(establishment_id, Translation(name), True, order_index)


async def test_insert_assigns_id_and_list_orders_rows(sql_store):
    second = await insert(sql_store, "est-1", 1, tr="Salatalar")
    first = await insert(sql_store, "est-1", 0, tr="Çorbalar", en="Soups")
    await insert(sql_store, "est-2", 0, tr="Başka")

    categories = await sql_store.list_categories("est-1")

    assert first.id and second.id and first.id != second.id
    assert [category.id for category in categories] == [first.id, second.id]
    assert categories[0].name == Translation({"tr": "Çorbalar", "en": "Soups"})


async def test_update_category_replaces_translations(sql_store):
    category = await insert(sql_store, "est-1", 0, tr="Çorbalar", de="Suppen")

    await sql_store.update_category(category.id, Translation({"tr": "Çorba", "en": "Soups"}), False)

    [stored] = await sql_store.list_categories("est-1")
    assert stored.name.to_dict() == {"tr": "Çorba", "en": "Soups"}
    assert stored.is_active is False


async def test_update_missing_category(sql_store):
    with pytest.raises(NotFoundError):
        await sql_store.update_category("missing", Translation(), True)
    with pytest.raises(NotFoundError):
        await sql_store.update_order_index("missing", 1)
    with pytest.raises(NotFoundError):
        await sql_store.delete_category("missing")


async def test_order_index_batch_is_all_or_nothing(sql_store):
    first = await insert(sql_store, "est-1", 0, tr="A")
    second = await insert(sql_store, "est-1", 1, tr="B")

    with pytest.raises(BatchWriteError) as exc:
        await sql_store.update_order_indexes([(first.id, 1), ("missing", 5), (second.id, 0)])

    assert exc.value.applied == 0
    assert [category.id for category in await sql_store.list_categories("est-1")] == [first.id, second.id]

    await sql_store.update_order_indexes([(first.id, 1), (second.id, 0)])
    assert [category.id for category in await sql_store.list_categories("est-1")] == [second.id, first.id]


async def test_delete_category_removes_translations(sql_store):
    category = await insert(sql_store, "est-1", 0, tr="A")

    await sql_store.delete_category(category.id)

    assert await sql_store.list_categories("est-1") == []


async def test_unreachable_database_is_a_transport_error():
    @asynccontextmanager
    async def broken_session():
        raise OSError("connection refused")
        yield

    store = SQLCategoryStore(broken_session)

    with pytest.raises(TransportError):
        await store.list_categories("est-1")

    repository = CategoryRepository(store, "est-1")
    with pytest.raises(SyncError):
        await repository.load()


async def test_repository_scenarios_against_sql_store(sql_store):
    repository = CategoryRepository(sql_store, "est-1")
    await repository.load()

    soups = await repository.create(Translation({"tr": "Çorbalar"}))
    salads = await repository.create(Translation({"tr": "Salatalar"}))
    desserts = await repository.create(Translation({"tr": "Tatlılar"}))

    await repository.reorder(salads.id, 0)
    assert [(c.id, c.order_index) for c in repository] == [(salads.id, 0), (soups.id, 1), (desserts.id, 2)]

    await repository.remove(salads.id)
    await repository.load()
    assert [(c.id, c.order_index) for c in repository] == [(soups.id, 0), (desserts.id, 1)]
