import asyncio
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Awaitable, Callable, Iterator, List, Sequence, Tuple

from menu_catalog.schemas import Category, Translation
from menu_catalog.services import ordering
from menu_catalog.services.store import CategoryStore, OrderChange
from menu_catalog.utils.exceptions import (
    BatchWriteError,
    CatalogError,
    NotFoundError,
    PartialReorderError,
    StaleSnapshotError,
    SyncError,
)
from menu_catalog.utils.log import setup_logging

logger = setup_logging()

Snapshot = Tuple[Category, ...]
SnapshotListener = Callable[[str, Snapshot], Awaitable[None]]


class CategoryRepository:
    """
    Ordered snapshot of one establishment's categories, kept in sync with the store.

    The snapshot only ever holds state the store has confirmed. Writes are
    serialized: a second write issued while one is in flight waits for it
    (``asyncio.Lock`` wakes waiters in FIFO order). Reads run alongside
    writes, and a read that overlapped a write is issued again.
    """

    def __init__(self, store: CategoryStore, establishment_id: str):
        self._store = store
        self._establishment_id = establishment_id
        self._items: Snapshot = ()
        self._version = 0
        self._write_seq = 0
        self._needs_reload = False
        self._write_lock = asyncio.Lock()
        self._listeners: List[SnapshotListener] = []

    @property
    def establishment_id(self) -> str:
        return self._establishment_id

    @property
    def items(self) -> Snapshot:
        """
        The current snapshot, ordered by order index.
        """
        return self._items

    @property
    def version(self) -> int:
        """
        Incremented every time the snapshot is replaced.
        """
        return self._version

    @property
    def needs_reload(self) -> bool:
        """
        True after a partial reorder until the next successful load.
        """
        return self._needs_reload

    def get(self, category_id: str) -> Category:
        return self._items[self._position_of(category_id)]

    def __contains__(self, category_id: str) -> bool:
        return any(item.id == category_id for item in self._items)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def subscribe(self, listener: SnapshotListener) -> None:
        """
        Register a coroutine called with ``(establishment_id, snapshot)`` after each commit.
        """
        self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        self._listeners.remove(listener)

    def _position_of(self, category_id: str) -> int:
        for position, item in enumerate(self._items):
            if item.id == category_id:
                return position
        raise NotFoundError(category_id)

    async def _commit(self, items: Sequence[Category]) -> Snapshot:
        self._items = tuple(items)
        self._version += 1
        snapshot = self._items
        # The write is committed; listener failures must not reach its caller.
        for listener in list(self._listeners):
            try:
                await listener(self._establishment_id, snapshot)
            except Exception as e:
                logger.error(
                    f"Snapshot listener {listener!r} failed for {self._establishment_id}: {e}",
                    exc_info=True
                )
        return snapshot

    @asynccontextmanager
    async def _writing(self, ordering_change: bool = False):
        async with self._write_lock:
            if ordering_change and self._needs_reload:
                raise StaleSnapshotError(
                    "A previous reorder was only partially applied; load() before changing the order."
                )
            self._write_seq += 1
            yield

    async def load(self) -> Snapshot:
        """
        Replace the snapshot with the store's current categories.

        :raises SyncError: If the store cannot be read. The previous snapshot is kept.
        """
        while True:
            started = (self._version, self._write_seq)
            try:
                categories = await self._store.list_categories(self._establishment_id)
            except CatalogError as e:
                logger.error(f"Loading categories of {self._establishment_id} failed: {e}")
                raise SyncError(f"Could not load categories: {e}") from e

            if self._write_lock.locked():
                logger.debug("Discarding category read that overlaps a write in flight.")
                async with self._write_lock:
                    pass
                continue

            if (self._version, self._write_seq) != started:
                logger.debug("Discarding stale category read.")
                continue

            self._needs_reload = False
            snapshot = await self._commit(sorted(categories, key=lambda item: item.order_index))
            logger.info(f"Loaded {len(snapshot)} categories for {self._establishment_id}.")
            return snapshot

    async def create(self, name: Translation, is_active: bool = True) -> Category:
        """
        Append a new category after the last one.

        :raises SyncError: If the insert fails. The snapshot is unchanged.
        :raises StaleSnapshotError: If a reload is pending.
        """
        async with self._writing(ordering_change=True):
            order_index = ordering.next_order_index(self._items)
            try:
                created = await self._store.insert_category(self._establishment_id, name, is_active, order_index)
            except CatalogError as e:
                logger.error(f"Creating a category for {self._establishment_id} failed: {e}")
                raise SyncError(f"Could not create category: {e}") from e

            await self._commit([*self._items, created])
            logger.info(f"Created category {created.id} at order index {created.order_index}.")
            return created

    async def _apply_update(self, position: int, name: Translation, is_active: bool) -> Category:
        current = self._items[position]
        try:
            await self._store.update_category(current.id, name, is_active)
        except NotFoundError:
            logger.warning(f"Category {current.id} disappeared from the store.")
            raise
        except CatalogError as e:
            logger.error(f"Updating category {current.id} failed: {e}")
            raise SyncError(f"Could not update category: {e}") from e

        updated = replace(current, name=name, is_active=is_active)
        items = list(self._items)
        items[position] = updated
        await self._commit(items)
        logger.info(f"Updated category {updated.id}.")
        return updated

    async def update(self, category_id: str, name: Translation, is_active: bool) -> Category:
        """
        Replace the name and active flag of a category. Its position is kept.

        :raises NotFoundError: If the category is not in the snapshot or the store.
        :raises SyncError: If the write fails. The snapshot is unchanged.
        """
        async with self._writing():
            position = self._position_of(category_id)
            return await self._apply_update(position, name, is_active)

    async def set_active(self, category_id: str, is_active: bool) -> Category:
        async with self._writing():
            position = self._position_of(category_id)
            return await self._apply_update(position, self._items[position].name, is_active)

    async def toggle_active(self, category_id: str) -> Category:
        async with self._writing():
            position = self._position_of(category_id)
            current = self._items[position]
            return await self._apply_update(position, current.name, not current.is_active)

    async def _write_order(self, changes: List[OrderChange]) -> None:
        if not changes:
            return

        logger.debug(f"Writing {len(changes)} order index change(s): {changes}")
        try:
            await self._store.update_order_indexes(changes)
        except BatchWriteError as e:
            self._needs_reload = True
            logger.error(f"Order index batch stopped after {e.applied} of {len(changes)} change(s): {e}")
            raise PartialReorderError(changes[:e.applied]) from e
        except CatalogError as e:
            self._needs_reload = True
            logger.error(f"Order index batch failed: {e}")
            raise PartialReorderError([]) from e

    async def remove(self, category_id: str) -> None:
        """
        Delete a category and close the gap it leaves in the order.

        :raises NotFoundError: If the category is not in the snapshot or the store.
        :raises SyncError: If the delete fails. The snapshot is unchanged.
        :raises PartialReorderError: If the delete went through but renumbering did not.
        """
        async with self._writing(ordering_change=True):
            removed = self._items[self._position_of(category_id)]
            try:
                await self._store.delete_category(category_id)
            except NotFoundError:
                logger.warning(f"Category {category_id} was already gone from the store.")
                raise
            except CatalogError as e:
                logger.error(f"Deleting category {category_id} failed: {e}")
                raise SyncError(f"Could not delete category: {e}") from e

            changes = ordering.removal_changes(self._items, removed)
            await self._write_order(changes)

            remaining = [item for item in self._items if item.id != category_id]
            await self._commit(ordering.apply_changes(remaining, changes))
            logger.info(f"Removed category {category_id}; renumbered {len(changes)} entries.")

    async def reorder(self, category_id: str, new_position: int) -> Snapshot:
        """
        Move a category to ``new_position`` (zero-based, clamped to the list).

        Entries between the old and new position shift by one; the others keep
        their order index.

        :raises NotFoundError: If the category is not in the snapshot.
        :raises PartialReorderError: If only part of the renumbering persisted.
        """
        async with self._writing(ordering_change=True):
            old_position = self._position_of(category_id)
            new_position = ordering.clamp_position(new_position, len(self._items))
            if new_position == old_position:
                return self._items

            moved = ordering.move(self._items, old_position, new_position)
            changes = ordering.dense_changes(moved)
            await self._write_order(changes)

            snapshot = await self._commit(ordering.apply_changes(moved, changes))
            logger.info(f"Moved category {category_id} from position {old_position} to {new_position}.")
            return snapshot
