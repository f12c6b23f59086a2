"""Contract of the remote store holding category rows."""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from menu_catalog.schemas import Category, Translation
from menu_catalog.utils.exceptions import BatchWriteError, CatalogError

OrderChange = Tuple[str, int]


class CategoryStore(ABC):
    """
    Row-level access to persisted categories. No business logic.

    Implementations raise ``TransportError`` when the store is unreachable
    and ``NotFoundError`` when a row does not exist.
    """

    @abstractmethod
    async def list_categories(self, establishment_id: str) -> List[Category]:
        """Lists an establishment's categories ordered by order index."""

    @abstractmethod
    async def insert_category(
        self, establishment_id: str, name: Translation, is_active: bool, order_index: int
    ) -> Category:
        """Inserts a row and returns it with its store-assigned id."""

    @abstractmethod
    async def update_category(self, category_id: str, name: Translation, is_active: bool) -> None:
        """Replaces the name and active flag of a row."""

    @abstractmethod
    async def update_order_index(self, category_id: str, order_index: int) -> None:
        """Sets the order index of a row."""

    @abstractmethod
    async def delete_category(self, category_id: str) -> None:
        """Deletes a row."""

    async def update_order_indexes(self, changes: Sequence[OrderChange]) -> None:
        """Applies several order index changes, in order.

        The default applies one row at a time. Stores that can write the
        whole batch atomically should override this.

        Raises:
            BatchWriteError: With the number of leading changes that persisted.
        """
        for applied, (category_id, order_index) in enumerate(changes):
            try:
                await self.update_order_index(category_id, order_index)
            except CatalogError as e:
                raise BatchWriteError(applied, f"Order index write for {category_id!r} failed: {e}") from e
