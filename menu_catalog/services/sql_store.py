from typing import List, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from menu_catalog.database import get_session
from menu_catalog.models import Category as CategoryModel, CategoryTranslation
from menu_catalog.schemas import Category, Translation
from menu_catalog.services.store import CategoryStore, OrderChange
from menu_catalog.utils.exceptions import BatchWriteError, NotFoundError, TransportError
from menu_catalog.utils.log import setup_logging

logger = setup_logging()

STORE_ERRORS = (SQLAlchemyError, OSError)


class SQLCategoryStore(CategoryStore):
    """
    Category store backed by SQLAlchemy async sessions.
    """

    def __init__(self, session_factory=None):
        """
        :param session_factory: Callable returning an async context manager that
            yields an ``AsyncSession``. Defaults to the shared engine's sessions.
        """
        self._session_factory = session_factory or get_session

    @staticmethod
    async def _get_row(session: AsyncSession, category_id: str) -> CategoryModel:
        result = await session.execute(
            select(CategoryModel)
            .options(joinedload(CategoryModel.translations))
            .where(CategoryModel.id == category_id)
        )
        row = result.unique().scalar_one_or_none()
        if row is None:
            logger.warning(f"Category with ID {category_id} not found in the store.")
            raise NotFoundError(category_id)
        return row

    async def list_categories(self, establishment_id: str) -> List[Category]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(CategoryModel)
                    .options(joinedload(CategoryModel.translations))
                    .where(CategoryModel.establishment_id == establishment_id)
                    .order_by(CategoryModel.order_index, CategoryModel.id)
                )
                rows = result.unique().scalars().all()
                return [Category.from_dict(row.to_dict()) for row in rows]
        except STORE_ERRORS as e:
            logger.error(f"Listing categories of {establishment_id} failed: {e}")
            raise TransportError(f"Could not list categories: {e}") from e

    async def insert_category(
        self, establishment_id: str, name: Translation, is_active: bool, order_index: int
    ) -> Category:
        try:
            async with self._session_factory() as session:
                row = CategoryModel(
                    establishment_id=establishment_id,
                    is_active=is_active,
                    order_index=order_index,
                    translations=[
                        CategoryTranslation(language_code=language_code, name=text)
                        for language_code, text in name.to_dict().items()
                    ]
                )
                session.add(row)
                await session.flush()
                category = Category.from_dict(row.to_dict())
                await session.commit()
                return category
        except STORE_ERRORS as e:
            logger.error(f"Inserting a category for {establishment_id} failed: {e}")
            raise TransportError(f"Could not insert category: {e}") from e

    async def update_category(self, category_id: str, name: Translation, is_active: bool) -> None:
        wanted = name.to_dict()
        try:
            async with self._session_factory() as session:
                row = await self._get_row(session, category_id)
                existing = {translation.language_code: translation for translation in row.translations}

                for language_code, text in wanted.items():
                    if language_code in existing:
                        existing[language_code].name = text
                    else:
                        row.translations.append(CategoryTranslation(language_code=language_code, name=text))

                for language_code, translation in existing.items():
                    if language_code not in wanted:
                        row.translations.remove(translation)

                row.is_active = is_active
                await session.commit()
        except STORE_ERRORS as e:
            logger.error(f"Updating category {category_id} failed: {e}")
            raise TransportError(f"Could not update category: {e}") from e

    @staticmethod
    async def _set_order_index(session: AsyncSession, category_id: str, order_index: int) -> None:
        result = await session.execute(
            update(CategoryModel)
            .where(CategoryModel.id == category_id)
            .values(order_index=order_index)
        )
        if result.rowcount == 0:
            raise NotFoundError(category_id)

    async def update_order_index(self, category_id: str, order_index: int) -> None:
        try:
            async with self._session_factory() as session:
                await self._set_order_index(session, category_id, order_index)
                await session.commit()
        except STORE_ERRORS as e:
            logger.error(f"Updating order index of category {category_id} failed: {e}")
            raise TransportError(f"Could not update order index: {e}") from e

    async def update_order_indexes(self, changes: Sequence[OrderChange]) -> None:
        """
        Write all changes in one transaction. Nothing persists on failure.
        """
        try:
            async with self._session_factory() as session:
                for category_id, order_index in changes:
                    await self._set_order_index(session, category_id, order_index)
                await session.commit()
        except NotFoundError as e:
            raise BatchWriteError(0, f"Order index batch rolled back: {e}") from e
        except STORE_ERRORS as e:
            logger.error(f"Order index batch of {len(changes)} change(s) failed: {e}")
            raise BatchWriteError(0, f"Order index batch rolled back: {e}") from e

    async def delete_category(self, category_id: str) -> None:
        try:
            async with self._session_factory() as session:
                row = await self._get_row(session, category_id)
                await session.delete(row)
                await session.commit()
        except STORE_ERRORS as e:
            logger.error(f"Deleting category {category_id} failed: {e}")
            raise TransportError(f"Could not delete category: {e}") from e
