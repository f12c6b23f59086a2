import os

from menu_catalog.schemas import Category
from menu_catalog.services.cache import CategoryCache
from menu_catalog.services.category import CategoryRepository
from menu_catalog.services.sql_store import SQLCategoryStore
from menu_catalog.utils.exceptions import SyncError
from menu_catalog.utils.helpers import display_name, parse_languages
from menu_catalog.utils.log import setup_logging
from menu_catalog.utils.redis import close_redis, redis_configured
from menu_catalog.utils.tasks import database_test_connection

logger = setup_logging()


class Application:
    """
    Bootstrap the category catalog of one establishment.
    """

    def __init__(self) -> None:
        """
        Constructor.
        """
        establishment_id = os.getenv("ESTABLISHMENT_ID")
        if not establishment_id:
            raise RuntimeError("ESTABLISHMENT_ID is not set.")

        self.__languages = parse_languages(os.getenv("MENU_LANGUAGES"))
        self.__repository = CategoryRepository(SQLCategoryStore(), establishment_id)

        if redis_configured():
            self.__repository.subscribe(CategoryCache().publish)

    @property
    def repository(self) -> CategoryRepository:
        return self.__repository

    @property
    def languages(self) -> tuple:
        return self.__languages

    async def start(self) -> None:
        """
        Start the application.
        """
        try:
            if not await database_test_connection():
                logger.error("Database connection failed.")
                return

            categories = await self.__repository.load()
        except SyncError as e:
            logger.error(f"Could not load the catalog: {e}")
            return
        finally:
            await self.__shutdown()

        for category in categories:
            self.__log_category(category)

    def __log_category(self, category: Category) -> None:
        names = " / ".join(display_name(category.name, language_code) for language_code in self.__languages)
        status = "active" if category.is_active else "passive"
        logger.info(f"{category.order_index:>3}  {names}  [{status}]")

    @staticmethod
    async def __shutdown() -> None:
        from menu_catalog.database import dispose_engine

        await dispose_engine()
        await close_redis()
