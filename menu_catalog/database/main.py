"""
Configuration file to create (async) connection to the database.
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from menu_catalog.utils.singleton import SingletonMeta

# Read the environment variables.
load_dotenv()

Base = declarative_base()


# Create the engine.
class DatabaseEngine(metaclass=SingletonMeta):
    def __init__(self, url: Optional[str] = None):
        url = url or os.getenv("DATABASE_URL")
        if not url:
            raise RuntimeError("DATABASE_URL is not set.")

        self._engine = create_async_engine(
            url=url,
            future=True,
            echo=os.getenv("DATABASE_ECHO", "").lower() in ("1", "true", "yes")
        )
        self._sessionmaker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False
        )

    def get_engine(self) -> AsyncEngine:
        return self._engine

    def get_sessionmaker(self) -> async_sessionmaker:
        return self._sessionmaker


async def create_tables(engine: Optional[AsyncEngine] = None) -> None:
    """
    Create the tables that do not exist yet.
    """
    # Register the mapped classes on Base.metadata.
    import menu_catalog.models  # noqa: F401

    engine = engine or DatabaseEngine().get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def test_connection() -> None:
    """
    Test the connection to the database.
    """

    try:
        await create_tables()
    except Exception as e:
        raise RuntimeError(f"An error occurred while connecting to the database: {e}") from e


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """
    Get the session.
    """

    async with DatabaseEngine().get_sessionmaker()() as session:
        yield session


async def dispose_engine() -> None:
    """
    Close pooled connections of the shared engine.
    """
    await DatabaseEngine().get_engine().dispose()
