"""Pytest configuration and shared fixtures."""

import pytest

from fakes import ESTABLISHMENT_ID, InMemoryCategoryStore
from menu_catalog.schemas import Translation
from menu_catalog.services.category import CategoryRepository


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def store() -> InMemoryCategoryStore:
    return InMemoryCategoryStore()


@pytest.fixture
def repository(store) -> CategoryRepository:
    return CategoryRepository(store, ESTABLISHMENT_ID)


@pytest.fixture
def soups() -> Translation:
    return Translation({"tr": "Çorbalar", "en": "Soups"})
