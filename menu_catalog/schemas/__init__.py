from menu_catalog.schemas.translation import Translation
from menu_catalog.schemas.category import Category, CategoryPayload

__all__ = ['Translation', 'Category', 'CategoryPayload']
