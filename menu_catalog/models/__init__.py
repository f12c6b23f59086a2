from menu_catalog.models.category import Category
from menu_catalog.models.category_translation import CategoryTranslation

__all__ = ['Category', 'CategoryTranslation']
