import pytest

from menu_catalog.schemas import Category, Translation
from menu_catalog.services import ordering
from menu_catalog.utils.exceptions import TransportError
from menu_catalog.utils.helpers import display_name, parse_languages


def test_category_round_trips_wire_shape():
    data = {"id": 7, "name": {"tr": "Çorbalar", "en": "Soups"}, "is_active": False, "order_index": 3}

    category = Category.from_dict(data)

    assert category.id == "7"
    assert category.name.get("en") == "Soups"
    assert category.to_dict() == {
        "id": "7",
        "name": {"tr": "Çorbalar", "en": "Soups"},
        "is_active": False,
        "order_index": 3,
    }


def test_category_with_null_name_has_empty_translation():
    category = Category.from_dict({"id": "1", "name": None, "order_index": 0})

    assert category.name == Translation()
    assert category.is_active is True


def test_malformed_row_is_a_transport_error():
    with pytest.raises(TransportError):
        Category.from_dict({"id": "1", "name": {}, "order_index": "first"})


def test_display_name_falls_back_to_primary_then_placeholder():
    name = Translation({"tr": "Çorbalar"})

    assert display_name(name, "en") == "Çorbalar"
    assert display_name(Translation({"en": "Soups"}), "en") == "Soups"
    assert display_name(Translation(), "tr") == "İsimsiz"
    assert display_name(Translation(), "en") == "Unnamed"


def test_parse_languages():
    assert parse_languages(None) == ("tr", "en")
    assert parse_languages(" en , de ,") == ("en", "de")
    assert parse_languages(" , ") == ("tr", "en")


def make(*indexes):
    return [Category(id=str(i), name=Translation(), order_index=index) for i, index in enumerate(indexes)]


def test_next_order_index():
    assert ordering.next_order_index([]) == 0
    assert ordering.next_order_index(make(0, 1, 5)) == 6


def test_dense_changes_keep_store_base():
    items = make(1, 2, 4)

    assert ordering.dense_changes(items) == [("2", 3)]


def test_removal_changes_shift_later_entries():
    items = make(0, 1, 2, 3)

    assert ordering.removal_changes(items, items[1]) == [("2", 1), ("3", 2)]
