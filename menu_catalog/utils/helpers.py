from menu_catalog.schemas.translation import Translation
from menu_catalog.utils.const import FallbackNames, Languages


def fallback_name(language_code: str) -> str:
    """
    Get the label shown for a category without a name.

    :param language_code: The language code.
    :return: The placeholder label in that language.
    """
    return FallbackNames.BY_LANGUAGE.get(language_code, FallbackNames.DEFAULT)


def display_name(name: Translation, language_code: str, primary: str = Languages.PRIMARY) -> str:
    """
    Get the name of the category in the specified language.

    Falls back to the primary language, then to a placeholder label.

    :param name: The category name.
    :param language_code: The language code.
    :param primary: The language used when the requested one is empty.
    :return: The name to display.
    """
    return name.get(language_code) or name.get(primary) or fallback_name(language_code)


def parse_languages(value: str | None) -> tuple:
    """
    Parse a comma-separated list of language codes.

    :param value: Raw value, e.g. ``"tr,en"``.
    :return: The language codes, or the defaults when the value is empty.
    """
    if not value:
        return Languages.DEFAULT

    languages = tuple(code.strip() for code in value.split(',') if code.strip())
    return languages or Languages.DEFAULT
