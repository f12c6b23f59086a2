from types import MappingProxyType
from typing import Annotated, Dict, Iterator, Mapping, Optional

from pydantic import StringConstraints, TypeAdapter, ValidationError

from menu_catalog.utils.const import Languages
from menu_catalog.utils.exceptions import TranslationError

LanguageCode = Annotated[str, StringConstraints(pattern=Languages.CODE_PATTERN)]
TranslationText = Annotated[str, StringConstraints(max_length=Languages.MAX_TEXT_LENGTH)]

_entries_adapter = TypeAdapter(Dict[LanguageCode, TranslationText])


def translate_validation_error(error: ValidationError) -> str:
    """
    Turn a pydantic ValidationError on translation entries into a readable message.

    :param error: The validation error.
    :return: One line per problem.
    """
    messages = []
    for err in error.errors():
        error_type = err['type']
        field = err['loc'][0] if err['loc'] else 'value'
        if error_type == 'string_pattern_mismatch':
            message = "The language code '{field}' should match the pattern '{pattern}'".format(
                field=field, pattern=err['ctx']['pattern']
            )
        elif error_type == 'string_too_long':
            message = "The '{field}' text must be at most {limit} characters long".format(
                field=field, limit=err['ctx']['max_length']
            )
        elif error_type == 'string_type':
            message = "The '{field}' entry must be a string".format(field=field)
        else:
            message = "Error: " + err['msg']
        messages.append(message)
    return "\n".join(messages)


def _validate(entries: Mapping[str, str]) -> Dict[str, str]:
    try:
        return _entries_adapter.validate_python(dict(entries))
    except ValidationError as e:
        raise TranslationError(translate_validation_error(e)) from e


class Translation:
    """
    Immutable mapping from language code to display text.

    A missing language and an empty text are the same thing: ``get`` returns
    ``""`` for both and equality ignores empty entries.
    """

    __slots__ = ('_entries',)

    def __init__(self, entries: Optional[Mapping[str, str]] = None):
        self._entries = MappingProxyType(_validate(entries or {}))

    @classmethod
    def _from_validated(cls, entries: Dict[str, str]) -> "Translation":
        translation = cls.__new__(cls)
        translation._entries = MappingProxyType(entries)
        return translation

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, str]]) -> "Translation":
        return cls(data)

    def get(self, language_code: str) -> str:
        """
        Get the text for a language.

        :param language_code: The language code.
        :return: The stored text, or an empty string.
        """
        return self._entries.get(language_code, '')

    def with_text(self, language_code: str, text: str) -> "Translation":
        """
        Return a copy with one language set. The original is unchanged.

        :param language_code: The language code.
        :param text: The new text; an empty string clears the language.
        :return: The new translation.
        """
        entry = _validate({language_code: text})
        return self._from_validated({**self._entries, **entry})

    @property
    def languages(self) -> tuple:
        """
        Language codes with non-empty text.
        """
        return tuple(code for code, text in self._entries.items() if text)

    def to_dict(self) -> Dict[str, str]:
        return {code: text for code, text in self._entries.items() if text}

    def __iter__(self) -> Iterator[str]:
        return iter(self.languages)

    def __len__(self) -> int:
        return len(self.languages)

    def __bool__(self) -> bool:
        return any(self._entries.values())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Translation):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(frozenset(self.to_dict().items()))

    def __repr__(self) -> str:
        return f"Translation({self.to_dict()!r})"
