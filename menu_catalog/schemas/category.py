from dataclasses import dataclass
from typing import Any, Dict, Union

from pydantic import BaseModel, ValidationError, field_validator

from menu_catalog.schemas.translation import Translation
from menu_catalog.utils.exceptions import TransportError


class CategoryPayload(BaseModel):
    """
    Wire shape of a category row.

    :param id: Identifier assigned by the store
    :param name: Language code to text
    :param is_active: Visibility flag
    :param order_index: Position among the establishment's categories
    """

    id: str
    name: Dict[str, str] = {}
    is_active: bool = True
    order_index: int

    @field_validator('id', mode='before')
    @classmethod
    def id_as_string(cls, v: Union[str, int]) -> str:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('name', mode='before')
    @classmethod
    def name_defaults_to_empty(cls, v):
        return v if v is not None else {}


@dataclass(frozen=True)
class Category:
    """
    A named, orderable, toggleable menu category.
    """

    id: str
    name: Translation
    is_active: bool = True
    order_index: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        """
        Build a category from a store row.

        :raises TransportError: If the row does not have the expected shape.
        """
        try:
            payload = CategoryPayload.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"Malformed category row: {e}") from e

        return cls(
            id=payload.id,
            name=Translation(payload.name),
            is_active=payload.is_active,
            order_index=payload.order_index,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name.to_dict(),
            'is_active': self.is_active,
            'order_index': self.order_index,
        }
