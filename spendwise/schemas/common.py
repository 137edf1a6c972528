from typing import ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"
MONTH = r"^\d{4}-\d{2}$"
MAX_AMOUNT = 999_999_999_999


class RequestModel(BaseModel):
    """Request bodies arrive camelCased from the frontend."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PatchModel(RequestModel):
    """
    Partial update. Only keys present in the body take part; an explicit
    null only clears the fields listed in ``nullable``.
    """
    nullable: ClassVar[tuple] = ()

    def changes(self) -> dict:
        provided = self.model_dump(exclude_unset=True)
        return {
            field: value for field, value in provided.items()
            if value is not None or field in self.nullable
        }


class RowModel(BaseModel):
    """Response rows keep the snake_case column names."""
    model_config = ConfigDict(from_attributes=True)


def dump(schema, obj) -> dict:
    return schema.model_validate(obj).model_dump(mode="json")
