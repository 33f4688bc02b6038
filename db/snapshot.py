"""JSON codec for the persisted category snapshot.

The snapshot is a JSON array of ``{id, name, hours, colorId}`` objects,
readable by both the planner and the widget.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from db.errors import SnapshotDecodeError, SnapshotEncodeError
from models.category import Category


class CategoryRecord(BaseModel):
    """Wire form of a single category."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    hours: float = Field(ge=0, allow_inf_nan=False)
    color_id: str = Field(alias="colorId")

    @classmethod
    def from_category(cls, category: Category) -> "CategoryRecord":
        return cls(
            id=category.id,
            name=category.name,
            hours=category.hours,
            color_id=category.color_id,
        )

    def to_category(self) -> Category:
        return Category(
            id=self.id, name=self.name, hours=self.hours, color_id=self.color_id
        )


_SNAPSHOT_ADAPTER = TypeAdapter(List[CategoryRecord])


def encode_categories(categories: List[Category]) -> str:
    """Serialize categories to the snapshot JSON text.

    Raises:
        SnapshotEncodeError: If a category can't be represented.
    """
    try:
        records = [CategoryRecord.from_category(c) for c in categories]
        return _SNAPSHOT_ADAPTER.dump_json(records, by_alias=True).decode("utf-8")
    except (ValidationError, PydanticSerializationError) as e:
        raise SnapshotEncodeError(f"Failed to encode categories: {e}") from e


def decode_categories(data: str) -> List[Category]:
    """Parse snapshot JSON text back into categories, preserving order.

    Raises:
        SnapshotDecodeError: If the text isn't a valid snapshot.
    """
    try:
        records = _SNAPSHOT_ADAPTER.validate_json(data)
    except ValidationError as e:
        raise SnapshotDecodeError(f"Failed to decode categories: {e}") from e
    return [record.to_category() for record in records]
