"""Entity: Product."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(UTC)


class Product(BaseModel):
    """Product entity representing a product record.

    The identifier is assigned by the database on insert, so a freshly
    constructed product has ``id=None`` until it has been persisted.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int | None = Field(default=None, description="Database-assigned identifier")
    name: str = Field(description="Product name")
    code: str = Field(description="Product code")
    created_at: datetime | None = Field(
        default_factory=utcnow,
        alias="createdAt",
        description="Creation time (UTC)",
    )

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite and TIMESTAMP WITHOUT TIME ZONE hand back naive values
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.code == other.code
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.code,
        ))


def new_product(name: str, code: str) -> Product:
    """Build an unsaved product stamped with the current UTC time."""
    return Product(name=name, code=code, created_at=utcnow())
