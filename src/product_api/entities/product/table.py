"""Product database table model."""

from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class ProductTable(SQLModel, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "product"

    # Integer primary key autoincrements (SERIAL on PostgreSQL)
    id: int | None = Field(default=None, primary_key=True)
    name: str | None = Field(default=None, max_length=50)
    code: str | None = Field(default=None, max_length=50)
    created_at: datetime | None = Field(
        default=None, sa_column=Column("createdAt", DateTime(timezone=False))
    )
