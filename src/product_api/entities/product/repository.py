"""Product repository: the storage adapter between the API and the database."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.product_api.core.exceptions import ProductNotFoundError, StorageError

from .entity import Product
from .table import ProductTable


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an update: whether the row existed and the resulting record."""

    found: bool
    product: Product


def _to_storage_time(value: datetime | None) -> datetime | None:
    """TIMESTAMP columns are naive; store UTC wall-clock time."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class ProductRepository:
    """Data-access layer for products.

    The repository never commits; the caller owns the transaction. Driver
    failures roll back the session and surface as ``StorageError``.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _storage_error(self, action: str, exc: SQLAlchemyError) -> StorageError:
        self._session.rollback()
        logger.error("Product {} failed: {}", action, exc)
        return StorageError(f"could not {action} product: {exc}")

    @staticmethod
    def _to_entity(row: ProductTable) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            code=row.code,
            created_at=row.created_at,
        )

    def create(self, product: Product) -> Product:
        """Insert a product and return it with the database-assigned id.

        Any id already set on ``product`` is ignored.
        """
        row = ProductTable(
            name=product.name,
            code=product.code,
            created_at=_to_storage_time(product.created_at),
        )
        try:
            self._session.add(row)
            self._session.flush()
            self._session.refresh(row)
        except SQLAlchemyError as exc:
            raise self._storage_error("create", exc) from exc

        logger.debug("Created product {}", row.id)
        return self._to_entity(row)

    def list_all(self) -> list[Product]:
        """Return every product in the store's default order."""
        try:
            rows = self._session.exec(select(ProductTable)).all()
        except SQLAlchemyError as exc:
            raise self._storage_error("list", exc) from exc
        return [self._to_entity(row) for row in rows]

    def get(self, product_id: int) -> Product:
        """Return the product with ``product_id`` or raise ``ProductNotFoundError``."""
        try:
            row = self._session.get(ProductTable, product_id)
        except SQLAlchemyError as exc:
            raise self._storage_error("fetch", exc) from exc
        if row is None:
            raise ProductNotFoundError(product_id)
        return self._to_entity(row)

    def update(self, product: Product) -> UpdateResult:
        """Overwrite name and code of the row matching ``product.id``.

        The creation timestamp is left untouched. A missing row is reported
        through ``UpdateResult.found`` rather than raised.
        """
        try:
            row = self._session.get(ProductTable, product.id)
            if row is None:
                logger.info("Update skipped: product {} does not exist", product.id)
                echoed = product.model_copy(update={"created_at": None})
                return UpdateResult(found=False, product=echoed)

            row.name = product.name
            row.code = product.code
            self._session.add(row)
            self._session.flush()
            self._session.refresh(row)
        except SQLAlchemyError as exc:
            raise self._storage_error("update", exc) from exc

        return UpdateResult(found=True, product=self._to_entity(row))
