"""Error taxonomy for the product service.

Every error a product handler can raise derives from ``ProductApiError``. The
HTTP layer does not distinguish between them: each one is reported to the
client as ``{"error": "<message>"}`` with status 400.
"""

from __future__ import annotations


class ProductApiError(Exception):
    """Base class for errors surfaced to API clients."""


class DecodeError(ProductApiError):
    """The request body is not valid JSON or does not match the expected shape."""


class IdParseError(ProductApiError):
    """The product id path segment is missing or not a base-10 integer."""


class ProductNotFoundError(ProductApiError):
    """No product row matches the requested id."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"product with ID {product_id} not found")
        self.product_id = product_id


class StorageError(ProductApiError):
    """The database driver or a query failed."""


class ConfigurationError(ValueError):
    """Raised when configuration is missing or invalid."""
