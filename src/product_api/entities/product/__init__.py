"""Entity package: Product."""

from .entity import Product, new_product
from .repository import ProductRepository, UpdateResult
from .table import ProductTable

__all__ = ["Product", "ProductRepository", "ProductTable", "UpdateResult", "new_product"]
