"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .product import Product, ProductRepository, ProductTable, UpdateResult, new_product

__all__ = [
    "Product",
    "ProductRepository",
    "ProductTable",
    "UpdateResult",
    "new_product",
]
