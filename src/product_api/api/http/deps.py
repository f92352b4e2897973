"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.product_api.api.http.app_data import ApplicationDependencies
from src.product_api.core.services import DbSessionService
from src.product_api.entities.product import ProductRepository
from src.product_api.runtime.config.config_data import ProductsConfig


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies the application was built with."""
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    return get_app_dependencies(request).database_service


def get_products_config(request: Request) -> ProductsConfig:
    """Get the product endpoint configuration."""
    return get_app_dependencies(request).config.products


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a database session tied to the current request lifecycle."""
    with database_service.session_scope() as session:
        yield session


def get_product_repository(
    session: Session = Depends(get_db_session),
) -> ProductRepository:
    return ProductRepository(session)
