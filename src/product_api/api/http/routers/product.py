"""Product API router with create, read and update operations.

Every route goes through ``InterceptedRoute``, so any error raised here is
logged and answered with ``{"error": "<message>"}`` and status 400.
"""

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from src.product_api.api.http.deps import (
    get_db_session,
    get_product_repository,
    get_products_config,
)
from src.product_api.api.http.middleware.interceptors import InterceptedRoute
from src.product_api.api.utils.paths import get_id
from src.product_api.core.exceptions import (
    DecodeError,
    ProductNotFoundError,
    StorageError,
)
from src.product_api.entities.product import Product, ProductRepository, new_product
from src.product_api.runtime.config.config_data import ProductsConfig

PRODUCT_FOUND_HEADER = "X-Product-Found"

router = APIRouter(route_class=InterceptedRoute, tags=["products"])


class CreateProductRequest(BaseModel):
    name: str = ""
    code: str = ""


class UpdateProductRequest(BaseModel):
    id: int | None = None
    name: str = ""
    code: str = ""


class GetProductsResponse(BaseModel):
    products: list[Product]


def _commit(session: Session) -> None:
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageError(f"could not commit transaction: {exc}") from exc


@router.get("/getProducts", response_model=GetProductsResponse, name="getProducts")
def get_products(
    repository: ProductRepository = Depends(get_product_repository),
) -> GetProductsResponse:
    """List all products."""
    return GetProductsResponse(products=repository.list_all())


@router.get("/getProduct/{product_id}", response_model=Product, name="getProduct")
def get_product(
    request: Request,
    repository: ProductRepository = Depends(get_product_repository),
) -> Product:
    """Get a product by ID."""
    product_id = get_id(request.url.path)
    return repository.get(product_id)


@router.post("/createProduct", response_model=Product, name="createProduct")
def create_product(
    payload: CreateProductRequest,
    repository: ProductRepository = Depends(get_product_repository),
    session: Session = Depends(get_db_session),
) -> Product:
    """Create a new product; the database assigns its id."""
    created_product = repository.create(new_product(payload.name, payload.code))
    _commit(session)
    return created_product


@router.api_route(
    "/updateProduct/{product_id}",
    methods=["PUT", "POST"],
    response_model=Product,
    name="updateProduct",
)
def update_product(
    request: Request,
    response: Response,
    payload: UpdateProductRequest,
    repository: ProductRepository = Depends(get_product_repository),
    session: Session = Depends(get_db_session),
    products_config: ProductsConfig = Depends(get_products_config),
) -> Product:
    """Overwrite name and code of an existing product."""
    product_id = get_id(request.url.path)
    if payload.id is not None and payload.id != product_id:
        raise DecodeError(
            f"body id {payload.id} does not match path id {product_id}"
        )

    result = repository.update(
        Product(id=product_id, name=payload.name, code=payload.code)
    )
    if not result.found and products_config.strict_updates:
        raise ProductNotFoundError(product_id)

    _commit(session)
    response.headers[PRODUCT_FOUND_HEADER] = "true" if result.found else "false"
    return result.product
