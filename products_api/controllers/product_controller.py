from typing import List
from fastapi import Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from products_api.core.database import get_async_session
from products_api.core.exceptions import ProductNotFoundError
from products_api.core.routing import RouteSpec
from products_api.middleware.product_validator import product_request_body, validate_product_request
from products_api.models.product import Product
from products_api.schemas.product_schemas import ProductDeletedResponse, ProductPayload, ProductResponse
from products_api.services.product_service import product_service


def parse_product_id(raw: str) -> int:
    """Path ids are documented as strings; anything that is not a decimal integer names no product."""
    if not (raw.isascii() and raw.isdigit()):
        raise ProductNotFoundError(raw)
    return int(raw)


async def get_all_products(db: AsyncSession = Depends(get_async_session)) -> List[Product]:
    """Get all products"""
    return await product_service.list_products(db)


async def get_product_by_id(
    id: str = Path(..., description="Product id"),
    db: AsyncSession = Depends(get_async_session),
) -> Product:
    """Get a product by ID"""
    return await product_service.get_product(db, parse_product_id(id))


async def create_product(
    payload: ProductPayload = Depends(validate_product_request),
    db: AsyncSession = Depends(get_async_session),
) -> Product:
    """Create a new product"""
    return await product_service.create_product(db, payload)


async def update_product(
    id: str = Path(..., description="Product id"),
    payload: ProductPayload = Depends(validate_product_request),
    db: AsyncSession = Depends(get_async_session),
) -> Product:
    """Update a product by ID"""
    return await product_service.update_product(db, parse_product_id(id), payload)


async def delete_product(
    id: str = Path(..., description="Product id"),
    db: AsyncSession = Depends(get_async_session),
) -> ProductDeletedResponse:
    """Delete a product by ID"""
    deleted_id = await product_service.delete_product(db, parse_product_id(id))
    return ProductDeletedResponse(id=deleted_id)


# Every route is public; no authentication dependency is attached.
PRODUCT_ROUTES = (
    RouteSpec(
        method="GET",
        path="/products",
        endpoint=get_all_products,
        summary="Get all products",
        response_model=List[ProductResponse],
        response_description="A list of products",
        error_responses={500: "Server error"},
    ),
    RouteSpec(
        method="GET",
        path="/products/{id}",
        endpoint=get_product_by_id,
        summary="Get a product by ID",
        response_model=ProductResponse,
        response_description="A product",
        error_responses={404: "Product not found", 500: "Server error"},
    ),
    RouteSpec(
        method="POST",
        path="/products",
        endpoint=create_product,
        summary="Create a new product",
        status_code=status.HTTP_201_CREATED,
        response_model=ProductResponse,
        response_description="Product created",
        error_responses={400: "Invalid input", 500: "Server error"},
        pre_steps=(validate_product_request,),
        openapi_extra=product_request_body(),
    ),
    RouteSpec(
        method="PUT",
        path="/products/{id}",
        endpoint=update_product,
        summary="Update a product by ID",
        response_model=ProductResponse,
        response_description="Product updated",
        error_responses={400: "Invalid input", 404: "Product not found", 500: "Server error"},
        pre_steps=(validate_product_request,),
        openapi_extra=product_request_body(),
    ),
    RouteSpec(
        method="DELETE",
        path="/products/{id}",
        endpoint=delete_product,
        summary="Delete a product by ID",
        response_model=ProductDeletedResponse,
        response_description="Product deleted",
        error_responses={404: "Product not found", 500: "Server error"},
    ),
)
