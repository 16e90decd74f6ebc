"""Product API endpoints.

Provides CRUD endpoints for products and advertisement generation.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.advert.generator import AdvertFormat, AdvertGenerator
from storefront.advert.projection import ProductAdvertProjection
from storefront.advert.providers import get_text_provider
from storefront.api.schemas import (
    ErrorResponse,
    FullProductResponse,
    NamedEntityResponse,
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
    SuccessResponse,
)
from storefront.catalog.managers import FullProduct, ProductData, ProductManager
from storefront.catalog.models import Product
from storefront.infrastructure.database import get_session

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_product_manager(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProductManager:
    """Get product manager bound to the request session."""
    return ProductManager(session)


def get_advert_generator() -> AdvertGenerator:
    """Get advert generator backed by the configured provider."""
    return AdvertGenerator(get_text_provider())


Manager = Annotated[ProductManager, Depends(get_product_manager)]


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: Product) -> ProductResponse:
    """Convert Product row to response schema."""
    return ProductResponse.model_validate(product)


def full_product_to_response(full: FullProduct) -> FullProductResponse:
    """Convert FullProduct view to response schema."""
    return FullProductResponse(
        **product_to_response(full.product).model_dump(),
        category=NamedEntityResponse.model_validate(full.category) if full.category else None,
        mark=NamedEntityResponse.model_validate(full.mark) if full.mark else None,
    )


def request_to_data(body: ProductCreateRequest | ProductUpdateRequest) -> ProductData:
    """Convert request body to manager input."""
    return ProductData(
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category_id=body.category_id,
        mark_id=body.mark_id,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=SuccessResponse[list[ProductResponse]],
    summary="List products",
)
async def list_products(manager: Manager) -> SuccessResponse[list[ProductResponse]]:
    """List all products.

    Returns:
        Every product, without relations.
    """
    products = await manager.get_all()
    return SuccessResponse(data=[product_to_response(p) for p in products])


@router.get(
    "/advert/{product_id}",
    response_model=SuccessResponse[str],
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Generate product advertisement",
    description="Generate persuasive advertisement copy for a product as plain text or HTML.",
)
async def generate_advert(
    product_id: int,
    manager: Manager,
    generator: Annotated[AdvertGenerator, Depends(get_advert_generator)],
    advert_format: Annotated[AdvertFormat, Query(alias="format")] = AdvertFormat.TEXT,
) -> SuccessResponse[str]:
    """Generate an advertisement.

    Loads the product with its mark and category, projects it and asks
    the text-generation provider for copy.

    Args:
        product_id: Product identifier.
        manager: Product manager.
        generator: Advert generator.
        advert_format: "text" or "html".

    Returns:
        Sanitized advertisement text.

    Raises:
        NotFoundError: If the product does not exist.
        AdvertGenerationError: If no advertisement could be produced.
    """
    full = await manager.get_by_id(product_id, expand=True)
    projection = ProductAdvertProjection.build(full.product, full.mark, full.category)

    advert = await generator.generate(projection, advert_format)
    return SuccessResponse(data=advert)


# Bare and expanded products serialize differently
@router.get(
    "/{product_id}",
    response_model=None,
    responses={
        200: {"model": SuccessResponse[FullProductResponse]},
        404: {"model": ErrorResponse},
    },
    summary="Get product",
)
async def get_product(
    product_id: int,
    manager: Manager,
    full_product: Annotated[bool, Query(alias="fullProduct")] = False,
) -> SuccessResponse:
    """Get a product by ID.

    Args:
        product_id: Product identifier.
        manager: Product manager.
        full_product: Whether to embed the category and mark.

    Returns:
        Product details.
    """
    result = await manager.get_by_id(product_id, expand=full_product)

    if isinstance(result, FullProduct):
        return SuccessResponse(data=full_product_to_response(result))
    return SuccessResponse(data=product_to_response(result))


@router.post(
    "",
    response_model=SuccessResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create product",
)
async def create_product(
    body: ProductCreateRequest,
    manager: Manager,
) -> SuccessResponse[ProductResponse]:
    """Create a product.

    Args:
        body: Product fields.
        manager: Product manager.

    Returns:
        Created product.
    """
    product = await manager.create(request_to_data(body))
    return SuccessResponse(data=product_to_response(product))


@router.put(
    "/{product_id}",
    response_model=SuccessResponse[ProductResponse],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update product",
    description="Partially update a product. Omitted or null fields keep their current values.",
)
async def update_product(
    product_id: int,
    body: ProductUpdateRequest,
    manager: Manager,
) -> SuccessResponse[ProductResponse]:
    """Update a product.

    Args:
        product_id: Product identifier.
        body: Fields to change.
        manager: Product manager.

    Returns:
        Updated product.
    """
    product = await manager.update(product_id, request_to_data(body))
    return SuccessResponse(data=product_to_response(product))


@router.delete(
    "/{product_id}",
    response_model=SuccessResponse[ProductResponse],
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(
    product_id: int,
    manager: Manager,
) -> SuccessResponse[ProductResponse]:
    """Delete a product.

    Args:
        product_id: Product identifier.
        manager: Product manager.

    Returns:
        The deleted product.
    """
    product = await manager.delete(product_id)
    return SuccessResponse(data=product_to_response(product))
