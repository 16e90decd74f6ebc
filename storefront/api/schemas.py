"""API schemas for the Storefront API.

Pydantic models for request/response validation and serialization.
Field names travel as camelCase on the wire.
"""

from datetime import datetime
from decimal import Decimal
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model using camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================================
# Envelope Schemas
# ============================================================================


class SuccessResponse(BaseModel, Generic[T]):
    """Successful response envelope."""

    success: Literal[True] = True
    data: T


class ErrorResponse(BaseModel):
    """Failed response envelope.

    All API errors follow this format for consistency.
    """

    success: Literal[False] = False
    error: str = Field(..., description="Human-readable error message")


# ============================================================================
# Category / Mark Schemas
# ============================================================================


class NameRequest(CamelModel):
    """Request to create or rename a category or mark."""

    name: str = Field(..., max_length=255, description="Unique name")


class NamedEntityResponse(CamelModel):
    """Category or mark."""

    id: int = Field(..., description="Identifier")
    name: str = Field(..., description="Unique name")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductCreateRequest(CamelModel):
    """Request to create a product.

    name, price, categoryId and markId are required; the catalog rules
    report a missing one as a bad request.
    """

    name: str | None = Field(default=None, max_length=255, description="Unique product name")
    description: str | None = Field(default=None, description="Product description")
    price: Decimal | None = Field(default=None, description="Non-negative price")
    stock: int | None = Field(default=None, description="Quantity on hand (default 0)")
    category_id: int | None = Field(default=None, description="Category identifier")
    mark_id: int | None = Field(default=None, description="Mark identifier")


class ProductUpdateRequest(CamelModel):
    """Partial product update; omitted fields keep their values."""

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: Decimal | None = None
    stock: int | None = None
    category_id: int | None = None
    mark_id: int | None = None


class ProductResponse(CamelModel):
    """Product row."""

    id: int
    name: str
    description: str | None = None
    price: float
    stock: int
    category_id: int
    mark_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FullProductResponse(ProductResponse):
    """Product with its category and mark embedded."""

    category: NamedEntityResponse | None = None
    mark: NamedEntityResponse | None = None


class NamedEntityWithProductsResponse(NamedEntityResponse):
    """Category or mark with the products that reference it."""

    products: list[ProductResponse] = Field(default_factory=list)


# ============================================================================
# Upload Schemas
# ============================================================================


class ImportReportResponse(CamelModel):
    """Result of a CSV upload."""

    message: str
    rows: int
    products_created: int
    products_updated: int
    categories_created: int
    marks_created: int
