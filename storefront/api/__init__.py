"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from storefront.api.health import router as health_router
from storefront.api.named_entities import categories_router, marks_router
from storefront.api.products import router as products_router
from storefront.api.upload import router as upload_router

__all__ = [
    "categories_router",
    "health_router",
    "marks_router",
    "products_router",
    "upload_router",
]
