"""Category and mark API endpoints.

Both tables share one shape, so a single router factory serves
/categories and /marks.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.products import product_to_response
from storefront.api.schemas import (
    ErrorResponse,
    NamedEntityResponse,
    NamedEntityWithProductsResponse,
    NameRequest,
    SuccessResponse,
)
from storefront.catalog.managers import CategoryManager, MarkManager, NamedEntityManager
from storefront.domain.exceptions import NotFoundError
from storefront.infrastructure.database import get_session


def create_named_entity_router(
    manager_class: type[NamedEntityManager],
    prefix: str,
    tag: str,
) -> APIRouter:
    """Build CRUD endpoints for a named-entity table.

    Args:
        manager_class: Manager bound to the table.
        prefix: URL prefix (e.g. "/categories").
        tag: OpenAPI tag.

    Returns:
        Configured router.
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    label = manager_class.label.lower()

    def get_manager(
        session: Annotated[AsyncSession, Depends(get_session)],
    ) -> NamedEntityManager:
        return manager_class(session)

    Manager = Annotated[NamedEntityManager, Depends(get_manager)]

    @router.get(
        "",
        response_model=SuccessResponse[list[NamedEntityResponse]],
        summary=f"List {tag.lower()}",
    )
    async def list_entities(manager: Manager) -> SuccessResponse[list[NamedEntityResponse]]:
        entities = await manager.get_all()
        return SuccessResponse(data=[NamedEntityResponse.model_validate(e) for e in entities])

    # Plain rows and rows with products serialize differently
    @router.get(
        "/{entity_id}",
        response_model=None,
        responses={
            200: {"model": SuccessResponse[NamedEntityWithProductsResponse]},
            404: {"model": ErrorResponse},
        },
        summary=f"Get {label}",
    )
    async def get_entity(
        entity_id: int,
        manager: Manager,
        include_products: Annotated[bool, Query(alias="includeProducts")] = False,
    ) -> SuccessResponse:
        entity = await manager.get_by_id(entity_id, include_products=include_products)
        if entity is None:
            raise NotFoundError("Resource not found", details={"id": entity_id})

        if include_products:
            return SuccessResponse(
                data=NamedEntityWithProductsResponse(
                    id=entity.id,
                    name=entity.name,
                    products=[product_to_response(p) for p in entity.products],
                )
            )
        return SuccessResponse(data=NamedEntityResponse.model_validate(entity))

    @router.post(
        "",
        response_model=SuccessResponse[NamedEntityResponse],
        status_code=status.HTTP_201_CREATED,
        responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        summary=f"Create {label}",
    )
    async def create_entity(
        body: NameRequest,
        manager: Manager,
    ) -> SuccessResponse[NamedEntityResponse]:
        entity = await manager.create(body.name)
        return SuccessResponse(data=NamedEntityResponse.model_validate(entity))

    @router.put(
        "/{entity_id}",
        response_model=SuccessResponse[NamedEntityResponse],
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
        },
        summary=f"Rename {label}",
    )
    async def update_entity(
        entity_id: int,
        body: NameRequest,
        manager: Manager,
    ) -> SuccessResponse[NamedEntityResponse]:
        entity = await manager.update(entity_id, body.name)
        return SuccessResponse(data=NamedEntityResponse.model_validate(entity))

    @router.delete(
        "/{entity_id}",
        response_model=SuccessResponse[NamedEntityResponse],
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        summary=f"Delete {label}",
        description=f"Delete a {label}. Fails with 409 while products still reference it.",
    )
    async def delete_entity(
        entity_id: int,
        manager: Manager,
    ) -> SuccessResponse[NamedEntityResponse]:
        entity = await manager.delete(entity_id)
        return SuccessResponse(data=NamedEntityResponse.model_validate(entity))

    return router


categories_router = create_named_entity_router(CategoryManager, "/categories", "Categories")
marks_router = create_named_entity_router(MarkManager, "/marks", "Marks")
