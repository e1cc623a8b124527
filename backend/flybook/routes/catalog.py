"""
FlyBook Backend: Catalog Route Handlers
=========================================

Read-only GET /{collection} and GET /{collection}/{document_id} for
packages, destinations and hotels. One router per collection, built by
build_catalog_router() around that collection's CatalogService.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flybook.database import get_db_session
from flybook.schemas.catalog import DocumentResponse
from flybook.schemas.common import ErrorResponse
from flybook.services.catalog_service import (
    CatalogService,
    destination_service,
    hotel_service,
    package_service,
)


def build_catalog_router(collection: str, service: CatalogService) -> APIRouter:
    router = APIRouter(prefix=f"/{collection}", tags=[collection.capitalize()])

    @router.get(
        "",
        response_model=List[DocumentResponse],
        responses={500: {"description": "Server error", "model": ErrorResponse}},
        summary=f"List all {collection}",
    )
    async def list_documents(
        db: AsyncSession = Depends(get_db_session),
    ) -> List[DocumentResponse]:
        return await service.list_documents(db)

    @router.get(
        "/{document_id}",
        response_model=DocumentResponse,
        responses={
            400: {"description": "Malformed identifier", "model": ErrorResponse},
            404: {"description": "Not found", "model": ErrorResponse},
            500: {"description": "Server error", "model": ErrorResponse},
        },
        summary=f"Get a single {service.resource} by ID",
    )
    async def get_document(
        document_id: str,
        db: AsyncSession = Depends(get_db_session),
    ) -> DocumentResponse:
        return await service.get_document(db, document_id)

    return router


packages_router = build_catalog_router("packages", package_service)
destinations_router = build_catalog_router("destinations", destination_service)
hotels_router = build_catalog_router("hotels", hotel_service)
