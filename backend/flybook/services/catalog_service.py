"""
FlyBook Backend: Catalog Service
==================================

Read-only access to packages, destinations and hotels. Each collection gets
its own CatalogService instance bound to a model; listing returns every
document (oldest first), fetching validates the id and raises NotFoundError
when absent.
"""

import logging
from typing import List, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flybook.exceptions import DatabaseError, NotFoundError
from flybook.models.catalog import CatalogDocumentMixin, Destination, Hotel, Package
from flybook.schemas.catalog import DocumentResponse
from flybook.services.identifiers import parse_identifier

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, model: Type[CatalogDocumentMixin], resource: str):
        self.model = model
        self.resource = resource

    async def list_documents(self, db: AsyncSession) -> List[DocumentResponse]:
        query = select(self.model).order_by(self.model.created_at.asc(), self.model.id.asc())
        try:
            result = await db.execute(query)
            documents = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing %s: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not retrieve {self.resource} records. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [DocumentResponse.from_model(document) for document in documents]

    async def get_document(self, db: AsyncSession, raw_id: str) -> DocumentResponse:
        document_id = parse_identifier(raw_id, resource=self.resource)
        try:
            result = await db.execute(select(self.model).where(self.model.id == document_id))
            document = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching %s %s: %s", self.resource, document_id, str(e))
            raise DatabaseError(
                message=f"Could not retrieve the {self.resource}. Please try again.",
                context={f"{self.resource}_id": str(document_id)},
            )

        if document is None:
            raise NotFoundError(resource=self.resource, resource_id=str(document_id))
        return DocumentResponse.from_model(document)


package_service = CatalogService(Package, "package")
destination_service = CatalogService(Destination, "destination")
hotel_service = CatalogService(Hotel, "hotel")
