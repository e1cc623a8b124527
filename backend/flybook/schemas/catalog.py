"""
FlyBook Backend: Catalog Document Schema
==========================================

Packages, destinations and hotels are schemaless documents. The response
model pins down the one field the API guarantees (`id`) and passes every
other key through unchanged.
"""

import uuid

from pydantic import BaseModel, Field

from flybook.models.catalog import CatalogDocumentMixin


class DocumentResponse(BaseModel):
    """A catalog document with its storage identifier merged in."""
    id: uuid.UUID = Field(description="Document identifier (UUID)")

    model_config = {"extra": "allow"}

    @classmethod
    def from_model(cls, document: CatalogDocumentMixin) -> "DocumentResponse":
        # The stored body may carry a stale "id"/"_id" of its own; ours wins
        body = {k: v for k, v in (document.data or {}).items() if k not in ("id", "_id")}
        return cls.model_validate({**body, "id": document.id})
