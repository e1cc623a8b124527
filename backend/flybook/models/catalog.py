"""
FlyBook Backend: Catalog Document Models
==========================================

What:  ORM models for the read-only collections: packages, destinations, hotels.
How:   Each row is an opaque JSON document plus a storage-assigned UUID.
       Nothing in the API reads inside `data`; it is returned as stored.

The three tables share one shape through CatalogDocumentMixin.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from flybook.database import Base


class CatalogDocumentMixin:
    """Columns shared by every read-only catalog table."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Storage-assigned identifier",
    )

    data: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Document body, returned verbatim with id merged in",
    )

    # Listing order only
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id})>"


class Package(CatalogDocumentMixin, Base):
    __tablename__ = "packages"


class Destination(CatalogDocumentMixin, Base):
    __tablename__ = "destinations"


class Hotel(CatalogDocumentMixin, Base):
    __tablename__ = "hotels"
