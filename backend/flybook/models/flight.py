"""
FlyBook Backend: Flight SQLAlchemy Model
==========================================

What:  ORM model representing the `flights` table.
Who:   Used by FlightService for search and CRUD, and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key: storage-assigned, validated at the API boundary
    - "from" / "to" / "class": kept as the column names clients filter on;
      mapped to from_ / to / cabin_class since two of them are Python keywords
    - stops: categorical string ("0", "1", "2+"), matched by set membership
    - price: float, the sort key for every listing
    - status / created_at: derived on insert, never taken from the caller

    Index on price: every listing is ORDER BY price ASC.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from flybook.database import Base

DEFAULT_STATUS = "Active"


class Flight(Base):
    """
    A bookable flight offer.

    Query Patterns:
        - Search: WHERE (from ILIKE :q OR to ILIKE :q) AND stops IN (...) AND class = :cabin
          ORDER BY price, created_at, id
        - Keyed fetch/update/delete: WHERE id = :uuid
    """

    __tablename__ = "flights"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Storage-assigned identifier",
    )

    from_: Mapped[str] = mapped_column(
        "from",
        String(255),
        nullable=False,
        comment="Origin label (free text)",
    )

    to: Mapped[str] = mapped_column(
        "to",
        String(255),
        nullable=False,
        comment="Destination label (free text)",
    )

    stops: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Number of stops as a categorical label",
    )

    cabin_class: Mapped[str] = mapped_column(
        "class",
        String(50),
        nullable=False,
        comment="Cabin category: economy, business, first, ...",
    )

    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Non-negative fare amount",
    )

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_STATUS,
        server_default=text("'Active'"),
        comment="Lifecycle label, 'Active' unless the creator says otherwise",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this flight was created (UTC)",
    )

    __table_args__ = (
        Index("idx_flights_price", "price"),
    )

    def __repr__(self) -> str:
        return (
            f"<Flight(id={self.id}, from='{self.from_}', to='{self.to}', "
            f"price={self.price})>"
        )
