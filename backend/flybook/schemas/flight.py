"""
FlyBook Backend: Flight Request/Response Schemas
==================================================

What:  Pydantic models defining the flight API contract.
How:   FastAPI validates request bodies against FlightCreate / FlightUpdate and
       serializes FlightResponse by alias, so clients see the document-style
       keys `from`, `class` and `createdAt`.

Python-side names use a trailing underscore where the JSON key is a keyword
(`from_`, `class_`). populate_by_name lets services construct models with
either spelling.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from flybook.models.flight import Flight


def _stops_as_text(v: Any) -> Any:
    # Stored documents often carry stops as a number; the column is categorical text
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class FlightCreate(BaseModel):
    """
    Body of POST /flights.

    `status` is optional and defaults to "Active" in the service layer.
    `createdAt` is not a field: any value the caller sends is ignored.
    """
    from_: str = Field(alias="from", min_length=1, description="Origin label")
    to: str = Field(min_length=1, description="Destination label")
    stops: str = Field(min_length=1, description="Stops category, e.g. '0', '1', '2+'")
    class_: str = Field(alias="class", min_length=1, description="Cabin class")
    price: float = Field(ge=0, allow_inf_nan=False, description="Fare amount")
    status: Optional[str] = Field(default=None, description="Lifecycle label (default 'Active')")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("stops", mode="before")
    @classmethod
    def coerce_stops(cls, v: Any) -> Any:
        return _stops_as_text(v)


class FlightUpdate(BaseModel):
    """
    Body of PUT /flights/{id}. Every field is optional.

    Only keys the client actually sent (and did not set to null) are written;
    the rest of the record is left untouched.
    """
    from_: Optional[str] = Field(default=None, alias="from", min_length=1)
    to: Optional[str] = Field(default=None, min_length=1)
    stops: Optional[str] = Field(default=None, min_length=1)
    class_: Optional[str] = Field(default=None, alias="class", min_length=1)
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    status: Optional[str] = Field(default=None, min_length=1)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("stops", mode="before")
    @classmethod
    def coerce_stops(cls, v: Any) -> Any:
        return _stops_as_text(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class FlightResponse(BaseModel):
    """Full representation of a stored flight."""
    id: uuid.UUID = Field(description="Flight identifier (UUID)")
    from_: str = Field(alias="from", description="Origin label")
    to: str = Field(description="Destination label")
    stops: str = Field(description="Stops category")
    class_: str = Field(alias="class", description="Cabin class")
    price: float = Field(description="Fare amount")
    status: str = Field(description="Lifecycle label")
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC ISO 8601)")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_model(cls, flight: Flight) -> "FlightResponse":
        return cls(
            id=flight.id,
            from_=flight.from_,
            to=flight.to,
            stops=flight.stops,
            class_=flight.cabin_class,
            price=flight.price,
            status=flight.status,
            created_at=flight.created_at,
        )


class FlightMutationResponse(BaseModel):
    """
    Confirmation returned by create, update and delete.

    Example:
        {"message": "Flight created successfully", "id": "8c1f...e2"}
    """
    message: str = Field(description="Human-readable confirmation")
    id: uuid.UUID = Field(description="Identifier of the affected flight")
