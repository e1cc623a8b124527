"""
FlyBook Backend: Flight Service (Filter-and-Fetch Resolver)
=============================================================

What:  Search, fetch, create, update and delete for the flights collection.
How:   Translates optional search parameters into SQLAlchemy conditions,
       executes them against `flights`, and shapes rows into FlightResponse.
Who:   Called by the /flights route handlers.

Search contract (GET /flights):
    search  →  from ILIKE %search% OR to ILIKE %search%   (wildcards escaped)
    stops   →  stops IN (split(stops, ","))               (exact membership)
    cabin   →  class = cabin                              (case-sensitive)

    Present conditions are ANDed; absent or empty parameters add nothing.
    Results: ORDER BY price ASC, created_at ASC, id ASC. No limit.

Error Handling Strategy:
    Malformed identifiers raise ValidationError before any query runs.
    Missing rows raise NotFoundError. Anything else the database raises is
    logged and wrapped in DatabaseError so the client sees a generic 500.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement

from flybook.exceptions import DatabaseError, NotFoundError
from flybook.models.flight import DEFAULT_STATUS, Flight
from flybook.schemas.flight import (
    FlightCreate,
    FlightMutationResponse,
    FlightResponse,
    FlightUpdate,
)
from flybook.services.identifiers import parse_identifier

logger = logging.getLogger(__name__)

# Schema field name → ORM attribute name, where they differ
_ATTRIBUTE_FOR_FIELD = {"class_": "cabin_class"}


def parse_stops(stops: Optional[str]) -> List[str]:
    """Split a comma-separated stops parameter into its non-empty, trimmed members."""
    if not stops:
        return []
    return [value.strip() for value in stops.split(",") if value.strip()]


def build_flight_filters(
    search: Optional[str] = None,
    stops: Optional[str] = None,
    cabin: Optional[str] = None,
) -> List[ColumnElement[bool]]:
    """
    Build the WHERE conditions for a flight search.

    Returns an empty list when no parameter constrains the search.
    """
    conditions: List[ColumnElement[bool]] = []

    if search:
        conditions.append(
            or_(
                Flight.from_.icontains(search, autoescape=True),
                Flight.to.icontains(search, autoescape=True),
            )
        )

    allowed_stops = parse_stops(stops)
    if allowed_stops:
        conditions.append(Flight.stops.in_(allowed_stops))

    if cabin:
        conditions.append(Flight.cabin_class == cabin)

    return conditions


class FlightService:
    """
    Business logic for the flights collection.

    Stateless: every method receives the request's session.
    """

    async def list_flights(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        stops: Optional[str] = None,
        cabin: Optional[str] = None,
    ) -> List[FlightResponse]:
        """
        Return every flight matching the supplied filters, cheapest first.

        Equal prices are ordered by creation time, then identifier.
        An empty list is a normal result.

        Raises:
            DatabaseError: Query execution failed (→ 500)
        """
        conditions = build_flight_filters(search=search, stops=stops, cabin=cabin)

        query = select(Flight)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(Flight.price.asc(), Flight.created_at.asc(), Flight.id.asc())

        try:
            result = await db.execute(query)
            flights = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing flights: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve flights. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.debug(
            "Flight search search=%r stops=%r cabin=%r matched %d",
            search, stops, cabin, len(flights),
        )
        return [FlightResponse.from_model(flight) for flight in flights]

    async def _load(self, db: AsyncSession, flight_id: UUID) -> Flight:
        result = await db.execute(select(Flight).where(Flight.id == flight_id))
        flight = result.scalar_one_or_none()
        if flight is None:
            raise NotFoundError(resource="flight", resource_id=str(flight_id))
        return flight

    async def get_flight(self, db: AsyncSession, raw_id: str) -> FlightResponse:
        """
        Retrieve a single flight.

        Raises:
            ValidationError: raw_id is not a UUID (→ 400)
            NotFoundError: No flight has that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        flight_id = parse_identifier(raw_id, resource="flight")
        try:
            flight = await self._load(db, flight_id)
            return FlightResponse.from_model(flight)
        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error fetching flight %s: %s", flight_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the flight. Please try again.",
                context={"flight_id": str(flight_id)},
            )

    async def create_flight(
        self, db: AsyncSession, payload: FlightCreate
    ) -> FlightMutationResponse:
        """
        Insert a new flight.

        status defaults to "Active"; created_at is always stamped here.

        Raises:
            DatabaseError: Insert failed (→ 500)
        """
        flight = Flight(
            from_=payload.from_,
            to=payload.to,
            stops=payload.stops,
            cabin_class=payload.class_,
            price=payload.price,
            status=payload.status or DEFAULT_STATUS,
            created_at=datetime.now(timezone.utc),
        )
        try:
            db.add(flight)
            await db.flush()  # Assigns the UUID without committing
        except Exception as e:
            logger.error("Database error creating flight: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the flight. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Flight created: %s (%s → %s)", flight.id, flight.from_, flight.to)
        return FlightMutationResponse(message="Flight created successfully", id=flight.id)

    async def update_flight(
        self, db: AsyncSession, raw_id: str, payload: FlightUpdate
    ) -> FlightMutationResponse:
        """
        Merge the supplied fields into an existing flight.

        Fields absent from the request body (or sent as null) keep their
        stored values. Updating a missing id is NotFoundError, not a no-op.

        Raises:
            ValidationError: raw_id is not a UUID (→ 400)
            NotFoundError: No flight has that id (→ 404)
            DatabaseError: Query or flush failed (→ 500)
        """
        flight_id = parse_identifier(raw_id, resource="flight")
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        try:
            flight = await self._load(db, flight_id)
            for field, value in changes.items():
                setattr(flight, _ATTRIBUTE_FOR_FIELD.get(field, field), value)
            await db.flush()
        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error updating flight %s: %s", flight_id, str(e))
            raise DatabaseError(
                message="Could not update the flight. Please try again.",
                context={"flight_id": str(flight_id)},
            )

        logger.info("Flight %s updated: %s", flight_id, sorted(changes))
        return FlightMutationResponse(message="Flight updated successfully", id=flight_id)

    async def delete_flight(self, db: AsyncSession, raw_id: str) -> FlightMutationResponse:
        """
        Remove a flight.

        Raises:
            ValidationError: raw_id is not a UUID (→ 400)
            NotFoundError: Nothing was deleted (→ 404)
            DatabaseError: Statement failed (→ 500)
        """
        flight_id = parse_identifier(raw_id, resource="flight")
        try:
            result = await db.execute(delete(Flight).where(Flight.id == flight_id))
        except Exception as e:
            logger.error("Database error deleting flight %s: %s", flight_id, str(e))
            raise DatabaseError(
                message="Could not delete the flight. Please try again.",
                context={"flight_id": str(flight_id)},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource="flight", resource_id=str(flight_id))

        logger.info("Flight %s deleted", flight_id)
        return FlightMutationResponse(message="Flight deleted successfully", id=flight_id)


flight_service = FlightService()
