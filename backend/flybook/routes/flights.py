"""
FlyBook Backend: Flight Route Handlers
========================================

What:  GET/POST /flights and GET/PUT/DELETE /flights/{flight_id}.
How:   Extracts query parameters and bodies, delegates to FlightService.
       Errors raised by the service are turned into JSON responses by the
       global handlers in main.py.

flight_id is taken as a plain string and validated by the service, so a
malformed id is a 400 validation_error rather than FastAPI's 422.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from flybook.database import get_db_session
from flybook.schemas.common import ErrorResponse
from flybook.schemas.flight import (
    FlightCreate,
    FlightMutationResponse,
    FlightResponse,
    FlightUpdate,
)
from flybook.services.flight_service import flight_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flights", tags=["Flights"])

_KEYED_RESPONSES = {
    400: {"description": "Malformed flight identifier", "model": ErrorResponse},
    404: {"description": "Flight not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[FlightResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Search flights",
    description=(
        "Returns every flight matching the optional filters, sorted by price ascending. "
        "`search` matches origin or destination (case-insensitive substring), "
        "`stops` is a comma-separated list of allowed values, "
        "`cabin` must equal the cabin class exactly."
    ),
)
async def list_flights(
    search: Optional[str] = Query(
        default=None,
        description="Substring of the origin or destination, case-insensitive",
    ),
    stops: Optional[str] = Query(
        default=None,
        description="Comma-separated stops values, e.g. '0,1'",
    ),
    cabin: Optional[str] = Query(
        default=None,
        description="Exact cabin class, e.g. 'economy'",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[FlightResponse]:
    return await flight_service.list_flights(db=db, search=search, stops=stops, cabin=cabin)


@router.get(
    "/{flight_id}",
    response_model=FlightResponse,
    responses=_KEYED_RESPONSES,
    summary="Get a single flight by ID",
)
async def get_flight(
    flight_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> FlightResponse:
    return await flight_service.get_flight(db=db, raw_id=flight_id)


@router.post(
    "",
    response_model=FlightMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Create a flight",
    description=(
        "Stores a new flight. `status` defaults to 'Active' when omitted; "
        "`createdAt` is always set by the server."
    ),
)
async def create_flight(
    payload: FlightCreate,
    db: AsyncSession = Depends(get_db_session),
) -> FlightMutationResponse:
    return await flight_service.create_flight(db=db, payload=payload)


@router.put(
    "/{flight_id}",
    response_model=FlightMutationResponse,
    responses=_KEYED_RESPONSES,
    summary="Update a flight",
    description="Changes only the fields present in the body; everything else is kept.",
)
async def update_flight(
    flight_id: str,
    payload: FlightUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> FlightMutationResponse:
    return await flight_service.update_flight(db=db, raw_id=flight_id, payload=payload)


@router.delete(
    "/{flight_id}",
    response_model=FlightMutationResponse,
    responses=_KEYED_RESPONSES,
    summary="Delete a flight",
)
async def delete_flight(
    flight_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> FlightMutationResponse:
    return await flight_service.delete_flight(db=db, raw_id=flight_id)
