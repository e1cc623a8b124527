"""
FlyBook Backend: Flight Service Unit Tests
============================================

What:  Tests for FlightService business logic against a mocked session.
How:   No database: execute()/flush() are AsyncMocks with canned results.

What we test:
    ✅ Filter construction from search / stops / cabin
    ✅ Identifier validation happens before any query
    ✅ Not-found and storage failures map to the right exceptions
    ✅ Create defaults status and stamps created_at
    ✅ Update touches only supplied fields
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from flybook.exceptions import DatabaseError, NotFoundError, ValidationError
from flybook.models.flight import Flight
from flybook.schemas.flight import FlightCreate, FlightUpdate
from flybook.services.flight_service import (
    FlightService,
    build_flight_filters,
    parse_stops,
)


def make_flight(**data) -> Flight:
    return Flight(**data)


class TestFilterConstruction:
    """Tests for parse_stops and build_flight_filters."""

    def test_parse_stops_splits_on_comma(self):
        assert parse_stops("0,1") == ["0", "1"]

    def test_parse_stops_trims_and_drops_empty_members(self):
        assert parse_stops(" 0 , ,2+,") == ["0", "2+"]

    def test_parse_stops_absent_or_empty(self):
        assert parse_stops(None) == []
        assert parse_stops("") == []
        assert parse_stops(" , ") == []

    def test_no_parameters_means_no_conditions(self):
        assert build_flight_filters() == []
        assert build_flight_filters(search="", stops="", cabin="") == []

    def test_each_parameter_adds_one_condition(self):
        assert len(build_flight_filters(search="par")) == 1
        assert len(build_flight_filters(stops="0,1")) == 1
        assert len(build_flight_filters(cabin="economy")) == 1
        assert len(build_flight_filters(search="par", stops="0", cabin="first")) == 3

    def test_search_condition_covers_both_endpoints(self):
        (condition,) = build_flight_filters(search="par")
        sql = str(condition.compile())
        assert "from" in sql
        assert "to" in sql
        assert " OR " in sql
        assert "LIKE" in sql


class TestFlightServiceList:
    """Tests for list_flights."""

    def setup_method(self):
        self.service = FlightService()

    @pytest.mark.asyncio
    async def test_list_flights_empty(self, mock_db_session):
        """No matches is an empty list, not an error."""
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_flights(mock_db_session, search="nowhere")

        assert result == []
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_flights_shapes_rows(self, mock_db_session, sample_flight_data):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [make_flight(**sample_flight_data)]
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_flights(mock_db_session)

        assert len(result) == 1
        body = result[0].model_dump(by_alias=True)
        assert body["from"] == "Paris"
        assert body["class"] == "economy"
        assert body["createdAt"] == sample_flight_data["created_at"]

    @pytest.mark.asyncio
    async def test_list_flights_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("connection reset"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_flights(mock_db_session, cabin="economy")

        assert "connection reset" not in exc_info.value.message


class TestFlightServiceGet:
    """Tests for get_flight."""

    def setup_method(self):
        self.service = FlightService()

    @pytest.mark.asyncio
    async def test_get_flight_found(self, mock_db_session, sample_flight_data):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = make_flight(**sample_flight_data)
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_flight(mock_db_session, str(sample_flight_data["id"]))

        assert result.id == sample_flight_data["id"]
        assert result.price == 300.0

    @pytest.mark.asyncio
    async def test_get_flight_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError):
            await self.service.get_flight(mock_db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_get_flight_malformed_id_skips_query(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.get_flight(mock_db_session, "not-a-uuid")

        assert exc_info.value.field == "id"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_flight_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(DatabaseError):
            await self.service.get_flight(mock_db_session, str(uuid.uuid4()))


class TestFlightServiceCreate:
    """Tests for create_flight."""

    def setup_method(self):
        self.service = FlightService()

    @pytest.mark.asyncio
    async def test_create_defaults_status_and_stamps_created_at(self, mock_db_session):
        assigned_id = uuid.uuid4()

        async def assign_id():
            added = mock_db_session.add.call_args.args[0]
            added.id = assigned_id

        mock_db_session.flush = AsyncMock(side_effect=assign_id)
        payload = FlightCreate.model_validate(
            {"from": "Athens", "to": "Sparta", "stops": 1, "class": "business", "price": 150}
        )

        before = datetime.now(timezone.utc)
        result = await self.service.create_flight(mock_db_session, payload)

        added = mock_db_session.add.call_args.args[0]
        assert result.id == assigned_id
        assert added.status == "Active"
        assert added.stops == "1"
        assert added.cabin_class == "business"
        assert added.created_at >= before

    @pytest.mark.asyncio
    async def test_create_keeps_explicit_status(self, mock_db_session):
        async def assign_id():
            mock_db_session.add.call_args.args[0].id = uuid.uuid4()

        mock_db_session.flush = AsyncMock(side_effect=assign_id)
        payload = FlightCreate.model_validate(
            {"from": "Oslo", "to": "Bergen", "stops": "0", "class": "economy",
             "price": 80, "status": "Cancelled"}
        )

        await self.service.create_flight(mock_db_session, payload)

        assert mock_db_session.add.call_args.args[0].status == "Cancelled"

    @pytest.mark.asyncio
    async def test_create_ignores_caller_created_at(self, mock_db_session):
        async def assign_id():
            mock_db_session.add.call_args.args[0].id = uuid.uuid4()

        mock_db_session.flush = AsyncMock(side_effect=assign_id)
        payload = FlightCreate.model_validate(
            {"from": "Oslo", "to": "Bergen", "stops": "0", "class": "economy",
             "price": 80, "createdAt": "1999-01-01T00:00:00Z"}
        )

        await self.service.create_flight(mock_db_session, payload)

        assert mock_db_session.add.call_args.args[0].created_at.year != 1999

    @pytest.mark.asyncio
    async def test_create_database_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(side_effect=RuntimeError("disk full"))
        payload = FlightCreate.model_validate(
            {"from": "Oslo", "to": "Bergen", "stops": "0", "class": "economy", "price": 80}
        )

        with pytest.raises(DatabaseError):
            await self.service.create_flight(mock_db_session, payload)


class TestFlightServiceUpdate:
    """Tests for update_flight."""

    def setup_method(self):
        self.service = FlightService()

    @pytest.mark.asyncio
    async def test_partial_update_changes_only_supplied_fields(
        self, mock_db_session, sample_flight_data
    ):
        flight = make_flight(**sample_flight_data)
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = flight
        mock_db_session.execute.return_value = mock_result

        result = await self.service.update_flight(
            mock_db_session, str(flight.id), FlightUpdate.model_validate({"price": 500})
        )

        assert result.id == flight.id
        assert flight.price == 500
        assert flight.from_ == "Paris"
        assert flight.to == "London"
        assert flight.stops == "0"
        assert flight.cabin_class == "economy"
        assert flight.status == "Active"
        assert flight.created_at == sample_flight_data["created_at"]
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_maps_aliased_fields(self, mock_db_session, sample_flight_data):
        flight = make_flight(**sample_flight_data)
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = flight
        mock_db_session.execute.return_value = mock_result

        await self.service.update_flight(
            mock_db_session,
            str(flight.id),
            FlightUpdate.model_validate({"from": "Lyon", "class": "first", "status": None}),
        )

        assert flight.from_ == "Lyon"
        assert flight.cabin_class == "first"
        assert flight.status == "Active"

    @pytest.mark.asyncio
    async def test_update_missing_flight(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError):
            await self.service.update_flight(
                mock_db_session, str(uuid.uuid4()), FlightUpdate(price=10)
            )

    @pytest.mark.asyncio
    async def test_update_malformed_id(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.update_flight(mock_db_session, "123", FlightUpdate(price=10))
        mock_db_session.execute.assert_not_awaited()


class TestFlightServiceDelete:
    """Tests for delete_flight."""

    def setup_method(self):
        self.service = FlightService()

    @pytest.mark.asyncio
    async def test_delete_existing(self, mock_db_session):
        flight_id = uuid.uuid4()
        mock_db_session.execute.return_value = MagicMock(rowcount=1)

        result = await self.service.delete_flight(mock_db_session, str(flight_id))

        assert result.id == flight_id
        assert result.message == "Flight deleted successfully"

    @pytest.mark.asyncio
    async def test_delete_nothing_removed(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        with pytest.raises(NotFoundError):
            await self.service.delete_flight(mock_db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_delete_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("locked"))

        with pytest.raises(DatabaseError):
            await self.service.delete_flight(mock_db_session, str(uuid.uuid4()))
