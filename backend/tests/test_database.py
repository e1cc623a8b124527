"""
FlyBook Backend: Connection Manager Tests
===========================================

What:  Lazy, memoised, concurrency-safe initialisation of the Database handle.
How:   Fresh Database instances against the test SQLite URL; create_async_engine
       is wrapped so the number of engines built can be counted.
"""

import asyncio
from unittest.mock import patch

import pytest

from flybook.config import settings
from flybook.database import Database, create_async_engine


class TestLazyConnect:

    @pytest.mark.asyncio
    async def test_not_connected_until_first_use(self):
        db = Database(settings.database_url)

        assert db.is_connected is False
        with pytest.raises(RuntimeError):
            db.engine

    @pytest.mark.asyncio
    async def test_connect_is_memoised(self):
        db = Database(settings.database_url)
        try:
            first = await db.connect()
            second = await db.connect()

            assert first is second
            assert db.engine is first
        finally:
            await db.dispose()

    @pytest.mark.asyncio
    async def test_concurrent_first_use_builds_one_engine(self):
        db = Database(settings.database_url)
        with patch("flybook.database.create_async_engine", wraps=create_async_engine) as factory:
            try:
                engines = await asyncio.gather(*(db.connect() for _ in range(10)))
            finally:
                await db.dispose()

        assert factory.call_count == 1
        assert all(engine is engines[0] for engine in engines)

    @pytest.mark.asyncio
    async def test_failed_connect_can_be_retried(self, tmp_path):
        db = Database(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/flybook.db")

        with pytest.raises(Exception):
            await db.connect()
        assert db.is_connected is False

        db.url = f"sqlite+aiosqlite:///{tmp_path}/flybook.db"
        try:
            engine = await db.connect()
            assert db.is_connected is True
            assert engine is db.engine
        finally:
            await db.dispose()

    @pytest.mark.asyncio
    async def test_dispose_resets_handle(self):
        db = Database(settings.database_url)
        first = await db.connect()

        await db.dispose()
        assert db.is_connected is False

        second = await db.connect()
        try:
            assert second is not first
        finally:
            await db.dispose()
