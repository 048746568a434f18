"""
Tests for the storage readiness probe.
"""

import asyncio
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import OperationalError

from navsite.core.probes import check_storage


class TestCheckStorage:
    async def test_healthy(self, db_tables):
        assert await check_storage() is True

    async def test_query_failure(self):
        failing = AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("locked")))

        with patch("navsite.core.probes.ping", failing):
            assert await check_storage() is False

    async def test_timeout(self):
        async def slow_ping():
            await asyncio.sleep(1)

        with patch("navsite.core.probes.ping", slow_ping):
            assert await check_storage(timeout_seconds=0.01) is False
