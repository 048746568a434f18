"""
Unit tests for SQLKeyValueStore.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from navsite.core.exceptions import StorageFault
from navsite.services.kv_store import SQLKeyValueStore


class TestSQLKeyValueStore:
    """Test get/put/delete on the kv_entries table."""

    async def test_get_missing_key_returns_none(self, kv_store):
        assert await kv_store.get("projects") is None

    async def test_put_then_get(self, kv_store):
        # Act
        await kv_store.put("projects", "[]")

        # Assert
        assert await kv_store.get("projects") == "[]"

    async def test_put_overwrites(self, kv_store):
        # Arrange
        await kv_store.put("admin", '{"username": "a"}')

        # Act
        await kv_store.put("admin", '{"username": "b"}')

        # Assert
        assert await kv_store.get("admin") == '{"username": "b"}'

    async def test_keys_are_independent(self, kv_store):
        await kv_store.put("projects", "[1]")
        await kv_store.put("categories", "[2]")

        assert await kv_store.get("projects") == "[1]"
        assert await kv_store.get("categories") == "[2]"

    async def test_backend_errors_become_storage_fault(self):
        # Arrange
        session_maker = MagicMock(
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))
        )
        store = SQLKeyValueStore(session_maker)

        # Act / Assert
        with pytest.raises(StorageFault):
            await store.get("projects")
        with pytest.raises(StorageFault):
            await store.put("projects", "[]")
