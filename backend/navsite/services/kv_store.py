"""
SQL-backed key-value store.

Implements IKeyValueStore on top of the ``kv_entries`` table. Each call
opens its own short session and commits before returning, so a ``put`` is
durable as soon as it completes, like a put to a hosted KV namespace.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from navsite.core.exceptions import StorageFault
from navsite.core.logging_config import get_logger
from navsite.models.kv_entry import KVEntry
from navsite.services.interfaces.kv_store import IKeyValueStore


logger = get_logger(__name__)


class SQLKeyValueStore(IKeyValueStore):
    """
    Key-value store persisted in a relational table.

    Attributes:
        session_maker: Factory producing AsyncSession instances
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        """
        Initialize the store.

        Args:
            session_maker: Session factory (navsite.core.database.async_session_maker
                in the application, a test factory in tests)
        """
        self.session_maker = session_maker

    async def get(self, key: str) -> Optional[str]:
        try:
            async with self.session_maker() as session:
                result = await session.execute(
                    select(KVEntry.value).where(KVEntry.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                "Key-value read failed",
                extra={"key": key, "exception_type": type(e).__name__},
                exc_info=True,
            )
            raise StorageFault(f"Failed to read key {key!r}") from e

    async def put(self, key: str, value: str) -> None:
        try:
            async with self.session_maker() as session:
                entry = await session.get(KVEntry, key)
                if entry is None:
                    session.add(KVEntry(key=key, value=value))
                else:
                    entry.value = value
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Key-value write failed",
                extra={"key": key, "exception_type": type(e).__name__},
                exc_info=True,
            )
            raise StorageFault(f"Failed to write key {key!r}") from e

        logger.debug("Key-value write", extra={"key": key, "size": len(value)})
