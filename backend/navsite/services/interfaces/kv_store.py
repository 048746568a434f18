"""
Key-Value Store Interface (IKeyValueStore)

Abstract base class for the storage backend every repository sits on.

Implementation guide:
- All methods must be async
- Values are opaque strings; serialization belongs to the caller
- Each call stands alone: no transactions span two calls
- Backend failures must surface as navsite.core.exceptions.StorageFault
"""

from abc import ABC, abstractmethod
from typing import Optional


class IKeyValueStore(ABC):
    """
    Abstract interface for string-keyed, string-valued storage.

    A missing key is a normal state (``get`` returns None), never an error.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageFault: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """
        Store a value, replacing whatever the key held before.

        Args:
            key: Storage key
            value: Serialized value

        Raises:
            StorageFault: If the backend cannot be written
        """
        pass
