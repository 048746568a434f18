"""
Whole-collection storage over the key-value store.

A collection is an ordered list of JSON objects serialized under a single
key and rewritten wholesale on every mutation:

    read entire list -> modify in memory -> write entire list

There is no lock or version check between the read and the write. Two
mutations running at the same time both start from the same list and the
later write drops the earlier change. The app has exactly one admin
issuing writes one after another, which is the only setting this storage
model supports.
"""

import json
import secrets
import string
import time
from typing import Any, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from navsite.core.exceptions import NotFound, StorageFault
from navsite.core.logging_config import get_logger
from navsite.services.interfaces.kv_store import IKeyValueStore


logger = get_logger(__name__)

_BASE36 = string.digits + string.ascii_lowercase

# Length of the random part of generated ids
ID_SUFFIX_LENGTH = 8

RecordT = TypeVar("RecordT", bound=BaseModel)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """
    Generate a record id.

    Base36 millisecond timestamp followed by a random base36 suffix,
    e.g. ``"m3k2x9qa7f0c2b1d"``. Ids sort roughly by creation time.
    """
    timestamp = _to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(ID_SUFFIX_LENGTH))
    return timestamp + suffix


def stored_string(entry: Any, field: str) -> Optional[str]:
    """String value of ``field`` in a raw stored entry, else None."""
    if isinstance(entry, dict) and isinstance(entry.get(field), str):
        return entry[field]
    return None


class JsonListRepository(Generic[RecordT]):
    """
    Ordered collection of records stored as one JSON array.

    Subclasses set ``storage_key``, ``record_model`` and ``record_label``.

    Stored entries that do not validate against ``record_model`` are hidden
    from reads but carried through writes unchanged, at their position, so
    a mutation never drops data it could not parse. Mutation helpers
    therefore work on a list holding both records and raw entries.

    Attributes:
        store: Key-value backend
    """

    storage_key: str = ""
    record_model: Type[RecordT]
    record_label: str = "Record"

    def __init__(self, store: IKeyValueStore):
        """
        Initialize repository with a key-value store.

        Args:
            store: Backend holding the serialized collection
        """
        self.store = store

    async def _read_array(self, for_write: bool) -> List[Any]:
        """
        Read the stored JSON array.

        A missing key is an empty collection. Malformed JSON or a non-list
        value reads as empty; a write refuses to replace it.

        Raises:
            StorageFault: If ``for_write`` and the stored value is unreadable
        """
        raw = await self.store.get(self.storage_key)
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            data = None

        if isinstance(data, list):
            return data

        logger.warning(
            "Stored collection is not a JSON array",
            extra={"key": self.storage_key, "for_write": for_write},
        )
        if for_write:
            raise StorageFault(
                f"Stored {self.storage_key!r} value is not a JSON array, refusing to overwrite"
            )
        return []

    def _parse(self, item: Any) -> Any:
        """The validated record, or ``item`` itself if it does not validate."""
        try:
            return self.record_model.model_validate(item)
        except PydanticValidationError:
            logger.warning(
                "Malformed stored record",
                extra={"key": self.storage_key, "record_id": stored_string(item, "id")},
            )
            return item

    async def _load(self) -> List[RecordT]:
        """Read the collection for display: valid records only."""
        entries = [self._parse(item) for item in await self._read_array(for_write=False)]
        return [entry for entry in entries if isinstance(entry, self.record_model)]

    async def _load_entries(self) -> List[Any]:
        """Read the collection for a mutation: records plus raw entries."""
        return [self._parse(item) for item in await self._read_array(for_write=True)]

    async def _save(self, entries: List[Any]) -> None:
        """Serialize and write the whole collection."""
        payload = json.dumps(
            [
                entry.model_dump(by_alias=True) if isinstance(entry, BaseModel) else entry
                for entry in entries
            ],
            ensure_ascii=False,
        )
        await self.store.put(self.storage_key, payload)

    @staticmethod
    def _index_of(entries: List[Any], record_id: str) -> Optional[int]:
        for index, entry in enumerate(entries):
            entry_id = entry.id if isinstance(entry, BaseModel) else stored_string(entry, "id")
            if entry_id == record_id:
                return index
        return None

    def _not_found(self, record_id: str) -> NotFound:
        return NotFound(f"{self.record_label} not found: {record_id}")

    async def list(self) -> List[RecordT]:
        """
        Return the collection in stored order (newest first).

        Returns:
            List of records; empty if nothing was stored yet
        """
        return await self._load()

    async def delete(self, record_id: str) -> None:
        """
        Remove an entry by id and write the remaining collection back.

        Raises:
            NotFound: If no entry has this id (nothing is written)
        """
        entries = await self._load_entries()
        index = self._index_of(entries, record_id)
        if index is None:
            raise self._not_found(record_id)

        del entries[index]
        await self._save(entries)

        logger.info(
            f"{self.record_label} deleted",
            extra={"key": self.storage_key, "record_id": record_id},
        )
