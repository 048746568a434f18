"""
Database models.

Importing this package registers every table on Base.metadata.
"""

from navsite.models.base import Base, utc_now_iso
from navsite.models.kv_entry import KVEntry

__all__ = ["Base", "KVEntry", "utc_now_iso"]
