"""
Key-value entry model.

Every persistent value of the application (the admin credential, the
project list and the category list) is one row in this table.
"""

from sqlalchemy import Column, String, Text

from navsite.models.base import Base, utc_now_iso


class KVEntry(Base):
    """
    One key and its opaque serialized value.

    Attributes:
        key: Storage key (``admin``, ``projects``, ``categories``)
        value: Serialized value, JSON text for every key the app writes
        updated_at: UTC timestamp of the last write
    """

    __tablename__ = "kv_entries"

    key = Column(
        String,
        primary_key=True,
        doc="Storage key"
    )

    value = Column(
        Text,
        nullable=False,
        doc="Opaque serialized value"
    )

    updated_at = Column(
        String,
        nullable=False,
        default=utc_now_iso,
        onupdate=utc_now_iso,
        doc="UTC timestamp of the last write"
    )

    def __repr__(self) -> str:
        return f"KVEntry(key={self.key!r}, size={len(self.value or '')})"
