"""Service interface contracts (ABCs)"""

from navsite.services.interfaces.kv_store import IKeyValueStore

__all__ = [
    'IKeyValueStore',
]
