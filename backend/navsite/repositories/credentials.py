"""
Credential store for the single admin account.

The admin record lives under the ``admin`` key as one JSON object.
"""

import json
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from navsite.core.logging_config import get_logger
from navsite.schemas.auth import AdminCredential
from navsite.services.interfaces.kv_store import IKeyValueStore


logger = get_logger(__name__)

ADMIN_KEY = "admin"


class CredentialStore:
    """
    Reads and writes the admin credential record.

    Attributes:
        store: Key-value backend
    """

    def __init__(self, store: IKeyValueStore):
        self.store = store

    async def exists(self) -> bool:
        """
        Whether any value is stored under the admin key.

        Checks the raw key rather than a parsed record, so a corrupt
        record still blocks a second bootstrap.
        """
        return await self.store.get(ADMIN_KEY) is not None

    async def get_admin(self) -> Optional[AdminCredential]:
        """
        Load the admin credential.

        Returns:
            The credential, or None if absent or unreadable
        """
        raw = await self.store.get(ADMIN_KEY)
        if raw is None:
            return None

        try:
            return AdminCredential.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError):
            logger.warning(
                "Stored admin record is malformed, ignoring it",
                extra={"key": ADMIN_KEY},
            )
            return None

    async def put_admin(self, credential: AdminCredential) -> None:
        """Persist the admin credential, replacing any previous value."""
        await self.store.put(
            ADMIN_KEY,
            json.dumps(credential.model_dump(by_alias=True), ensure_ascii=False),
        )
