"""
Admin bootstrap and login flow.

The admin account moves through two states, once:

    NoAdmin --setup--> AdminSet

There is no reset or password-change operation. Login exchanges the
admin's username and password for a session token; verify_session lets
the front-end silently restore a token it kept from an earlier visit.
"""

from typing import Optional

from navsite.core.config import settings
from navsite.core.exceptions import (
    AlreadyConfigured,
    InvalidCredentials,
    NotConfigured,
    ValidationError,
)
from navsite.core.logging_config import get_logger
from navsite.core.security import (
    SessionClaims,
    TokenService,
    hash_password,
    verify_password,
)
from navsite.models.base import utc_now_iso
from navsite.repositories.credentials import CredentialStore
from navsite.schemas.auth import AdminCredential, LoginResponse


logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """
    Single-admin authentication.

    Attributes:
        credentials: Store holding the admin record
        tokens: Token service used to issue and verify sessions
        token_ttl_seconds: Lifetime of issued session tokens
    """

    def __init__(
        self,
        credentials: CredentialStore,
        tokens: TokenService,
        token_ttl_seconds: Optional[int] = None,
    ):
        self.credentials = credentials
        self.tokens = tokens
        self.token_ttl_seconds = token_ttl_seconds or settings.access_token_ttl_seconds

    async def is_configured(self) -> bool:
        """Whether the admin account has been set up."""
        return await self.credentials.exists()

    async def setup(self, username: Optional[str], password: Optional[str]) -> AdminCredential:
        """
        Create the admin account.

        Args:
            username: Admin username
            password: Admin password, at least 6 characters

        Returns:
            The stored credential

        Raises:
            AlreadyConfigured: If an admin record already exists
            ValidationError: If username or password is empty, or the
                password is too short
        """
        if await self.credentials.exists():
            logger.warning("Rejected admin setup: already configured")
            raise AlreadyConfigured()

        if not username or not password:
            raise ValidationError("Username and password are required")

        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        credential = AdminCredential(
            username=username,
            password_hash=hash_password(password),
            created_at=utc_now_iso(),
        )
        await self.credentials.put_admin(credential)

        logger.info("Admin account created", extra={"username": username})
        return credential

    async def login(self, username: Optional[str], password: Optional[str]) -> LoginResponse:
        """
        Exchange admin credentials for a session token.

        Raises:
            ValidationError: If username or password is empty
            NotConfigured: If setup has not been run
            InvalidCredentials: If the username or password does not match
        """
        if not username or not password:
            raise ValidationError("Username and password are required")

        admin = await self.credentials.get_admin()
        if admin is None:
            raise NotConfigured()

        # Same error for both mismatches: don't reveal which one failed
        if admin.username != username or not verify_password(password, admin.password_hash):
            logger.warning("Admin login failed", extra={"username": username})
            raise InvalidCredentials()

        token = self.tokens.issue(
            {"username": admin.username, "isAdmin": True},
            ttl_seconds=self.token_ttl_seconds,
        )

        logger.info("Admin logged in", extra={"username": admin.username})
        return LoginResponse(token=token, username=admin.username)

    def verify_session(self, token: str) -> Optional[SessionClaims]:
        """
        Check a previously issued token.

        Returns:
            The token's claims, or None if invalid or expired
        """
        return self.tokens.verify(token)
