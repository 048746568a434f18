"""
Security module for authentication and authorization.

Provides password hashing and signed session tokens using
industry-standard libraries (bcrypt, python-jose).

Two password digests are understood:
- ``sha256``: unsalted hex SHA-256 of the password. Deterministic, and
  byte-compatible with admin records written by earlier deployments.
- ``bcrypt``: salted bcrypt hash, opt-in through PASSWORD_HASH_SCHEME.

Session tokens are HS256 JWTs carrying ``username``, ``isAdmin`` and
``exp`` claims. Verification is stateless: there is no server-side
session table, so a token stays valid until it expires or the secret
key is rotated.
"""

import hashlib
import hmac
import time
from typing import Any, Callable, Dict, Optional

import bcrypt
from jose import JOSEError, jwt
from jose.utils import base64url_encode
from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from navsite.core.config import settings
from navsite.core.logging_config import get_logger


logger = get_logger(__name__)

# JWT Algorithm
ALGORITHM = "HS256"

# bcrypt ignores everything past 72 bytes
BCRYPT_MAX_BYTES = 72


def _sha256_hex(plain_password: str) -> str:
    return hashlib.sha256(plain_password.encode("utf-8")).hexdigest()


def _bcrypt_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, scheme: Optional[str] = None) -> str:
    """
    Hash a password for storage.

    Args:
        plain_password: Plain text password
        scheme: ``sha256`` or ``bcrypt``; defaults to settings.password_hash_scheme

    Returns:
        64 character hex digest (sha256) or a ``$2b$`` bcrypt hash

    Raises:
        ValueError: If the scheme is unknown
    """
    scheme = scheme or settings.password_hash_scheme

    if scheme == "sha256":
        return _sha256_hex(plain_password)

    if scheme == "bcrypt":
        salt = bcrypt.gensalt(rounds=12)
        return bcrypt.hashpw(_bcrypt_bytes(plain_password), salt).decode("utf-8")

    raise ValueError(f"Unknown password hash scheme: {scheme}")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored digest.

    The scheme is detected from the digest itself, so switching
    PASSWORD_HASH_SCHEME never locks out an existing admin.

    Args:
        plain_password: The plain text password to verify
        hashed_password: Stored digest (sha256 hex or bcrypt)

    Returns:
        True if password matches, False otherwise (including garbage digests)
    """
    if not isinstance(plain_password, str) or not isinstance(hashed_password, str):
        return False

    if hashed_password.startswith("$2"):
        try:
            return bcrypt.checkpw(
                _bcrypt_bytes(plain_password),
                hashed_password.encode("utf-8"),
            )
        except ValueError:
            # Malformed bcrypt hash
            return False

    return hmac.compare_digest(
        _sha256_hex(plain_password),
        hashed_password.lower(),
    )


class SessionClaims(BaseModel):
    """
    Session token payload.

    Serialized with camelCase ``isAdmin`` so tokens and the verify endpoint
    share the field names the front-end already reads.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=1)
    is_admin: StrictBool = Field(default=False, alias="isAdmin")
    exp: Optional[int] = None


class TokenService:
    """
    Issues and verifies signed, expiring session tokens.

    Attributes:
        secret_key: HMAC key shared by issue and verify
        clock: Callable returning the current epoch time in seconds
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.secret_key = secret_key or settings.secret_key
        self.clock = clock

    def issue(self, claims: Dict[str, Any], ttl_seconds: int) -> str:
        """
        Create a signed token.

        Args:
            claims: Identity claims, at least ``username`` and ``isAdmin``
            ttl_seconds: Lifetime; ``exp`` is set to now + ttl_seconds

        Returns:
            Token string of the form ``header.payload.signature``

        Example:
            >>> token = TokenService().issue({"username": "root", "isAdmin": True}, 86400)
            >>> # Use token in Authorization header: Bearer <token>
        """
        to_encode = dict(claims)
        to_encode["exp"] = int(self.clock()) + int(ttl_seconds)

        return jwt.encode(to_encode, self.secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> Optional[SessionClaims]:
        """
        Verify a token and return its claims.

        Total function: every failure (wrong segment count, bad encoding,
        signature mismatch, invalid claims, expiry) yields None.

        Args:
            token: Token string

        Returns:
            SessionClaims if valid, None otherwise
        """
        if not isinstance(token, str) or token.count(".") != 2:
            return None

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[ALGORITHM],
                # Expiry is checked below against the injectable clock
                options={"verify_exp": False},
            )
            claims = SessionClaims.model_validate(payload)
        except (JOSEError, ValidationError) as e:
            logger.info(
                "Rejected session token",
                extra={"reason": type(e).__name__},
            )
            return None

        if not self._signature_matches(token):
            logger.info("Rejected session token", extra={"reason": "signature_text"})
            return None

        if claims.exp is not None and claims.exp <= self.clock():
            logger.info("Rejected session token", extra={"reason": "expired"})
            return None

        return claims

    def _signature_matches(self, token: str) -> bool:
        """
        Exact text match of the signature segment.

        The last base64url character of an HS256 signature has unused low
        bits; only the canonical spelling is accepted.
        """
        signing_input, _, signature = token.rpartition(".")
        expected = base64url_encode(
            hmac.new(
                self.secret_key.encode("utf-8"),
                signing_input.encode("utf-8"),
                hashlib.sha256,
            ).digest()
        )
        return hmac.compare_digest(expected, signature.encode("utf-8"))


def get_token_service() -> TokenService:
    """Token service bound to the configured secret."""
    return TokenService(secret_key=settings.secret_key)
