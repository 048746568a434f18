"""
Pydantic schemas for the admin bootstrap, login and session endpoints.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AdminCredential(BaseModel):
    """
    The singleton admin record stored under the ``admin`` key.

    Records written by earlier deployments kept the digest under
    ``password``; both spellings are accepted on read, ``passwordHash``
    is always written.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    username: str = Field(..., min_length=1)
    password_hash: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("passwordHash", "password", "password_hash"),
        serialization_alias="passwordHash",
    )
    created_at: Optional[str] = None


class CredentialsRequest(BaseModel):
    """
    Body of ``POST /auth/setup`` and ``POST /auth/login``.

    Both fields are optional at the schema level; emptiness and the
    minimum password length are checked by the auth service.
    """

    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    username: str
    message: str = "Login successful"


class VerifyRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token: Optional[str] = None


class VerifyResponse(BaseModel):
    """Successful ``POST /auth/verify`` result."""

    model_config = ConfigDict(populate_by_name=True)

    valid: bool = True
    username: str
    is_admin: bool = Field(..., serialization_alias="isAdmin")


class SessionInfo(BaseModel):
    """Claims of the bearer token, echoed by ``GET /auth/me``."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    is_admin: bool = Field(..., serialization_alias="isAdmin")
    exp: Optional[int] = None


class SetupStatus(BaseModel):
    configured: bool


class MessageResponse(BaseModel):
    message: str
