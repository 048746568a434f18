"""
Authentication endpoints.

Provides admin bootstrap, login, token verification and session
introspection.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from navsite.api.dependencies import AdminClaims, Auth
from navsite.schemas.auth import (
    CredentialsRequest,
    LoginResponse,
    MessageResponse,
    SessionInfo,
    SetupStatus,
    VerifyRequest,
    VerifyResponse,
)

# Create router for authentication endpoints
router = APIRouter()


@router.get("/status", response_model=SetupStatus)
async def setup_status(auth: Auth) -> SetupStatus:
    """
    Report whether the admin account exists.

    The front-end uses this to choose between the setup and login dialogs.
    """
    return SetupStatus(configured=await auth.is_configured())


@router.post("/setup", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def setup_admin(body: CredentialsRequest, auth: Auth) -> MessageResponse:
    """
    Create the one and only admin account.

    Example:
        POST /api/auth/setup
        {"username": "root", "password": "secret1"}

        Response:
        {"message": "Admin account created"}

    Raises:
        400: Admin already configured, or username/password invalid
    """
    await auth.setup(body.username, body.password)
    return MessageResponse(message="Admin account created")


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(body: CredentialsRequest, auth: Auth) -> LoginResponse:
    """
    Exchange admin credentials for a session token valid 24 hours.

    Example:
        POST /api/auth/login
        {"username": "root", "password": "secret1"}

        Response:
        {"token": "eyJ...", "username": "root", "message": "Login successful"}

    Raises:
        400: Missing username or password
        404: Admin not set up yet
        401: Username or password mismatch
    """
    return await auth.login(body.username, body.password)


@router.post("/verify", response_model=VerifyResponse)
async def verify_token(body: VerifyRequest, auth: Auth):
    """
    Check a token the front-end stored from an earlier session.

    The token travels in the body, not the Authorization header, so a
    stale token never triggers the admin guard.

    Response:
        {"valid": true, "username": "root", "isAdmin": true}
        or {"valid": false, "error": "..."} with 400/401
    """
    if not body.token:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"valid": False, "error": "Token is required"},
        )

    claims = auth.verify_session(body.token)
    if claims is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"valid": False, "error": "Token is invalid or expired"},
        )

    return VerifyResponse(username=claims.username, is_admin=claims.is_admin)


@router.get("/me", response_model=SessionInfo)
async def read_session(admin: AdminClaims) -> SessionInfo:
    """
    Return the claims of the bearer token.

    Requires a valid admin token in the Authorization header.
    """
    return SessionInfo(username=admin.username, is_admin=admin.is_admin, exp=admin.exp)
