"""
Tests for the admin guard used by mutating routes.
"""

import pytest
from jose import jwt

from navsite.api.dependencies import authorize_header, require_admin
from navsite.core.exceptions import Unauthorized
from navsite.core.security import ALGORITHM, TokenService


SECRET = "guard_test_secret_key_that_is_long_enough"


@pytest.fixture
def tokens():
    return TokenService(secret_key=SECRET)


@pytest.fixture
def admin_token(tokens):
    return tokens.issue({"username": "root", "isAdmin": True}, ttl_seconds=3600)


class TestAuthorizeHeader:
    """Test Authorization header checks."""

    def test_valid_bearer_token(self, tokens, admin_token):
        claims = authorize_header(f"Bearer {admin_token}", tokens)

        assert claims.username == "root"
        assert claims.is_admin is True

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Bearer garbage"])
    def test_missing_or_invalid_token(self, tokens, header):
        with pytest.raises(Unauthorized):
            authorize_header(header, tokens)

    def test_scheme_is_case_sensitive(self, tokens, admin_token):
        with pytest.raises(Unauthorized):
            authorize_header(f"bearer {admin_token}", tokens)

    def test_token_without_scheme(self, tokens, admin_token):
        with pytest.raises(Unauthorized):
            authorize_header(admin_token, tokens)

    def test_non_admin_token(self, tokens):
        token = tokens.issue({"username": "guest", "isAdmin": False}, ttl_seconds=3600)

        with pytest.raises(Unauthorized):
            authorize_header(f"Bearer {token}", tokens)

    def test_token_without_admin_claim(self, tokens):
        token = jwt.encode({"username": "root"}, SECRET, algorithm=ALGORITHM)

        with pytest.raises(Unauthorized):
            authorize_header(f"Bearer {token}", tokens)

    def test_truthy_non_boolean_admin_claim(self, tokens):
        token = jwt.encode({"username": "root", "isAdmin": "yes"}, SECRET, algorithm=ALGORITHM)

        with pytest.raises(Unauthorized):
            authorize_header(f"Bearer {token}", tokens)

    def test_expired_token(self):
        issuer = TokenService(secret_key=SECRET, clock=lambda: 1_000_000)
        token = issuer.issue({"username": "root", "isAdmin": True}, ttl_seconds=60)
        later = TokenService(secret_key=SECRET, clock=lambda: 1_000_060)

        with pytest.raises(Unauthorized):
            authorize_header(f"Bearer {token}", later)


class TestRequireAdmin:
    async def test_passes_claims_through(self, tokens, admin_token):
        claims = await require_admin(tokens, authorization=f"Bearer {admin_token}")

        assert claims.username == "root"

    async def test_missing_header(self, tokens):
        with pytest.raises(Unauthorized):
            await require_admin(tokens, authorization=None)
