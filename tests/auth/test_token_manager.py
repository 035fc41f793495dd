"""Tests for the JWT token manager."""

from datetime import timedelta

from jose import jwt

from app.configs import settings
from app.managers.token_manager import create_access_token, decode_access_token


class TestCreateAccessToken:
    """Test cases for create_access_token function."""

    def test_creates_valid_token(self) -> None:
        """Test that access token is created successfully."""
        token = create_access_token(subject="editor")

        assert isinstance(token, str)
        assert len(token) > 0

    def test_token_contains_correct_claims(self) -> None:
        """Test that access token contains all required claims."""
        token = create_access_token(subject="editor")
        principal = decode_access_token(token)

        assert principal is not None
        assert principal.subject == "editor"
        assert principal.token_type == "access"
        assert principal.jti is not None

    def test_unique_jti(self) -> None:
        first = decode_access_token(create_access_token(subject="editor"))
        second = decode_access_token(create_access_token(subject="editor"))
        assert first is not None
        assert second is not None
        assert first.jti != second.jti


class TestDecodeAccessToken:
    """Test cases for decode_access_token function."""

    def test_expired_token(self) -> None:
        token = create_access_token(subject="editor", expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_garbage_token(self) -> None:
        assert decode_access_token("not-a-jwt") is None

    def test_wrong_secret(self) -> None:
        token = jwt.encode(
            {"sub": "editor", "type": "access"},
            "another-secret",
            algorithm=settings.ALGORITHM,
        )
        assert decode_access_token(token) is None

    def test_wrong_token_type(self) -> None:
        """Tokens not issued as access tokens are rejected."""
        token = jwt.encode(
            {
                "sub": "editor",
                "type": "refresh",
                "iss": settings.JWT_ISSUER,
                "aud": settings.JWT_AUDIENCE,
            },
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )
        assert decode_access_token(token) is None

    def test_wrong_audience(self) -> None:
        token = jwt.encode(
            {
                "sub": "editor",
                "type": "access",
                "iss": settings.JWT_ISSUER,
                "aud": "someone-else",
            },
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )
        assert decode_access_token(token) is None
