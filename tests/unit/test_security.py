"""
Unit tests for the security module.
Tests password validation, hashing and session token creation/validation.
"""
import pytest
from datetime import datetime, timedelta
from jose import jwt

from eventboard.core.security import (
    validate_password,
    hash_password,
    verify_password,
    create_session_token,
    decode_token,
    get_token_user_id,
    secrets_match,
)
from eventboard.core.config import settings


@pytest.mark.unit
class TestPasswordValidation:
    """Test password validation functionality."""

    def test_valid_password(self):
        for password in ["admin123", "Sempre4lerta", "escoteiro2024"]:
            validate_password(password)  # Should not raise

    def test_password_too_short(self):
        with pytest.raises(ValueError, match="at least 6 characters"):
            validate_password("ab12")

    def test_password_no_letter(self):
        with pytest.raises(ValueError, match="letter"):
            validate_password("12345678")

    def test_password_no_digit(self):
        with pytest.raises(ValueError, match="digit"):
            validate_password("abcdefgh")


@pytest.mark.unit
class TestPasswordHashing:
    """Test password hashing and verification."""

    def test_hash_password(self):
        hashed = hash_password("admin123")

        assert hashed != "admin123"
        assert hashed.startswith("$2b$")  # bcrypt hash prefix

    def test_verify_password_correct(self):
        hashed = hash_password("admin123")
        assert verify_password("admin123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("admin123")
        assert verify_password("admin124", hashed) is False


@pytest.mark.unit
class TestSessionTokens:
    """Test session token creation and decoding."""

    def test_create_session_token(self):
        token = create_session_token(42)

        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
        assert payload["sub"] == "42"
        assert payload["user_id"] == 42
        assert payload["type"] == "session"
        assert "exp" in payload
        assert "iat" in payload

    def test_session_lasts_24_hours(self):
        token = create_session_token(1)

        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 24 * 3600

    def test_decode_valid_token(self):
        payload = decode_token(create_session_token(7))
        assert payload["sub"] == "7"

    def test_get_token_user_id(self):
        assert get_token_user_id(create_session_token(7)) == 7

    def test_decode_invalid_token(self):
        with pytest.raises(ValueError, match="Invalid token"):
            decode_token("invalid.token.here")

    def test_decode_expired_token(self):
        token = create_session_token(1, expires_delta=timedelta(seconds=-1))

        with pytest.raises(ValueError, match="Token has expired"):
            decode_token(token)

    def test_decode_token_signed_with_other_key(self):
        token = jwt.encode(
            {"sub": "1", "type": "session", "exp": datetime.utcnow() + timedelta(hours=1)},
            "some-other-key",
            algorithm="HS256",
        )

        with pytest.raises(ValueError, match="Invalid token"):
            decode_token(token)

    def test_decode_token_missing_sub(self):
        token = jwt.encode({"type": "session"}, settings.SECRET_KEY, algorithm="HS256")

        with pytest.raises(ValueError, match="missing 'sub'"):
            decode_token(token)

    def test_decode_token_wrong_type(self):
        token = jwt.encode({"sub": "1", "type": "refresh"}, settings.SECRET_KEY, algorithm="HS256")

        with pytest.raises(ValueError, match="wrong token type"):
            decode_token(token)


@pytest.mark.unit
class TestSecretComparison:

    def test_matching_secret(self):
        assert secrets_match("abc", "abc") is True

    def test_wrong_secret(self):
        assert secrets_match("abd", "abc") is False

    def test_missing_secret(self):
        assert secrets_match(None, "abc") is False
        assert secrets_match("", "abc") is False
