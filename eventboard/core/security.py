"""
Password hashing and signed session tokens.

Sessions are stateless JWTs carried in an HttpOnly cookie. They expire after
SESSION_EXPIRE_HOURS and are never refreshed or revoked server-side.
"""
import hmac
from datetime import datetime, timedelta
from typing import Optional, Dict
from jose import jwt, JWTError
from passlib.context import CryptContext
from eventboard.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_TOKEN_TYPE = "session"


def validate_password(password: str) -> None:
    """
    Validate password strength.

    Args:
        password: The password to validate

    Raises:
        ValueError: If password doesn't meet strength requirements
    """
    if len(password) < 6:
        raise ValueError("Password must be at least 6 characters long")

    if not any(c.isalpha() for c in password):
        raise ValueError("Password must contain at least one letter")

    if not any(c.isdigit() for c in password):
        raise ValueError("Password must contain at least one digit")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a password against a hash."""
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def secrets_match(provided: Optional[str], expected: str) -> bool:
    """Constant-time comparison for the shared admin secret."""
    if not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def create_session_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token for a user.

    Args:
        user_id: Id of the authenticated user
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    now = datetime.utcnow()
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.SESSION_EXPIRE_HOURS)

    to_encode = {
        "sub": str(user_id),
        "user_id": user_id,
        "iat": now,
        "exp": now + expires_delta,
        "type": SESSION_TOKEN_TYPE,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Dict:
    """
    Decode and validate a session token.

    Args:
        token: JWT token to decode

    Returns:
        Decoded token data

    Raises:
        ValueError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise ValueError("Token has expired")
    except JWTError as e:
        raise ValueError(f"Invalid token: {str(e)}")

    if "sub" not in payload:
        raise ValueError("Invalid token: missing 'sub' field")
    if payload.get("type") != SESSION_TOKEN_TYPE:
        raise ValueError("Invalid token: wrong token type")

    return payload


def get_token_user_id(token: str) -> int:
    """Return the user id a valid token was issued for."""
    payload = decode_token(token)
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise ValueError("Invalid token: malformed 'sub' field")
