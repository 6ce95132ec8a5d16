"""Authentication service: credential checks and session token issuance."""
from typing import Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from eventboard.schemas import LoginRequest
from eventboard.db.models.user import User
from eventboard.db.repositories import get_user_by_email as db_get_user_by_email
from eventboard.core.security import create_session_token, verify_password
from eventboard.core.logging import logger


class AuthService:
    """
    Service layer for authentication operations.

    Sessions are not stored: logging in signs a token, logging out is
    handled entirely by clearing the cookie.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def login(self, credentials: LoginRequest) -> Tuple[User, str]:
        """
        Authenticate a user and issue a session token.

        Args:
            credentials: Login e-mail and password

        Returns:
            Tuple of the authenticated user and the signed session token

        Raises:
            HTTPException: 400 if a field is missing, 401 if credentials are invalid
        """
        email = (credentials.email or "").strip().lower()
        if not email or not credentials.password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email and password are required",
            )

        user = await db_get_user_by_email(self.session, email)
        if not user or not verify_password(credentials.password, user.password):
            logger.info(f"Failed login attempt for {email}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect credentials",
            )

        logger.info(f"User {user.id} logged in")
        return user, create_session_token(user.id)
