from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession
from eventboard.core.config import settings
from eventboard.core.logging import logger
from eventboard.core.security import get_token_user_id
from eventboard.db.init_db import get_db
from eventboard.db.models.user import User
from eventboard.db.repositories import get_user

# Session token travels in an HttpOnly cookie; auto_error is off so a missing
# cookie is answered with 401 rather than 403.
session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


async def get_current_user(
    token: Optional[str] = Depends(session_cookie),
    session: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the session cookie to the logged-in user.

    Raises:
        HTTPException: 401 if the cookie is missing, the token is invalid or
            expired, or the user no longer exists
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated - session token not found",
        )

    try:
        user_id = get_token_user_id(token)
    except ValueError as e:
        logger.warning(f"Rejected session token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Not authenticated - {e}",
        )

    user = await get_user(session, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated - user no longer exists",
        )
    return user
