"""Session routes: login, logout and session verification."""
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
from eventboard.schemas import LoginRequest, LoginResponse, MessageResponse, SessionStatus, UserOut
from eventboard.services.auth_service import AuthService
from eventboard.db.init_db import get_db
from eventboard.db.models.user import User
from eventboard.auth import get_current_user
from eventboard.core.config import settings
from eventboard.core.limiter import limiter

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(session: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(session)


@router.post("/login", response_model=LoginResponse)
@limiter.limit("5/minute")
async def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Check credentials and start a 24 hour session.

    Rate limit: 5 requests per minute

    The signed session token is only ever sent back as an HttpOnly cookie.
    """
    user, token = await auth_service.login(credentials)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return LoginResponse(message="Login successful", user=UserOut.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Drop the session cookie. Tokens are stateless, so nothing else is revoked."""
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return MessageResponse(message="Logged out")


@router.get("/verify", response_model=SessionStatus)
async def verify_session(current_user: User = Depends(get_current_user)):
    """Report whether the session cookie is still valid."""
    return SessionStatus(
        authenticated=True,
        user_id=current_user.id,
        user=UserOut.model_validate(current_user),
    )
