"""
Administrator account management behind the shared admin secret.

This panel is not protected by a session; the static ADMIN_SECRET_PASSWORD
sent with each request is the only gate.
"""
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from eventboard.core.config import settings
from eventboard.core.logging import logger
from eventboard.core.security import secrets_match, validate_password
from eventboard.db.models.user import User
from eventboard.db import repositories as repo
from eventboard.schemas import AdminUserCreate

MAX_NAME_LENGTH = 255


class AdminUserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    def check_secret(self, provided: Optional[str]) -> None:
        """
        Raises:
            HTTPException: 403 if the shared secret is missing or wrong
        """
        if not secrets_match(provided, settings.ADMIN_SECRET_PASSWORD):
            logger.warning("Admin-secret request rejected: wrong secret password")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied - incorrect secret password",
            )

    async def list_users(self, secret: Optional[str]) -> List[User]:
        self.check_secret(secret)
        return await repo.list_users(self.session)

    async def create_user(self, payload: AdminUserCreate) -> User:
        """
        Create an administrator account.

        Raises:
            HTTPException: 403 on a wrong secret, 400 on missing fields, a weak
                password or an e-mail already in use
        """
        self.check_secret(payload.secret_password)

        name = (payload.name or "").strip()
        email = (payload.email or "").strip().lower()
        if not name or not email or not payload.password:
            raise HTTPException(status_code=400, detail="Name, email and password are required")
        if len(name) > MAX_NAME_LENGTH:
            raise HTTPException(status_code=400, detail=f"Name too long. Maximum {MAX_NAME_LENGTH} characters.")

        try:
            validate_password(payload.password)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        if await repo.get_user_by_email(self.session, email):
            raise HTTPException(status_code=400, detail="Email already in use")

        user = await repo.create_user(self.session, name=name, email=email, password=payload.password)
        logger.info(f"Administrator {user.email} created")
        return user

    async def delete_user(self, user_id: int, secret: Optional[str]) -> None:
        """
        Delete an administrator, refusing to remove the last one.

        Raises:
            HTTPException: 403 on a wrong secret, 404 if the user does not
                exist, 400 if it is the only remaining user
        """
        self.check_secret(secret)

        user = await repo.get_user(self.session, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")

        if await repo.count_users(self.session) <= 1:
            raise HTTPException(status_code=400, detail="Cannot delete the last administrator")

        email = user.email
        await repo.delete_user(self.session, user)
        logger.info(f"Administrator {email} deleted")

    async def reset_default_admin(self, secret: Optional[str]) -> User:
        """
        Restore the default administrator with the configured name and password.

        An existing account keeps its id and is overwritten in one commit;
        a missing one is created.
        """
        self.check_secret(secret)

        email = settings.default_admin_login
        user = await repo.get_user_by_email(self.session, email)
        if user:
            user = await repo.reset_user_credentials(
                self.session,
                user,
                name=settings.DEFAULT_ADMIN_NAME,
                password=settings.DEFAULT_ADMIN_PASSWORD,
            )
        else:
            user = await repo.create_user(
                self.session,
                name=settings.DEFAULT_ADMIN_NAME,
                email=email,
                password=settings.DEFAULT_ADMIN_PASSWORD,
            )
        logger.info(f"Default administrator {user.email} reset")
        return user
