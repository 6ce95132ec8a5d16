"""
Hidden administrator panel API.

Gated by the shared ADMIN_SECRET_PASSWORD instead of a session: sent in the
``X-Admin-Secret`` header for reads and as ``secret_password`` in the body
for writes.
"""
from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from eventboard.schemas import AdminSecretRequest, AdminUserCreate, MessageResponse, UserOut
from eventboard.db.init_db import get_db
from eventboard.services.admin_user_service import AdminUserService

router = APIRouter(prefix="/admin-secret", tags=["admin-secret"])


def get_admin_user_service(session: AsyncSession = Depends(get_db)) -> AdminUserService:
    return AdminUserService(session)


@router.get("/users", response_model=List[UserOut])
async def list_users(
    x_admin_secret: Optional[str] = Header(None),
    service: AdminUserService = Depends(get_admin_user_service)
):
    return await service.list_users(x_admin_secret)


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: AdminUserCreate,
    service: AdminUserService = Depends(get_admin_user_service)
):
    return await service.create_user(payload)


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    payload: Optional[AdminSecretRequest] = None,
    service: AdminUserService = Depends(get_admin_user_service)
):
    """Delete an administrator. The last remaining account cannot be removed."""
    await service.delete_user(user_id, payload.secret_password if payload else None)
    return MessageResponse(message="User deleted")


@router.post("/reset-admin", response_model=UserOut)
async def reset_admin(
    payload: AdminSecretRequest,
    service: AdminUserService = Depends(get_admin_user_service)
):
    """Re-create the default administrator with the configured password."""
    return await service.reset_default_admin(payload.secret_password)
