"""Admin domain router.

Account provisioning and management routes. Every route requires an active
admin; creating admins and hard deletes require a super admin.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.admin import service
from app.admin.schemas import (
    AdminCreate,
    FactoryCreate,
    UserListResponse,
    UserStatusUpdate,
)
from app.auth.dependencies import AdminUserDep, SuperAdminUserDep, require_admin
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep
from app.core.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.user.models import UserRole, UserStatus
from app.user.schemas import AccountRead, AdminRead, FactoryRead, to_account_read

router = APIRouter(
    prefix=f"{Routes.ADMIN.prefix}/users",
    tags=[Routes.ADMIN.tag],
    dependencies=[Depends(require_admin)],
    responses={
        **CommonResponses.BAD_REQUEST,
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.post(
    "/factory",
    response_model=FactoryRead,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.CONFLICT},
)
async def create_factory(body: FactoryCreate, admin: AdminUserDep, session: SessionDep):
    """Provision a pending factory account and send its invitation."""
    return to_account_read(service.create_factory(session, body, admin))


@router.post(
    "/admin",
    response_model=AdminRead,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.CONFLICT},
)
async def create_admin(
    body: AdminCreate, admin: SuperAdminUserDep, session: SessionDep
):
    """Provision a pending admin account. Super admin only."""
    return to_account_read(service.create_admin(session, body, admin))


@router.get("", response_model=UserListResponse)
async def list_users(
    session: SessionDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
    role: UserRole | None = None,
    status_filter: Annotated[UserStatus | None, Query(alias="status")] = None,
):
    """List accounts newest first, optionally filtered by role and status."""
    users, total, total_pages = service.list_users(
        session, page, limit, role, status_filter
    )
    return UserListResponse(
        users=[to_account_read(user) for user in users],
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
    )


@router.get(
    "/{user_id}",
    response_model=AccountRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_user(user_id: uuid.UUID, session: SessionDep):
    """Get any account by id."""
    return to_account_read(service.get_user(session, user_id))


@router.put(
    "/{user_id}/status",
    response_model=AccountRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def update_user_status(
    user_id: uuid.UUID,
    body: UserStatusUpdate,
    admin: AdminUserDep,
    session: SessionDep,
):
    """Suspend, reactivate or soft-delete an account.

    Admin accounts can only be changed by a super admin.
    """
    user = service.update_user_status(
        session, user_id, body.status, body.reason, admin
    )
    return to_account_read(user)


@router.delete(
    "/{user_id}",
    response_model=AccountRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_user(user_id: uuid.UUID, admin: AdminUserDep, session: SessionDep):
    """Soft-delete an account."""
    return to_account_read(service.delete_user(session, user_id, admin))


@router.delete(
    "/{user_id}/hard",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**CommonResponses.NOT_FOUND},
)
async def hard_delete_user(
    user_id: uuid.UUID, admin: SuperAdminUserDep, session: SessionDep
):
    """Permanently delete an account. Super admin only."""
    service.hard_delete_user(session, user_id, admin)
