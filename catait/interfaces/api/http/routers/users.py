"""
===============================================================================
CRC CARD: catait/interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    User Administration Router

Responsibilities:
    - GET /admin/users: paginated list with search (username/email/phone).
    - POST /admin/users: create an account.
    - PUT /admin/users/{user_id}: partial update.
    - DELETE /admin/users/{user_id}: soft-deactivate.
    - Every endpoint requires scope users:admin; writes are audited.
    - Translate UserAdminError -> RFC7807 (CONFLICT -> 409 with details.field).

Collaborators:
    - catait.application.usecases.users
    - catait.audit.emit_audit_event
    - catait.identity.auth (require_scope)
    - catait.container (DI factories)
    - schemas.users (pydantic DTOs)
===============================================================================
"""

from __future__ import annotations

from catait.application.usecases import (
    CreateUserUseCase,
    DeactivateUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from catait.application.usecases.users import UserAdminError, UserAdminErrorCode
from catait.audit import emit_audit_event
from catait.container import (
    get_audit_repository,
    get_create_user_use_case,
    get_deactivate_user_use_case,
    get_list_users_use_case,
    get_update_user_use_case,
)
from catait.crosscutting.error_responses import (
    conflict,
    internal_error,
    invalid_input,
    not_found,
)
from catait.crosscutting.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    build_page_info,
)
from catait.domain.repositories import AuditEventRepository
from catait.identity.auth import SCOPE_USERS_ADMIN, require_scope
from fastapi import APIRouter, Depends, Query, Request

from ..schemas.users import (
    AdminUserRes,
    CreateUserReq,
    DeactivateUserRes,
    UpdateUserReq,
    UserEnvelopeRes,
    UsersPage,
    UsersPageRes,
)

router = APIRouter(
    prefix="/admin/users",
    tags=["admin"],
    dependencies=[Depends(require_scope(SCOPE_USERS_ADMIN))],
)


def _raise_user_error(error: UserAdminError) -> None:
    if error.code == UserAdminErrorCode.INVALID_INPUT:
        raise invalid_input(error.message, details=error.details)

    if error.code == UserAdminErrorCode.NOT_FOUND:
        raise not_found(error.message)

    if error.code == UserAdminErrorCode.CONFLICT:
        raise conflict(error.message, details=error.details)

    raise internal_error(error.message)


@router.get("", response_model=UsersPageRes)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    search: str | None = Query(None, max_length=100),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    result = use_case.execute(page=page, limit=limit, search=search)
    if result.error is not None:
        _raise_user_error(result.error)

    return UsersPageRes(
        data=UsersPage(
            users=[AdminUserRes.from_user(u) for u in result.users],
            pagination=build_page_info(
                page=result.page, limit=result.limit, total=result.total
            ),
        )
    )


@router.post("", response_model=UserEnvelopeRes, status_code=201)
def create_user(
    req: CreateUserReq,
    request: Request,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
    audit_repo: AuditEventRepository | None = Depends(get_audit_repository),
):
    result = use_case.execute(
        username=req.username,
        email=req.email,
        phone=req.phone,
        password=req.password,
    )
    if result.error is not None:
        _raise_user_error(result.error)

    emit_audit_event(
        audit_repo,
        action="admin.users.create",
        request=request,
        user_id=result.user.id,
        metadata={"username": result.user.username},
    )
    return UserEnvelopeRes(data=AdminUserRes.from_user(result.user))


@router.put("/{user_id}", response_model=UserEnvelopeRes)
def update_user(
    user_id: str,
    req: UpdateUserReq,
    request: Request,
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
    audit_repo: AuditEventRepository | None = Depends(get_audit_repository),
):
    result = use_case.execute(
        user_id,
        username=req.username,
        email=req.email,
        phone=req.phone,
        password=req.password,
        avatar=req.avatar,
        is_active=req.is_active,
    )
    if result.error is not None:
        _raise_user_error(result.error)

    # R: field names only; values (and the password) stay out of the trail.
    emit_audit_event(
        audit_repo,
        action="admin.users.update",
        request=request,
        user_id=result.user.id,
        metadata={"fields": sorted(req.model_dump(exclude_none=True))},
    )
    return UserEnvelopeRes(data=AdminUserRes.from_user(result.user))


@router.delete("/{user_id}", response_model=DeactivateUserRes)
def deactivate_user(
    user_id: str,
    request: Request,
    use_case: DeactivateUserUseCase = Depends(get_deactivate_user_use_case),
    audit_repo: AuditEventRepository | None = Depends(get_audit_repository),
):
    result = use_case.execute(user_id)
    if result.error is not None:
        _raise_user_error(result.error)

    emit_audit_event(
        audit_repo,
        action="admin.users.deactivate",
        request=request,
        user_id=result.user_id,
    )
    return DeactivateUserRes(id=result.user_id)
