"""
===============================================================================
CRC CARD: catait/interfaces/api/http/routers/auth.py
===============================================================================

Class/Module:
    Password Reset Router

Responsibilities:
    - POST /auth/validate-reset-token: is this token live, and whose is it.
    - POST /auth/forgot-password: issue a reset token after identity check.
    - POST /auth/reset-password: consume a token and set a new password.
    - Translate ResetError -> RFC7807 (unknown/expired tokens are one 404).
    - Audit issued tokens and completed resets (user, IP, user agent).

Collaborators:
    - catait.application.usecases.password_reset
    - catait.audit.emit_audit_event
    - catait.container (DI factories)
    - schemas.auth (pydantic DTOs)
===============================================================================
"""

from __future__ import annotations

from catait.application.usecases import (
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    ValidateResetTokenUseCase,
)
from catait.application.usecases.password_reset import ResetError, ResetErrorCode
from catait.audit import emit_audit_event
from catait.container import (
    get_audit_repository,
    get_request_password_reset_use_case,
    get_reset_password_use_case,
    get_validate_reset_token_use_case,
)
from catait.crosscutting.error_responses import (
    internal_error,
    invalid_input,
    not_found,
)
from catait.domain.repositories import AuditEventRepository
from fastapi import APIRouter, Depends, Request

from ..schemas.auth import (
    ForgotPasswordReq,
    ForgotPasswordRes,
    ResetPasswordReq,
    ResetPasswordRes,
    UserSummaryRes,
    ValidateResetTokenReq,
    ValidateResetTokenRes,
)

router = APIRouter()


def _raise_reset_error(error: ResetError) -> None:
    if error.code == ResetErrorCode.INVALID_INPUT:
        raise invalid_input(error.message)

    if error.code in (ResetErrorCode.INVALID_OR_EXPIRED, ResetErrorCode.NOT_FOUND):
        raise not_found(error.message)

    raise internal_error(error.message)


@router.post(
    "/auth/validate-reset-token",
    response_model=ValidateResetTokenRes,
    tags=["auth"],
)
def validate_reset_token(
    req: ValidateResetTokenReq,
    use_case: ValidateResetTokenUseCase = Depends(get_validate_reset_token_use_case),
):
    result = use_case.execute(req.token)
    if result.error is not None:
        _raise_reset_error(result.error)
    return ValidateResetTokenRes(user=UserSummaryRes.from_summary(result.user))


@router.post(
    "/auth/forgot-password",
    response_model=ForgotPasswordRes,
    tags=["auth"],
)
def forgot_password(
    req: ForgotPasswordReq,
    request: Request,
    use_case: RequestPasswordResetUseCase = Depends(
        get_request_password_reset_use_case
    ),
    audit_repo: AuditEventRepository | None = Depends(get_audit_repository),
):
    result = use_case.execute(username=req.username, email=req.email, phone=req.phone)
    if result.error is not None:
        _raise_reset_error(result.error)

    emit_audit_event(
        audit_repo,
        action="forgot_password_request",
        request=request,
        user_id=result.user_id,
    )
    return ForgotPasswordRes(token=result.token, expires_at=result.expires_at)


@router.post(
    "/auth/reset-password",
    response_model=ResetPasswordRes,
    tags=["auth"],
)
def reset_password(
    req: ResetPasswordReq,
    request: Request,
    use_case: ResetPasswordUseCase = Depends(get_reset_password_use_case),
    audit_repo: AuditEventRepository | None = Depends(get_audit_repository),
):
    result = use_case.execute(token=req.token, new_password=req.new_password)
    if result.error is not None:
        _raise_reset_error(result.error)

    emit_audit_event(
        audit_repo,
        action="password_reset",
        request=request,
        user_id=result.user.id,
    )
    return ResetPasswordRes()
