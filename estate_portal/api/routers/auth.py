"""
Authentication API endpoints.

Routes:
- POST /auth/sign-up - Register (email, password, profile attributes)
- POST /auth/confirm - Confirm registration with the emailed code
- POST /auth/resend-code - Resend the confirmation code
- POST /auth/sign-in - Password sign-in, returns tokens
- POST /auth/sign-out - Revoke tokens and end the session
- POST /auth/forgot-password - Send a password reset code
- POST /auth/reset-password - Set a new password with the reset code

Dependencies: estate_portal.application.services.auth_service
System role: Authentication HTTP API
"""

from fastapi import APIRouter, Depends

from estate_portal.api.deps import get_auth_service, get_current_session
from estate_portal.application.services import AuthService
from estate_portal.core.session import UserSession
from estate_portal.models.auth import (
    AuthTokens,
    ConfirmSignUpRequest,
    EmailRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
    SignUpResult,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-up", response_model=SignUpResult, status_code=201)
async def sign_up(
    request: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SignUpResult:
    return await auth_service.sign_up(request)


@router.post("/confirm")
async def confirm_sign_up(
    request: ConfirmSignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    await auth_service.confirm_sign_up(request.email, request.code)
    return {"message": "Account confirmed. You can now sign in."}


@router.post("/resend-code")
async def resend_code(
    request: EmailRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    await auth_service.resend_confirmation_code(request.email)
    return {"message": "Verification code sent"}


@router.post("/sign-in", response_model=AuthTokens)
async def sign_in(
    request: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthTokens:
    return await auth_service.sign_in(request.email, request.password)


@router.post("/sign-out")
async def sign_out(
    session: UserSession = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    await auth_service.sign_out(session)
    return {"message": "Signed out"}


@router.post("/forgot-password")
async def forgot_password(
    request: EmailRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    await auth_service.forgot_password(request.email)
    return {"message": "If an account exists, a reset code has been sent"}


@router.post("/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    await auth_service.reset_password(request)
    return {"message": "Password updated. You can now sign in."}
