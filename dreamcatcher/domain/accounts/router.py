"""Account router - logins, password reset and admin credentials"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...auth import Principal, get_current_admin
from ...config import Settings, get_settings
from ...database import get_db
from ...email_service import get_mailer
from ...rate_limiter import admin_login_rate_limit, login_rate_limit, password_reset_rate_limit
from ...schemas import MessageResponse
from .schemas import (
    AdminLogin,
    ClientLogin,
    CredentialsUpdate,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    TokenResponse,
)
from .service import AccountService

router = APIRouter(tags=["Accounts"])


def get_account_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer=Depends(get_mailer),
) -> AccountService:
    return AccountService(db, settings, mailer)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: Request,
    data: ClientLogin,
    _: None = Depends(login_rate_limit),
    service: AccountService = Depends(get_account_service),
):
    """Client portal login"""
    return TokenResponse(token=service.login_client(request, data))


@router.post("/admin/login", response_model=TokenResponse)
async def admin_login(
    request: Request,
    data: AdminLogin,
    _: None = Depends(admin_login_rate_limit),
    service: AccountService = Depends(get_account_service),
):
    return TokenResponse(token=service.login_admin(request, data))


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    data: ForgotPasswordRequest,
    _: None = Depends(password_reset_rate_limit),
    service: AccountService = Depends(get_account_service),
):
    # Same answer whether or not the email belongs to a booking
    service.request_password_reset(data.email)
    return MessageResponse(
        message="Jeśli konto o podanym adresie e-mail istnieje, wysłaliśmy na nie instrukcje."
    )


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    data: ResetPasswordRequest,
    _: None = Depends(password_reset_rate_limit),
    service: AccountService = Depends(get_account_service),
):
    service.reset_password(data)
    return MessageResponse(message="Hasło zostało pomyślnie zresetowane.")


@router.patch("/admin/credentials", response_model=MessageResponse)
async def update_credentials(
    data: CredentialsUpdate,
    admin: Principal = Depends(get_current_admin),
    service: AccountService = Depends(get_account_service),
):
    service.update_admin_credentials(admin.admin_id, data)
    return MessageResponse(message="Dane logowania zaktualizowane.")
