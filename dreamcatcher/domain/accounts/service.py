"""
Account service - client/admin login, password reset and admin credentials

Unknown accounts and wrong passwords produce the same error, and both cost one
bcrypt verification, so responses do not reveal which identifiers exist.
"""

import logging
from datetime import timedelta

from fastapi import Request
from sqlalchemy.orm import Session

from ...auth import issue_admin_token, issue_client_token
from ...config import Settings
from ...database import transaction
from ...email_service import send_quietly, studio_sender
from ...email_templates import password_reset_template
from ...exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ...security_utils import (
    burn_password_check,
    generate_secure_token,
    hash_password,
    hash_token,
    verify_password,
)
from ...shared.timeutils import as_utc, utc_now
from .repository import AccountRepository
from .schemas import AdminLogin, ClientLogin, CredentialsUpdate, ResetPasswordRequest

logger = logging.getLogger(__name__)

CLIENT_LOGIN_FAILED = "Nieprawidłowe dane logowania lub hasło."
ADMIN_LOGIN_FAILED = "Nieprawidłowy e-mail lub hasło."
RESET_TOKEN_INVALID = "Token jest nieprawidłowy lub wygasł."
RESET_TOKEN_LIFETIME = timedelta(minutes=30)
EMAIL_TAKEN = "Ten adres e-mail jest już używany."


class AccountService:
    def __init__(self, db: Session, settings: Settings, mailer=None):
        self.db = db
        self.settings = settings
        self.mailer = mailer
        self.repo = AccountRepository()

    # ============================================================================
    # LOGIN
    # ============================================================================

    def login_client(self, request: Request, data: ClientLogin) -> str:
        booking = self.repo.find_client_account(self.db, data.clientId)
        if booking is None:
            burn_password_check(data.password)
            logger.warning("🔒 Client login failed")
            raise AuthenticationError(CLIENT_LOGIN_FAILED)
        if not verify_password(data.password, booking.password_hash):
            logger.warning("🔒 Client login failed")
            raise AuthenticationError(CLIENT_LOGIN_FAILED)

        logger.info(f"🔑 Client {booking.client_id} logged in")
        return issue_client_token(request, booking.client_id)

    def login_admin(self, request: Request, data: AdminLogin) -> str:
        admin = self.repo.get_admin_by_email(self.db, data.email)
        if admin is None:
            burn_password_check(data.password)
            logger.warning("🔒 Admin login failed")
            raise AuthenticationError(ADMIN_LOGIN_FAILED)
        if not verify_password(data.password, admin.password_hash):
            logger.warning("🔒 Admin login failed")
            raise AuthenticationError(ADMIN_LOGIN_FAILED)

        logger.info(f"🔑 Admin {admin.id} logged in")
        return issue_admin_token(request, admin.id, admin.email)

    # ============================================================================
    # PASSWORD RESET
    # ============================================================================

    def request_password_reset(self, email: str) -> None:
        """Store a reset token and mail it, but only when a booking uses this email"""
        if not self.repo.booking_email_exists(self.db, email):
            logger.info("🔐 Password reset requested for unknown email")
            return

        token = generate_secure_token()
        with transaction(self.db, "Wystąpił błąd serwera."):
            self.repo.store_reset_token(
                self.db, email, hash_token(token), utc_now() + RESET_TOKEN_LIFETIME
            )

        send_quietly(
            self.mailer,
            to=email,
            subject="Reset hasła - Dreamcatcher Film",
            mjml_content=password_reset_template(
                f"{self.settings.frontend_url}/reset-hasla/{token}"
            ),
            from_address=studio_sender(self.db),
        )
        logger.info("🔐 Password reset token issued")

    def reset_password(self, data: ResetPasswordRequest) -> None:
        if not data.token or not data.password:
            raise ValidationError("Brak tokenu lub hasła.")

        now = utc_now()
        with transaction(self.db, "Wystąpił błąd serwera."):
            self.repo.delete_expired_tokens(self.db, now)
            entry = self.repo.get_reset_token(self.db, hash_token(data.token))
            if entry is None or as_utc(entry.expires_at) < now:
                raise ValidationError(RESET_TOKEN_INVALID)

            updated = self.repo.set_password_for_email(
                self.db, entry.email, hash_password(data.password)
            )
            self.db.delete(entry)

        logger.info(f"🔐 Password reset for {updated} booking(s)")

    # ============================================================================
    # ADMIN CREDENTIALS
    # ============================================================================

    def update_admin_credentials(self, admin_id: int, data: CredentialsUpdate) -> None:
        admin = self.repo.get_admin(self.db, admin_id)
        if admin is None:
            raise NotFoundError("Nie znaleziono administratora.")
        if not verify_password(data.currentPassword, admin.password_hash):
            raise AuthenticationError("Nieprawidłowe bieżące hasło.")
        if data.newEmail and self.repo.admin_email_taken(self.db, data.newEmail, admin_id):
            raise ConflictError(EMAIL_TAKEN)

        with transaction(self.db, "Błąd zapisu danych logowania."):
            if data.newEmail:
                admin.email = data.newEmail
            if data.newPassword:
                admin.password_hash = hash_password(data.newPassword)
        logger.info(f"🔑 Admin {admin_id} updated credentials")
