"""Account repository - login lookups and password reset tokens"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models import Admin, Booking, PasswordResetToken


class AccountRepository:
    """Repository for account database operations"""

    @staticmethod
    def find_client_account(db: Session, identifier: str) -> Optional[Booking]:
        """Booking whose client ID, or email, matches the login identifier"""
        return (
            db.query(Booking)
            .filter(or_(Booking.client_id == identifier, Booking.email == identifier.lower()))
            .order_by(Booking.id)
            .first()
        )

    @staticmethod
    def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
        return db.query(Admin).filter(Admin.email == email).first()

    @staticmethod
    def get_admin(db: Session, admin_id: int) -> Optional[Admin]:
        return db.query(Admin).filter(Admin.id == admin_id).first()

    @staticmethod
    def admin_email_taken(db: Session, email: str, admin_id: int) -> bool:
        """Another admin already logs in with this address"""
        return (
            db.query(Admin.id)
            .filter(func.lower(Admin.email) == email, Admin.id != admin_id)
            .first()
            is not None
        )

    @staticmethod
    def booking_email_exists(db: Session, email: str) -> bool:
        return db.query(Booking.id).filter(Booking.email == email).first() is not None

    @staticmethod
    def store_reset_token(db: Session, email: str, token_hash: str, expires_at: datetime) -> None:
        """Replace any earlier reset token of this email"""
        db.query(PasswordResetToken).filter(PasswordResetToken.email == email).delete()
        db.add(PasswordResetToken(email=email, token_hash=token_hash, expires_at=expires_at))
        db.flush()

    @staticmethod
    def get_reset_token(db: Session, token_hash: str) -> Optional[PasswordResetToken]:
        return (
            db.query(PasswordResetToken).filter(PasswordResetToken.token_hash == token_hash).first()
        )

    @staticmethod
    def delete_expired_tokens(db: Session, now: datetime) -> int:
        return (
            db.query(PasswordResetToken)
            .filter(PasswordResetToken.expires_at < now)
            .delete(synchronize_session=False)
        )

    @staticmethod
    def set_password_for_email(db: Session, email: str, password_hash: str) -> int:
        """Every booking made with this email shares the reset password"""
        return (
            db.query(Booking)
            .filter(Booking.email == email)
            .update({Booking.password_hash: password_hash}, synchronize_session=False)
        )
