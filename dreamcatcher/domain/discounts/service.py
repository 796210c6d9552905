"""Discount service - discount codes for the booking calculator"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...database import transaction
from ...exceptions import ConflictError, NotFoundError, ServerError, ValidationError
from ...models import DiscountCode
from ...shared.timeutils import as_utc, utc_now
from .schemas import DiscountCreate

logger = logging.getLogger(__name__)

CODE_EXISTS = "Kod rabatowy już istnieje."
CODE_INVALID = "Kod rabatowy jest nieprawidłowy lub wygasł."


def is_redeemable(discount: DiscountCode) -> bool:
    """Not expired and still under its usage limit"""
    expires_at = as_utc(discount.expires_at)
    if expires_at is not None and expires_at <= utc_now():
        return False
    if discount.usage_limit is not None and discount.times_used >= discount.usage_limit:
        return False
    return True


class DiscountService:
    def __init__(self, db: Session):
        self.db = db

    def _get_by_code(self, code: str) -> Optional[DiscountCode]:
        return self.db.query(DiscountCode).filter(DiscountCode.code == code).first()

    def validate_code(self, code: Optional[str]) -> DiscountCode:
        if not code:
            raise ValidationError("Kod nie został podany.")

        discount = self._get_by_code(code)
        if discount is None or not is_redeemable(discount):
            raise NotFoundError(CODE_INVALID)
        return discount

    def list_codes(self) -> list[DiscountCode]:
        return (
            self.db.query(DiscountCode)
            .order_by(DiscountCode.created_at.desc(), DiscountCode.id.desc())
            .all()
        )

    def create_code(self, data: DiscountCreate) -> DiscountCode:
        if self._get_by_code(data.code):
            raise ConflictError(CODE_EXISTS)

        discount = DiscountCode(**data.model_dump(), times_used=0)
        try:
            self.db.add(discount)
            self.db.commit()
        except IntegrityError as e:
            # Same code inserted concurrently
            self.db.rollback()
            raise ConflictError(CODE_EXISTS) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating discount code: {e}")
            raise ServerError("Błąd tworzenia kodu.") from e

        self.db.refresh(discount)
        logger.info(f"🏷️ Discount code {discount.code} created")
        return discount

    def delete_code(self, discount_id: int) -> None:
        discount = self.db.get(DiscountCode, discount_id)
        if discount is None:
            raise NotFoundError("Nie znaleziono kodu rabatowego.")
        with transaction(self.db, "Błąd usuwania kodu."):
            self.db.delete(discount)
        logger.info(f"🗑️ Discount code {discount_id} deleted")
