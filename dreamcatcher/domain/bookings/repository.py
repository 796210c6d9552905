"""Booking repository - Database operations for bookings"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import AccessKey, Booking, BookingStage, DiscountCode, ProductionStage

FIRST_STAGE_PATTERN = "%ankiet%"


class BookingRepository:
    """Repository for booking database operations (callers own the transaction)"""

    @staticmethod
    def get_by_id(db: Session, booking_id: int) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_by_client_id(db: Session, client_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.client_id == client_id).first()

    @staticmethod
    def list_bookings(db: Session) -> list[Booking]:
        return db.query(Booking).order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def list_with_wedding_date(db: Session) -> list[Booking]:
        return db.query(Booking).filter(Booking.wedding_date.isnot(None)).all()

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        booking = Booking(**booking_data)
        db.add(booking)
        db.flush()
        return booking

    @staticmethod
    def update_booking(booking: Booking, **updates) -> Booking:
        for key, value in updates.items():
            setattr(booking, key, value)
        return booking

    @staticmethod
    def delete_booking(db: Session, booking: Booking) -> None:
        db.delete(booking)

    # ------------------------------------------------------------------
    # Related writes performed inside the booking transaction
    # ------------------------------------------------------------------

    @staticmethod
    def find_access_key(db: Session, key: str) -> Optional[AccessKey]:
        return db.query(AccessKey).filter(AccessKey.key == key).first()

    @staticmethod
    def consume_access_key(db: Session, access_key: AccessKey) -> None:
        db.delete(access_key)

    @staticmethod
    def start_first_stage(db: Session, booking_id: int) -> Optional[BookingStage]:
        """Open the questionnaire stage ("ankieta") for a new booking, if one is defined"""
        stage = (
            db.query(ProductionStage)
            .filter(ProductionStage.name.ilike(FIRST_STAGE_PATTERN))
            .order_by(ProductionStage.id)
            .first()
        )
        if not stage:
            return None

        booking_stage = BookingStage(booking_id=booking_id, stage_id=stage.id, status="in_progress")
        db.add(booking_stage)
        return booking_stage

    @staticmethod
    def increment_discount_usage(db: Session, code: str) -> int:
        return (
            db.query(DiscountCode)
            .filter(DiscountCode.code == code)
            .update(
                {DiscountCode.times_used: DiscountCode.times_used + 1},
                synchronize_session=False,
            )
        )
