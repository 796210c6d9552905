"""Stage service - production stage catalog and per-booking project progress"""

import logging

from sqlalchemy.orm import Session, joinedload

from ...config import Settings
from ...database import transaction
from ...email_service import send_quietly, studio_sender
from ...email_templates import new_stage_template
from ...exceptions import ConflictError, NotFoundError
from ...models import Booking, BookingStage, ProductionStage
from ...shared.timeutils import utc_now
from .schemas import AdminStageView, ClientStageView, ProductionStageCreate

logger = logging.getLogger(__name__)

STAGE_NOT_FOUND = "Nie znaleziono etapu."
CANNOT_APPROVE = "Nie znaleziono etapu lub nie można go zatwierdzić."
STAGE_IN_USE = "Etap jest przypisany do rezerwacji i nie może zostać usunięty."


class StageService:
    def __init__(self, db: Session, settings: Settings, mailer=None):
        self.db = db
        self.settings = settings
        self.mailer = mailer

    # ============================================================================
    # PRODUCTION STAGE CATALOG
    # ============================================================================

    def list_stages(self) -> list[ProductionStage]:
        return self.db.query(ProductionStage).order_by(ProductionStage.id).all()

    def create_stage(self, data: ProductionStageCreate) -> ProductionStage:
        stage = ProductionStage(**data.model_dump())
        with transaction(self.db, "Błąd tworzenia etapu."):
            self.db.add(stage)
        self.db.refresh(stage)
        return stage

    def delete_stage(self, stage_id: int) -> None:
        stage = self.db.get(ProductionStage, stage_id)
        if stage is None:
            raise NotFoundError(STAGE_NOT_FOUND)
        in_use = self.db.query(BookingStage.id).filter(BookingStage.stage_id == stage_id).first()
        if in_use is not None:
            logger.warning(f"⚠️ Production stage {stage_id} is assigned to bookings, not deleted")
            raise ConflictError(STAGE_IN_USE)
        with transaction(self.db, "Błąd usuwania etapu."):
            self.db.delete(stage)
        logger.info(f"🗑️ Production stage {stage_id} deleted")

    # ============================================================================
    # BOOKING PROGRESS
    # ============================================================================

    def _booking_stages(self, booking_id: int) -> list[BookingStage]:
        return (
            self.db.query(BookingStage)
            .join(ProductionStage, BookingStage.stage_id == ProductionStage.id)
            .options(joinedload(BookingStage.stage))
            .filter(BookingStage.booking_id == booking_id)
            .order_by(ProductionStage.id, BookingStage.id)
            .all()
        )

    def client_stages(self, booking_id: int) -> list[ClientStageView]:
        return [
            ClientStageView(
                id=bs.id,
                name=bs.stage.name,
                description=bs.stage.description,
                status=bs.status,
                completed_at=bs.completed_at,
            )
            for bs in self._booking_stages(booking_id)
        ]

    def admin_stages(self, booking_id: int) -> list[AdminStageView]:
        return [
            AdminStageView(id=bs.id, name=bs.stage.name, status=bs.status)
            for bs in self._booking_stages(booking_id)
        ]

    def approve(self, booking_id: int, booking_stage_id: int) -> None:
        """The couple signs off a stage waiting for their approval"""
        booking_stage = (
            self.db.query(BookingStage)
            .filter(
                BookingStage.id == booking_stage_id,
                BookingStage.booking_id == booking_id,
                BookingStage.status == "awaiting_approval",
            )
            .first()
        )
        if booking_stage is None:
            raise NotFoundError(CANNOT_APPROVE)

        with transaction(self.db, "Błąd serwera."):
            booking_stage.status = "completed"
            booking_stage.completed_at = utc_now()
        logger.info(f"✅ Booking {booking_id} approved stage {booking_stage_id}")

    def assign(self, booking: Booking, stage_id: int) -> BookingStage:
        stage = self.db.get(ProductionStage, stage_id)
        if stage is None:
            raise NotFoundError(STAGE_NOT_FOUND)
        already = (
            self.db.query(BookingStage.id)
            .filter(BookingStage.booking_id == booking.id, BookingStage.stage_id == stage_id)
            .first()
        )
        if already:
            raise ConflictError("Ten etap jest już przypisany do rezerwacji.")

        booking_stage = BookingStage(booking_id=booking.id, stage_id=stage_id, status="pending")
        with transaction(self.db, "Błąd dodawania etapu."):
            self.db.add(booking_stage)
        logger.info(f"➕ Stage '{stage.name}' added to booking {booking.id}")

        send_quietly(
            self.mailer,
            to=booking.email,
            subject="Aktualizacja Twojego projektu: Nowy etap",
            mjml_content=new_stage_template(
                booking.bride_name,
                booking.groom_name,
                stage.name,
                f"{self.settings.frontend_url}/logowanie",
            ),
            from_address=studio_sender(self.db),
        )
        return booking_stage

    def _get_booking_stage(self, booking_stage_id: int) -> BookingStage:
        booking_stage = self.db.get(BookingStage, booking_stage_id)
        if booking_stage is None:
            raise NotFoundError(STAGE_NOT_FOUND)
        return booking_stage

    def set_status(self, booking_stage_id: int, status: str) -> None:
        booking_stage = self._get_booking_stage(booking_stage_id)
        with transaction(self.db, "Błąd aktualizacji statusu."):
            booking_stage.status = status
            booking_stage.completed_at = utc_now() if status == "completed" else None

    def remove(self, booking_stage_id: int) -> None:
        booking_stage = self._get_booking_stage(booking_stage_id)
        with transaction(self.db, "Błąd usuwania etapu."):
            self.db.delete(booking_stage)
