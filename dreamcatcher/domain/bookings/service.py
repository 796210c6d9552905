"""Booking service - Business logic for the booking flow and booking management"""

import logging
from typing import Any, Optional

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import Settings
from ...database import transaction
from ...email_service import EmailDeliveryError, send_quietly, studio_sender
from ...email_templates import booking_confirmation_template, credentials_reminder_template
from ...exceptions import ServerError, ValidationError
from ...models import Booking
from ...security_utils import hash_password, mask_sensitive_data
from ...shared import identifiers
from ...utils.blob_storage import ALLOWED_ATTACHMENT_TYPES, ALLOWED_IMAGE_TYPES, store_upload
from ..guests.repository import GuestRepository
from ..questionnaires.repository import QuestionnaireRepository
from .repository import BookingRepository
from .schemas import (
    AdminBookingUpdate,
    BookingCreate,
    ClientBookingUpdate,
    InviteSettings,
    PaymentUpdate,
)

logger = logging.getLogger(__name__)

MAX_BOOKING_ATTEMPTS = 3
BOOKING_FAILED = "Wystąpił błąd serwera podczas tworzenia rezerwacji."
INVALID_ACCESS_KEY = "Nieprawidłowy klucz dostępu."

# Columns that may not be cleared by a PATCH
NON_NULLABLE_FIELDS = {"email", "phone_number", "package_name", "total_price"}


def _clean_updates(data: Any) -> dict[str, Any]:
    updates = data.model_dump(exclude_unset=True)
    for field in NON_NULLABLE_FIELDS & updates.keys():
        if updates[field] is None:
            raise ValidationError(f"Brak wymaganego pola: {field}.")
    return updates


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session, settings: Settings, mailer=None, storage=None):
        self.db = db
        self.settings = settings
        self.mailer = mailer
        self.storage = storage
        self.repo = BookingRepository()

    @property
    def login_url(self) -> str:
        return f"{self.settings.frontend_url}/logowanie"

    # ============================================================================
    # PUBLIC BOOKING FLOW
    # ============================================================================

    def create_booking(self, data: BookingCreate) -> Booking:
        """
        Create a booking together with its client ID and hashed password.

        Everything (booking row, default guest groups, first production stage,
        default questionnaire, discount usage, access key consumption) commits
        or rolls back together.
        A client ID lost to a concurrent booking is retried with a freshly drawn ID.
        """
        if self.settings.require_valid_access_key:
            if not self.repo.find_access_key(self.db, data.accessKey):
                logger.warning(f"⚠️ Booking rejected - unknown access key {mask_sensitive_data(data.accessKey, 2)}")
                raise ValidationError(INVALID_ACCESS_KEY)

        password_hash = hash_password(data.password)

        for attempt in range(1, MAX_BOOKING_ATTEMPTS + 1):
            try:
                booking = self._insert_booking(data, password_hash)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                logger.warning(
                    f"🔁 Booking insert conflicted (attempt {attempt}/{MAX_BOOKING_ATTEMPTS}): {e.orig}"
                )
                continue
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"❌ Error creating booking: {e}")
                raise ServerError(BOOKING_FAILED) from e
            except Exception:
                self.db.rollback()
                raise

            logger.info(f"✅ Booking {booking.id} created for client {booking.client_id}")
            self._send_confirmation(booking)
            return booking

        logger.error(f"❌ Booking creation gave up after {MAX_BOOKING_ATTEMPTS} conflicting attempts")
        raise ServerError(BOOKING_FAILED)

    def _insert_booking(self, data: BookingCreate, password_hash: str) -> Booking:
        access_key = None
        if self.settings.require_valid_access_key:
            access_key = self.repo.find_access_key(self.db, data.accessKey)
            if not access_key:
                raise ValidationError(INVALID_ACCESS_KEY)

        client_id = identifiers.allocate_client_id(self.db)

        booking = self.repo.create_booking(
            self.db,
            client_id=client_id,
            password_hash=password_hash,
            access_key=data.accessKey,
            package_name=data.packageName,
            total_price=data.totalPrice,
            selected_items=data.selectedItems,
            bride_name=data.brideName,
            groom_name=data.groomName,
            wedding_date=data.weddingDate,
            bride_address=data.brideAddress,
            groom_address=data.groomAddress,
            church_location=data.churchLocation,
            venue_location=data.venueLocation,
            schedule=data.schedule,
            email=data.email,
            phone_number=data.phoneNumber,
            additional_info=data.additionalInfo,
            discount_code=data.discountCode,
        )

        GuestRepository.create_default_groups(self.db, booking.id)
        self.repo.start_first_stage(self.db, booking.id)
        QuestionnaireRepository.assign_default(self.db, booking.id)

        if data.discountCode:
            self.repo.increment_discount_usage(self.db, data.discountCode)
        if access_key is not None:
            self.repo.consume_access_key(self.db, access_key)

        self.db.flush()
        return booking

    def _send_confirmation(self, booking: Booking) -> None:
        if self.mailer is None:
            return
        send_quietly(
            self.mailer,
            to=booking.email,
            subject="Potwierdzenie rezerwacji - Dreamcatcher Film",
            mjml_content=booking_confirmation_template(booking.id, booking.client_id, self.login_url),
            from_address=studio_sender(self.db),
        )

    # ============================================================================
    # CLIENT PORTAL
    # ============================================================================

    def update_own_booking(self, booking: Booking, data: ClientBookingUpdate) -> Booking:
        updates = _clean_updates(data)
        with transaction(self.db, "Błąd aktualizacji danych."):
            self.repo.update_booking(booking, **updates)
        self.db.refresh(booking)
        logger.info(f"📝 Client {booking.client_id} updated fields: {sorted(updates)}")
        return booking

    async def upload_couple_photo(self, booking: Booking, file: UploadFile) -> dict:
        blob = await store_upload(self.storage, file, "couples", ALLOWED_IMAGE_TYPES)
        with transaction(self.db, "Błąd zapisu zdjęcia."):
            booking.couple_photo_url = blob["url"]
        return blob

    def update_invite_settings(self, booking: Booking, data: InviteSettings) -> None:
        with transaction(self.db, "Błąd zapisu ustawień."):
            self.repo.update_booking(booking, **data.model_dump(exclude_unset=True))

    async def upload_invite_image(self, file: UploadFile) -> dict:
        return await store_upload(self.storage, file, "invites", ALLOWED_IMAGE_TYPES)

    # ============================================================================
    # ADMIN MANAGEMENT
    # ============================================================================

    def list_bookings(self) -> list[Booking]:
        return self.repo.list_bookings(self.db)

    def update_booking(self, booking: Booking, data: AdminBookingUpdate) -> Booking:
        updates = _clean_updates(data)
        with transaction(self.db, "Błąd aktualizacji rezerwacji."):
            self.repo.update_booking(booking, **updates)
        self.db.refresh(booking)
        logger.info(f"📝 Admin updated booking {booking.id}: {sorted(updates)}")
        return booking

    def delete_booking(self, booking: Booking) -> None:
        booking_id = booking.id
        with transaction(self.db, "Błąd usuwania rezerwacji."):
            self.repo.delete_booking(self.db, booking)
        logger.info(f"🗑️ Booking {booking_id} deleted")

    def update_payment(self, booking: Booking, data: PaymentUpdate) -> None:
        with transaction(self.db, "Błąd zapisu płatności."):
            self.repo.update_booking(
                booking, payment_status=data.payment_status, amount_paid=data.amount_paid
            )
        logger.info(f"💰 Booking {booking.id} payment: {data.payment_status} ({data.amount_paid})")

    def update_contract(self, booking: Booking, contract_url: Optional[str]) -> None:
        with transaction(self.db, "Błąd zapisu umowy."):
            booking.contract_url = contract_url

    async def upload_contract(self, booking: Booking, file: UploadFile) -> dict:
        blob = await store_upload(self.storage, file, "contracts", ALLOWED_ATTACHMENT_TYPES)
        self.update_contract(booking, blob["url"])
        logger.info(f"📄 Contract uploaded for booking {booking.id}")
        return blob

    def resend_credentials(self, booking: Booking) -> None:
        try:
            self.mailer.send_email(
                to=booking.email,
                subject="Twoje dane logowania - Dreamcatcher Film",
                mjml_content=credentials_reminder_template(booking.client_id, self.login_url),
                from_address=studio_sender(self.db),
            )
        except EmailDeliveryError as e:
            raise ServerError("Błąd wysyłania e-maila.") from e
