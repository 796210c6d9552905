"""Guest service - guest list, guest groups, invitations and public RSVP"""

import logging

from sqlalchemy.orm import Session

from ...config import Settings
from ...database import transaction
from ...email_service import EmailDeliveryError, format_sender, get_sender_details
from ...email_templates import couple_label, guest_invite_template
from ...exceptions import NotFoundError, ServerError, ValidationError
from ...models import Booking, Guest, GuestGroup
from ...shared.validators import validate_uuid
from .repository import GuestRepository
from .schemas import GuestCreate, GuestUpdate, RsvpAnswer

logger = logging.getLogger(__name__)

GUEST_NOT_FOUND = "Nie znaleziono gościa."
GROUP_NOT_FOUND = "Nie znaleziono grupy."
INVITATION_NOT_FOUND = "Nie znaleziono zaproszenia."
NO_INVITEES = (
    "Brak gości do zaproszenia "
    "(wszyscy już odpowiedzieli lub nie mają podanego adresu e-mail)."
)


class GuestService:
    """Guest list operations scoped to one booking"""

    def __init__(self, db: Session, settings: Settings, mailer=None):
        self.db = db
        self.settings = settings
        self.mailer = mailer
        self.repo = GuestRepository()

    # ============================================================================
    # GROUPS
    # ============================================================================

    def list_groups(self, booking_id: int, recreate_defaults: bool = False) -> list[GuestGroup]:
        groups = self.repo.list_groups(self.db, booking_id)
        if groups or not recreate_defaults:
            return groups

        with transaction(self.db, "Błąd pobierania grup gości."):
            self.repo.create_default_groups(self.db, booking_id)
        logger.info(f"👥 Recreated default guest groups for booking {booking_id}")
        return self.repo.list_groups(self.db, booking_id)

    def create_group(self, booking_id: int, name: str) -> GuestGroup:
        with transaction(self.db, "Błąd tworzenia grupy."):
            group = self.repo.create_group(self.db, booking_id, name.strip())
        return group

    def delete_group(self, booking_id: int, group_id: int) -> None:
        group = self.repo.get_group(self.db, booking_id, group_id)
        if not group:
            raise NotFoundError(GROUP_NOT_FOUND)
        # Guests of the group stay on the list, ungrouped
        with transaction(self.db, "Błąd usuwania grupy."):
            self.db.delete(group)

    # ============================================================================
    # GUESTS
    # ============================================================================

    def list_guests(self, booking_id: int) -> list[Guest]:
        return self.repo.list_guests(self.db, booking_id)

    def _check_group(self, booking_id: int, group_id) -> None:
        if group_id is not None and not self.repo.get_group(self.db, booking_id, group_id):
            raise ValidationError("Nieprawidłowa grupa gości.")

    def add_guest(self, booking_id: int, data: GuestCreate) -> Guest:
        self._check_group(booking_id, data.group_id)
        with transaction(self.db, "Błąd dodawania gościa."):
            guest = self.repo.create_guest(self.db, booking_id, **data.model_dump())
        logger.info(f"➕ Guest {guest.id} added to booking {booking_id}")
        return guest

    def replace_guest(self, booking_id: int, guest_id: int, data: GuestUpdate) -> Guest:
        guest = self.repo.get_guest(self.db, booking_id, guest_id)
        if not guest:
            raise NotFoundError(GUEST_NOT_FOUND)
        self._check_group(booking_id, data.group_id)

        with transaction(self.db, "Błąd aktualizacji gościa."):
            for field, value in data.model_dump().items():
                setattr(guest, field, value)
        self.db.refresh(guest)
        return guest

    def delete_guest(self, booking_id: int, guest_id: int) -> None:
        guest = self.repo.get_guest(self.db, booking_id, guest_id)
        if not guest:
            raise NotFoundError(GUEST_NOT_FOUND)
        with transaction(self.db, "Błąd usuwania gościa."):
            self.db.delete(guest)

    # ============================================================================
    # INVITATIONS
    # ============================================================================

    def send_invites(self, booking: Booking) -> int:
        """
        Email an RSVP invitation to every guest who has an email address and
        has not answered yet. Sent in one batch on behalf of the couple, with
        replies going to the booking's email.

        Returns:
            Number of invited guests
        """
        invitees = self.repo.pending_invitees(self.db, booking.id)
        if not invitees:
            raise ValidationError(NO_INVITEES)

        _sender_name, from_email = get_sender_details(self.db)
        couple = couple_label(booking.bride_name, booking.groom_name)
        sender = format_sender(couple, from_email)
        subject = f"Zaproszenie na ślub {couple}"

        messages = [
            {
                "to": guest.email,
                "subject": subject,
                "mjml_content": guest_invite_template(
                    guest.name,
                    booking.bride_name,
                    booking.groom_name,
                    f"{self.settings.frontend_url}/rsvp/{guest.rsvp_token}",
                    invite_message=booking.invite_message,
                    invite_image_url=booking.invite_image_url,
                ),
                "from_address": sender,
                "reply_to": booking.email,
            }
            for guest in invitees
        ]

        try:
            self.mailer.send_batch(messages)
        except EmailDeliveryError as e:
            raise ServerError("Wystąpił błąd podczas wysyłania zaproszeń.") from e

        logger.info(f"💌 Sent {len(invitees)} invitations for booking {booking.id}")
        return len(invitees)

    # ============================================================================
    # PUBLIC RSVP
    # ============================================================================

    def _guest_for_token(self, token: str) -> Guest:
        guest = self.repo.get_guest_by_token(self.db, token) if validate_uuid(token) else None
        if not guest:
            raise NotFoundError(INVITATION_NOT_FOUND)
        return guest

    def get_invitation(self, token: str) -> tuple[Guest, Booking]:
        guest = self._guest_for_token(token)
        if not guest.booking:
            raise NotFoundError("Nie znaleziono powiązanej rezerwacji.")
        return guest, guest.booking

    def answer_invitation(self, token: str, data: RsvpAnswer) -> None:
        guest = self._guest_for_token(token)

        with transaction(self.db, "Błąd serwera."):
            guest.rsvp_status = data.rsvp_status
            guest.notes = data.notes
            guest.companion_status = data.companion_status
        logger.info(f"💌 Guest {guest.id} answered RSVP: {data.rsvp_status}")
