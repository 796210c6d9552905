"""Inbox service - public contact form, admin inbox and the notification feed"""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...database import transaction
from ...email_service import send_quietly, studio_sender
from ...email_templates import contact_notification_template
from ...exceptions import NotFoundError
from ...models import Booking, ContactMessage, Message
from ..settings.repository import SettingsRepository
from .schemas import ContactFormRequest, Notification

logger = logging.getLogger(__name__)

INBOX_NOT_FOUND = "Nie znaleziono wiadomości."


class InboxService:
    def __init__(self, db: Session, mailer=None):
        self.db = db
        self.mailer = mailer

    def submit_contact_form(self, data: ContactFormRequest) -> ContactMessage:
        """Store the message, then alert the studio if a notification address is set"""
        contact = ContactMessage(
            first_name=data.firstName,
            last_name=data.lastName,
            email=data.email,
            phone=data.phone,
            subject=data.subject,
            message=data.message,
        )
        with transaction(self.db, "Błąd wysyłania wiadomości."):
            self.db.add(contact)
        logger.info(f"📨 Contact form message {contact.id} from {data.email}")

        recipient = SettingsRepository.notification_email(self.db)
        if recipient:
            send_quietly(
                self.mailer,
                to=recipient,
                subject=f"Nowa wiadomość z formularza: {data.subject}",
                mjml_content=contact_notification_template(
                    data.firstName, data.lastName, data.email, data.phone, data.message
                ),
                from_address=studio_sender(self.db),
                reply_to=data.email,
            )
        else:
            logger.info("ℹ️ No notification email configured, skipping contact alert")
        return contact

    def list_inbox(self) -> list[ContactMessage]:
        return (
            self.db.query(ContactMessage)
            .order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
            .all()
        )

    def _get(self, message_id: int) -> ContactMessage:
        contact = self.db.get(ContactMessage, message_id)
        if contact is None:
            raise NotFoundError(INBOX_NOT_FOUND)
        return contact

    def mark_read(self, message_id: int) -> None:
        contact = self._get(message_id)
        with transaction(self.db, "Błąd aktualizacji wiadomości."):
            contact.is_read = True

    def delete(self, message_id: int) -> None:
        contact = self._get(message_id)
        with transaction(self.db, "Błąd usuwania wiadomości."):
            self.db.delete(contact)
        logger.info(f"🗑️ Inbox message {message_id} deleted")

    # ============================================================================
    # NOTIFICATIONS
    # ============================================================================

    def notifications(self) -> list[Notification]:
        """
        Build the admin notification feed.

        One entry per booking with unread client messages (newest message as the
        preview), followed by one entry per unread contact form message.
        """
        unread_messages = (
            self.db.query(Message)
            .options(joinedload(Message.booking))
            .filter(Message.sender == "client", Message.is_read_by_admin.is_(False))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .all()
        )

        per_booking: dict[int, Notification] = {}
        for message in unread_messages:
            entry = per_booking.get(message.booking_id)
            if entry is None:
                per_booking[message.booking_id] = Notification(
                    type="client_message",
                    booking_id=message.booking_id,
                    sender_name=_couple_name(message.booking),
                    unread_count=1,
                    preview=message.content,
                    created_at=message.created_at,
                )
            else:
                entry.unread_count += 1

        feed = list(per_booking.values())
        unread_contacts = (
            self.db.query(ContactMessage)
            .filter(ContactMessage.is_read.is_(False))
            .order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
            .all()
        )
        for contact in unread_contacts:
            feed.append(
                Notification(
                    type="inbox_message",
                    message_id=contact.id,
                    sender_name=f"{contact.first_name} {contact.last_name}",
                    preview=contact.subject,
                    created_at=contact.created_at,
                )
            )
        return feed

    def notification_count(self) -> int:
        messages = (
            self.db.query(func.count(Message.id))
            .filter(Message.sender == "client", Message.is_read_by_admin.is_(False))
            .scalar()
        )
        contacts = (
            self.db.query(func.count(ContactMessage.id))
            .filter(ContactMessage.is_read.is_(False))
            .scalar()
        )
        return messages + contacts


def _couple_name(booking: Booking) -> str:
    couple = " & ".join(name for name in (booking.bride_name, booking.groom_name) if name)
    return couple or booking.client_id
