"""Message service - the conversation between a couple and the studio"""

import logging

from fastapi import UploadFile
from sqlalchemy import func
from sqlalchemy.orm import Session

from ...config import Settings
from ...database import transaction
from ...email_service import send_quietly, studio_sender
from ...email_templates import new_message_template
from ...exceptions import ValidationError
from ...models import Booking, Message
from ...utils.blob_storage import ALLOWED_ATTACHMENT_TYPES, store_upload
from .schemas import AdminMessageCreate

logger = logging.getLogger(__name__)

SEND_FAILED = "Błąd wysyłania wiadomości."


class MessageService:
    def __init__(self, db: Session, settings: Settings, mailer=None, storage=None):
        self.db = db
        self.settings = settings
        self.mailer = mailer
        self.storage = storage

    def list_messages(self, booking_id: int) -> list[Message]:
        return (
            self.db.query(Message)
            .filter(Message.booking_id == booking_id)
            .order_by(Message.created_at, Message.id)
            .all()
        )

    def unread_count(self, booking_id: int, sender: str, read_flag) -> int:
        return (
            self.db.query(func.count(Message.id))
            .filter(Message.booking_id == booking_id, Message.sender == sender, read_flag.is_(False))
            .scalar()
        )

    def unread_for_client(self, booking_id: int) -> int:
        """Studio messages the couple has not opened yet"""
        return self.unread_count(booking_id, "admin", Message.is_read_by_client)

    def unread_for_admin(self, booking_id: int) -> int:
        return self.unread_count(booking_id, "client", Message.is_read_by_admin)

    def mark_read_by_client(self, booking_id: int) -> None:
        with transaction(self.db, "Błąd oznaczania wiadomości."):
            self.db.query(Message).filter(Message.booking_id == booking_id).update(
                {Message.is_read_by_client: True}, synchronize_session=False
            )

    def mark_read_by_admin(self, booking_id: int) -> None:
        with transaction(self.db, "Błąd oznaczania wiadomości."):
            self.db.query(Message).filter(Message.booking_id == booking_id).update(
                {Message.is_read_by_admin: True}, synchronize_session=False
            )

    def post_client_message(self, booking_id: int, content: str) -> Message:
        message = Message(
            booking_id=booking_id,
            sender="client",
            content=content,
            is_read_by_client=True,
            is_read_by_admin=False,
        )
        with transaction(self.db, SEND_FAILED):
            self.db.add(message)
        self.db.refresh(message)
        logger.info(f"💬 Client message {message.id} on booking {booking_id}")
        return message

    def post_admin_message(self, booking: Booking, data: AdminMessageCreate) -> Message:
        """Store a studio message and let the couple know by email"""
        if not (data.content or data.attachment_url):
            raise ValidationError("Brak wymaganego pola: content.")

        message = Message(
            booking_id=booking.id,
            sender="admin",
            content=data.content,
            attachment_url=data.attachment_url,
            attachment_type=data.attachment_type,
            is_read_by_admin=True,
            is_read_by_client=False,
        )
        with transaction(self.db, SEND_FAILED):
            self.db.add(message)
        self.db.refresh(message)
        logger.info(f"💬 Admin message {message.id} on booking {booking.id}")

        send_quietly(
            self.mailer,
            to=booking.email,
            subject="Nowa wiadomość od Dreamcatcher Film w sprawie Twojej rezerwacji",
            mjml_content=new_message_template(
                booking.bride_name, booking.groom_name, f"{self.settings.frontend_url}/logowanie"
            ),
            from_address=studio_sender(self.db),
        )
        return message

    async def upload_attachment(self, file: UploadFile) -> dict:
        return await store_upload(self.storage, file, "messages", ALLOWED_ATTACHMENT_TYPES)
