"""Contact form, admin inbox and notification schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...schemas import ORMModel, RequestModel
from ...shared.validators import validate_email, validate_phone


class ContactFormRequest(RequestModel):
    firstName: str = Field(min_length=1, max_length=255)
    lastName: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    phone: Optional[str] = None
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v) or None


class InboxMessage(ORMModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    is_read: bool
    created_at: Optional[datetime] = None


class Notification(BaseModel):
    type: Literal["client_message", "inbox_message"]
    sender_name: str
    preview: Optional[str] = None
    booking_id: Optional[int] = None
    unread_count: Optional[int] = None
    message_id: Optional[int] = None
    created_at: Optional[datetime] = None
