"""Guest list and RSVP schemas"""

from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...schemas import ORMModel, RequestModel
from ...shared.validators import validate_email

RsvpStatus = Literal["pending", "confirmed", "declined"]


class GuestGroupCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)


class GuestGroupResponse(ORMModel):
    id: int
    booking_id: int
    name: str


class GuestCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    email: Optional[str] = None
    group_id: Optional[int] = None
    allowed_companions: int = Field(default=0, ge=0)
    companion_status: Optional[Any] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        # The guest list accepts blank emails (invites just skip those guests)
        if v is not None and not v.strip():
            return None
        return validate_email(v)


class GuestUpdate(GuestCreate):
    """Full replacement of a guest entry (PUT)"""

    rsvp_status: RsvpStatus = "pending"


class GuestResponse(ORMModel):
    id: int
    booking_id: int
    name: str
    email: Optional[str] = None
    group_id: Optional[int] = None
    group_name: Optional[str] = None
    rsvp_status: str
    rsvp_token: str
    notes: Optional[str] = None
    allowed_companions: int = 0
    companion_status: Optional[Any] = None
    created_at: Optional[datetime] = None


# ============================================================================
# PUBLIC RSVP
# ============================================================================


class RsvpBooking(ORMModel):
    """The part of a booking a guest is allowed to see"""

    bride_name: Optional[str] = None
    groom_name: Optional[str] = None
    wedding_date: Optional[date] = None
    church_location: Optional[str] = None
    venue_location: Optional[str] = None
    couple_photo_url: Optional[str] = None


class RsvpView(BaseModel):
    guest: GuestResponse
    booking: RsvpBooking


class RsvpAnswer(RequestModel):
    rsvp_status: RsvpStatus
    notes: Optional[str] = None
    companion_status: Optional[Any] = None
