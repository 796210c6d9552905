"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...schemas import ORMModel, RequestModel
from ...shared.validators import validate_email, validate_phone
from ..questionnaires.schemas import ClientQuestionnaire

PaymentStatus = Literal["pending", "partial", "paid"]


class BookingCreate(RequestModel):
    """Public booking form submitted from the calculator"""

    accessKey: str = Field(min_length=1)
    password: str = Field(min_length=1)
    packageName: str = Field(min_length=1)
    totalPrice: float = Field(ge=0)
    email: str = Field(min_length=1)
    phoneNumber: str = Field(min_length=1)
    selectedItems: list[Any] = Field(default_factory=list)
    brideName: Optional[str] = None
    groomName: Optional[str] = None
    weddingDate: Optional[date] = None
    brideAddress: Optional[str] = None
    groomAddress: Optional[str] = None
    churchLocation: Optional[str] = None
    venueLocation: Optional[str] = None
    schedule: Optional[str] = None
    additionalInfo: Optional[str] = None
    discountCode: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phoneNumber")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("accessKey")
    @classmethod
    def normalize_access_key(cls, v):
        v = v.strip().upper()
        if not v:
            raise ValueError("Access key is empty")
        return v

    @field_validator("discountCode")
    @classmethod
    def normalize_discount_code(cls, v):
        if v is None:
            return v
        return v.strip().upper() or None


class BookingCreated(BaseModel):
    message: str
    bookingId: int
    clientId: str


class ClientBookingUpdate(RequestModel):
    """Fields the couple may change from the client portal"""

    bride_name: Optional[str] = None
    groom_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    bride_address: Optional[str] = None
    groom_address: Optional[str] = None
    church_location: Optional[str] = None
    venue_location: Optional[str] = None
    schedule: Optional[str] = None
    additional_info: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)


class AdminBookingUpdate(ClientBookingUpdate):
    wedding_date: Optional[date] = None
    package_name: Optional[str] = None
    total_price: Optional[float] = Field(default=None, ge=0)
    selected_items: Optional[list[Any]] = None
    discount_code: Optional[str] = None


class PaymentUpdate(RequestModel):
    payment_status: PaymentStatus
    amount_paid: float = Field(ge=0)


class ContractUpdate(RequestModel):
    contract_url: Optional[str] = None


class InviteSettings(RequestModel):
    invite_message: Optional[str] = None
    invite_image_url: Optional[str] = None


class InviteSettingsResponse(ORMModel):
    invite_message: Optional[str] = None
    invite_image_url: Optional[str] = None


class BookingResponse(ORMModel):
    """Full booking view; the password hash is never part of it"""

    id: int
    client_id: str
    access_key: str
    package_name: str
    total_price: float
    selected_items: Optional[list[Any]] = None
    bride_name: Optional[str] = None
    groom_name: Optional[str] = None
    wedding_date: Optional[date] = None
    bride_address: Optional[str] = None
    groom_address: Optional[str] = None
    church_location: Optional[str] = None
    venue_location: Optional[str] = None
    schedule: Optional[str] = None
    email: str
    phone_number: str
    additional_info: Optional[str] = None
    discount_code: Optional[str] = None
    payment_status: str
    amount_paid: float
    couple_photo_url: Optional[str] = None
    invite_message: Optional[str] = None
    invite_image_url: Optional[str] = None
    contract_url: Optional[str] = None
    created_at: Optional[datetime] = None


class BookingSummary(ORMModel):
    id: int
    client_id: str
    bride_name: Optional[str] = None
    groom_name: Optional[str] = None
    wedding_date: Optional[date] = None
    total_price: float
    payment_status: str
    created_at: Optional[datetime] = None


class MyBookingResponse(BaseModel):
    booking: BookingResponse
    questionnaire: Optional[ClientQuestionnaire] = None


class BookingUpdated(BaseModel):
    message: str
    booking: BookingResponse


class PaymentUpdated(BaseModel):
    message: str
    payment_details: PaymentUpdate


class ContractUpdated(BaseModel):
    message: str
    contract_url: Optional[str] = None
