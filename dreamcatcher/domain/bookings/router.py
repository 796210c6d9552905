"""Booking router - public booking form, client portal and admin booking management"""

import logging

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...config import Settings, get_settings
from ...database import get_db
from ...email_service import get_mailer
from ...models import Booking
from ...schemas import MessageResponse, UploadResponse
from ...utils.blob_storage import get_storage
from ..questionnaires.service import QuestionnaireService
from .dependencies import get_admin_booking, get_current_booking
from .schemas import (
    AdminBookingUpdate,
    BookingCreate,
    BookingCreated,
    BookingResponse,
    BookingSummary,
    BookingUpdated,
    ClientBookingUpdate,
    ContractUpdate,
    ContractUpdated,
    InviteSettings,
    InviteSettingsResponse,
    MyBookingResponse,
    PaymentUpdate,
    PaymentUpdated,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Bookings"])
admin_router = APIRouter(
    prefix="/admin/bookings", tags=["Admin Bookings"], dependencies=[Depends(get_current_admin)]
)


def get_booking_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer=Depends(get_mailer),
    storage=Depends(get_storage),
) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db, settings, mailer, storage)


# ============================================================================
# PUBLIC BOOKING FORM
# ============================================================================


@router.post("/bookings", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """Create a booking and the client account that goes with it"""
    booking = service.create_booking(data)
    return BookingCreated(
        message="Rezerwacja zakończona sukcesem!",
        bookingId=booking.id,
        clientId=booking.client_id,
    )


# ============================================================================
# CLIENT PORTAL
# ============================================================================


@router.get("/my-booking", response_model=MyBookingResponse)
async def get_my_booking(
    booking: Booking = Depends(get_current_booking), db: Session = Depends(get_db)
):
    return MyBookingResponse(
        booking=BookingResponse.model_validate(booking),
        questionnaire=QuestionnaireService(db).client_questionnaire(booking),
    )


@router.patch("/my-booking", response_model=BookingUpdated)
async def update_my_booking(
    data: ClientBookingUpdate,
    booking: Booking = Depends(get_current_booking),
    service: BookingService = Depends(get_booking_service),
):
    booking = service.update_own_booking(booking, data)
    return BookingUpdated(
        message="Dane zaktualizowane.", booking=BookingResponse.model_validate(booking)
    )


@router.post("/my-booking/photo", response_model=UploadResponse)
async def upload_couple_photo(
    file: UploadFile = File(...),
    booking: Booking = Depends(get_current_booking),
    service: BookingService = Depends(get_booking_service),
):
    return await service.upload_couple_photo(booking, file)


@router.get("/my-booking/invite-settings", response_model=InviteSettingsResponse)
async def get_invite_settings(booking: Booking = Depends(get_current_booking)):
    return booking


@router.patch("/my-booking/invite-settings", response_model=MessageResponse)
async def update_invite_settings(
    data: InviteSettings,
    booking: Booking = Depends(get_current_booking),
    service: BookingService = Depends(get_booking_service),
):
    service.update_invite_settings(booking, data)
    return MessageResponse(message="Ustawienia zapisane.")


@router.post("/my-booking/invite-settings/upload", response_model=UploadResponse)
async def upload_invite_image(
    file: UploadFile = File(...),
    _booking: Booking = Depends(get_current_booking),
    service: BookingService = Depends(get_booking_service),
):
    return await service.upload_invite_image(file)


# ============================================================================
# ADMIN BOOKING MANAGEMENT
# ============================================================================


@admin_router.get("", response_model=list[BookingSummary])
async def list_bookings(service: BookingService = Depends(get_booking_service)):
    return service.list_bookings()


@admin_router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(booking: Booking = Depends(get_admin_booking)):
    return booking


@admin_router.patch("/{booking_id}", response_model=BookingUpdated)
async def update_booking(
    data: AdminBookingUpdate,
    booking: Booking = Depends(get_admin_booking),
    service: BookingService = Depends(get_booking_service),
):
    booking = service.update_booking(booking, data)
    return BookingUpdated(
        message="Zaktualizowano rezerwację.", booking=BookingResponse.model_validate(booking)
    )


@admin_router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking: Booking = Depends(get_admin_booking),
    service: BookingService = Depends(get_booking_service),
):
    service.delete_booking(booking)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.patch("/{booking_id}/payment", response_model=PaymentUpdated)
async def update_payment(
    data: PaymentUpdate,
    booking: Booking = Depends(get_admin_booking),
    service: BookingService = Depends(get_booking_service),
):
    service.update_payment(booking, data)
    return PaymentUpdated(message="Płatność zaktualizowana.", payment_details=data)


@admin_router.post("/{booking_id}/resend-credentials", response_model=MessageResponse)
async def resend_credentials(
    booking: Booking = Depends(get_admin_booking),
    service: BookingService = Depends(get_booking_service),
):
    service.resend_credentials(booking)
    return MessageResponse(message="E-mail został wysłany.")


@admin_router.patch("/{booking_id}/contract", response_model=ContractUpdated)
async def update_contract(
    data: ContractUpdate,
    booking: Booking = Depends(get_admin_booking),
    service: BookingService = Depends(get_booking_service),
):
    service.update_contract(booking, data.contract_url)
    return ContractUpdated(message="Umowa została zapisana.", contract_url=data.contract_url)


@admin_router.post("/{booking_id}/contract/upload", response_model=UploadResponse)
async def upload_contract(
    file: UploadFile = File(...),
    booking: Booking = Depends(get_admin_booking),
    service: BookingService = Depends(get_booking_service),
):
    return await service.upload_contract(booking, file)


__all__ = ["router", "admin_router"]
