"""Message router - client portal conversation and its admin side"""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...config import Settings, get_settings
from ...database import get_db
from ...email_service import get_mailer
from ...models import Booking
from ...schemas import CountResponse, UploadResponse
from ...utils.blob_storage import get_storage
from ..bookings.dependencies import get_admin_booking, get_current_booking
from .schemas import AdminMessageCreate, ClientMessageCreate, MessageView
from .service import MessageService

router = APIRouter(prefix="/messages", tags=["Messages"])
admin_router = APIRouter(
    prefix="/admin", tags=["Admin Messages"], dependencies=[Depends(get_current_admin)]
)


def get_message_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer=Depends(get_mailer),
    storage=Depends(get_storage),
) -> MessageService:
    return MessageService(db, settings, mailer, storage)


# ============================================================================
# CLIENT
# ============================================================================


@router.get("", response_model=list[MessageView])
async def my_messages(
    booking: Booking = Depends(get_current_booking),
    service: MessageService = Depends(get_message_service),
):
    return service.list_messages(booking.id)


@router.get("/unread-count", response_model=CountResponse)
async def my_unread_count(
    booking: Booking = Depends(get_current_booking),
    service: MessageService = Depends(get_message_service),
):
    return CountResponse(count=service.unread_for_client(booking.id))


@router.patch("/mark-as-read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_my_messages_read(
    booking: Booking = Depends(get_current_booking),
    service: MessageService = Depends(get_message_service),
):
    service.mark_read_by_client(booking.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("", response_model=MessageView, status_code=status.HTTP_201_CREATED)
async def send_message(
    data: ClientMessageCreate,
    booking: Booking = Depends(get_current_booking),
    service: MessageService = Depends(get_message_service),
):
    return service.post_client_message(booking.id, data.content)


# ============================================================================
# ADMIN
# ============================================================================


# Registered before /messages/{booking_id} so "upload" is not read as a booking id
@admin_router.post("/messages/upload", response_model=UploadResponse)
async def upload_attachment(
    file: UploadFile = File(...), service: MessageService = Depends(get_message_service)
):
    return await service.upload_attachment(file)


@admin_router.get("/messages/{booking_id}", response_model=list[MessageView])
async def booking_messages(
    booking: Booking = Depends(get_admin_booking),
    service: MessageService = Depends(get_message_service),
):
    return service.list_messages(booking.id)


@admin_router.post(
    "/messages/{booking_id}", response_model=MessageView, status_code=status.HTTP_201_CREATED
)
async def send_admin_message(
    data: AdminMessageCreate,
    booking: Booking = Depends(get_admin_booking),
    service: MessageService = Depends(get_message_service),
):
    return service.post_admin_message(booking, data)


@admin_router.get("/bookings/{booking_id}/unread-count", response_model=CountResponse)
async def booking_unread_count(
    booking: Booking = Depends(get_admin_booking),
    service: MessageService = Depends(get_message_service),
):
    return CountResponse(count=service.unread_for_admin(booking.id))


@admin_router.patch("/bookings/{booking_id}/messages/mark-as-read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_booking_messages_read(
    booking: Booking = Depends(get_admin_booking),
    service: MessageService = Depends(get_message_service),
):
    service.mark_read_by_admin(booking.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
