"""Guest router - client guest list, admin guest management and public RSVP"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...config import Settings, get_settings
from ...database import get_db
from ...email_service import get_mailer
from ...models import Booking
from ...schemas import MessageResponse
from ..bookings.dependencies import get_admin_booking, get_current_booking
from .schemas import (
    GuestCreate,
    GuestGroupCreate,
    GuestGroupResponse,
    GuestResponse,
    GuestUpdate,
    RsvpAnswer,
    RsvpBooking,
    RsvpView,
)
from .service import GuestService

router = APIRouter(prefix="/my-booking", tags=["Guests"])
admin_router = APIRouter(
    prefix="/admin/bookings/{booking_id}",
    tags=["Admin Guests"],
    dependencies=[Depends(get_current_admin)],
)
public_router = APIRouter(prefix="/public/rsvp", tags=["RSVP"])


def get_guest_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer=Depends(get_mailer),
) -> GuestService:
    return GuestService(db, settings, mailer)


def _invites_sent(count: int) -> MessageResponse:
    return MessageResponse(message=f"Pomyślnie wysłano zaproszenia do {count} gości.")


# ============================================================================
# CLIENT GUEST LIST
# ============================================================================


@router.get("/guests", response_model=list[GuestResponse])
async def list_my_guests(
    booking: Booking = Depends(get_current_booking),
    service: GuestService = Depends(get_guest_service),
):
    return service.list_guests(booking.id)


@router.post("/guests", response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
async def add_my_guest(
    data: GuestCreate,
    booking: Booking = Depends(get_current_booking),
    service: GuestService = Depends(get_guest_service),
):
    return service.add_guest(booking.id, data)


@router.post("/guests/send-invites", response_model=MessageResponse)
async def send_my_invites(
    booking: Booking = Depends(get_current_booking),
    service: GuestService = Depends(get_guest_service),
):
    return _invites_sent(service.send_invites(booking))


@router.put("/guests/{guest_id}", response_model=GuestResponse)
async def replace_my_guest(
    guest_id: int,
    data: GuestUpdate,
    booking: Booking = Depends(get_current_booking),
    service: GuestService = Depends(get_guest_service),
):
    return service.replace_guest(booking.id, guest_id, data)


@router.delete("/guests/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_guest(
    guest_id: int,
    booking: Booking = Depends(get_current_booking),
    service: GuestService = Depends(get_guest_service),
):
    service.delete_guest(booking.id, guest_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/guest-groups", response_model=list[GuestGroupResponse])
async def list_my_groups(
    booking: Booking = Depends(get_current_booking),
    service: GuestService = Depends(get_guest_service),
):
    """Guest groups of the logged-in couple; defaults come back if all were removed"""
    return service.list_groups(booking.id, recreate_defaults=True)


@router.post(
    "/guest-groups", response_model=GuestGroupResponse, status_code=status.HTTP_201_CREATED
)
async def create_my_group(
    data: GuestGroupCreate,
    booking: Booking = Depends(get_current_booking),
    service: GuestService = Depends(get_guest_service),
):
    return service.create_group(booking.id, data.name)


@router.delete("/guest-groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_group(
    group_id: int,
    booking: Booking = Depends(get_current_booking),
    service: GuestService = Depends(get_guest_service),
):
    service.delete_group(booking.id, group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# ADMIN GUEST MANAGEMENT
# ============================================================================


@admin_router.get("/guests", response_model=list[GuestResponse])
async def list_guests(
    booking: Booking = Depends(get_admin_booking),
    service: GuestService = Depends(get_guest_service),
):
    return service.list_guests(booking.id)


@admin_router.post("/guests", response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
async def add_guest(
    data: GuestCreate,
    booking: Booking = Depends(get_admin_booking),
    service: GuestService = Depends(get_guest_service),
):
    return service.add_guest(booking.id, data)


@admin_router.post("/guests/send-invites", response_model=MessageResponse)
async def send_invites(
    booking: Booking = Depends(get_admin_booking),
    service: GuestService = Depends(get_guest_service),
):
    return _invites_sent(service.send_invites(booking))


@admin_router.put("/guests/{guest_id}", response_model=GuestResponse)
async def replace_guest(
    guest_id: int,
    data: GuestUpdate,
    booking: Booking = Depends(get_admin_booking),
    service: GuestService = Depends(get_guest_service),
):
    return service.replace_guest(booking.id, guest_id, data)


@admin_router.delete("/guests/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_guest(
    guest_id: int,
    booking: Booking = Depends(get_admin_booking),
    service: GuestService = Depends(get_guest_service),
):
    service.delete_guest(booking.id, guest_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.get("/guest-groups", response_model=list[GuestGroupResponse])
async def list_groups(
    booking: Booking = Depends(get_admin_booking),
    service: GuestService = Depends(get_guest_service),
):
    return service.list_groups(booking.id)


@admin_router.post(
    "/guest-groups", response_model=GuestGroupResponse, status_code=status.HTTP_201_CREATED
)
async def create_group(
    data: GuestGroupCreate,
    booking: Booking = Depends(get_admin_booking),
    service: GuestService = Depends(get_guest_service),
):
    return service.create_group(booking.id, data.name)


@admin_router.delete("/guest-groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: int,
    booking: Booking = Depends(get_admin_booking),
    service: GuestService = Depends(get_guest_service),
):
    service.delete_group(booking.id, group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# PUBLIC RSVP
# ============================================================================


@public_router.get("/{token}", response_model=RsvpView)
async def get_invitation(token: str, service: GuestService = Depends(get_guest_service)):
    guest, booking = service.get_invitation(token)
    return RsvpView(
        guest=GuestResponse.model_validate(guest), booking=RsvpBooking.model_validate(booking)
    )


@public_router.post("/{token}", response_model=MessageResponse)
async def answer_invitation(
    token: str,
    data: RsvpAnswer,
    service: GuestService = Depends(get_guest_service),
):
    service.answer_invitation(token, data)
    return MessageResponse(message="Dziękujemy za odpowiedź!")
