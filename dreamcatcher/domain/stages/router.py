"""Stage router - project progress for the couple and the admin"""

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
    AdminStageView,
    BookingStageAssign,
    BookingStageStatusUpdate,
    ClientStageView,
    ProductionStageCreate,
    ProductionStageResponse,
)
from .service import StageService

router = APIRouter(prefix="/booking-stages", tags=["Stages"])
admin_router = APIRouter(
    prefix="/admin", tags=["Admin Stages"], dependencies=[Depends(get_current_admin)]
)


def get_stage_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer=Depends(get_mailer),
) -> StageService:
    return StageService(db, settings, mailer)


# ============================================================================
# CLIENT
# ============================================================================


@router.get("", response_model=list[ClientStageView])
async def my_stages(
    booking: Booking = Depends(get_current_booking),
    service: StageService = Depends(get_stage_service),
):
    return service.client_stages(booking.id)


@router.patch("/{booking_stage_id}/approve", response_model=MessageResponse)
async def approve_stage(
    booking_stage_id: int,
    booking: Booking = Depends(get_current_booking),
    service: StageService = Depends(get_stage_service),
):
    service.approve(booking.id, booking_stage_id)
    return MessageResponse(message="Etap został zatwierdzony.")


# ============================================================================
# ADMIN - STAGE CATALOG
# ============================================================================


@admin_router.get("/stages", response_model=list[ProductionStageResponse])
async def list_stages(service: StageService = Depends(get_stage_service)):
    return service.list_stages()


@admin_router.post(
    "/stages", response_model=ProductionStageResponse, status_code=status.HTTP_201_CREATED
)
async def create_stage(
    data: ProductionStageCreate, service: StageService = Depends(get_stage_service)
):
    return service.create_stage(data)


@admin_router.delete("/stages/{stage_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stage(stage_id: int, service: StageService = Depends(get_stage_service)):
    service.delete_stage(stage_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# ADMIN - BOOKING PROGRESS
# ============================================================================


@admin_router.get("/booking-stages/{booking_id}", response_model=list[AdminStageView])
async def booking_stages(
    booking: Booking = Depends(get_admin_booking),
    service: StageService = Depends(get_stage_service),
):
    return service.admin_stages(booking.id)


@admin_router.post("/booking-stages/{booking_id}", status_code=status.HTTP_201_CREATED)
async def assign_stage(
    data: BookingStageAssign,
    booking: Booking = Depends(get_admin_booking),
    service: StageService = Depends(get_stage_service),
):
    service.assign(booking, data.stage_id)
    return Response(status_code=status.HTTP_201_CREATED)


@admin_router.patch("/booking-stages/{booking_stage_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_stage_status(
    booking_stage_id: int,
    data: BookingStageStatusUpdate,
    service: StageService = Depends(get_stage_service),
):
    service.set_status(booking_stage_id, data.status)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.delete("/booking-stages/{booking_stage_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_stage(booking_stage_id: int, service: StageService = Depends(get_stage_service)):
    service.remove(booking_stage_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
