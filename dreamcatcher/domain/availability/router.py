"""Availability router - admin calendar"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from .schemas import CalendarEntry, EventCreate, EventResponse, EventUpdate
from .service import AvailabilityService

router = APIRouter(
    prefix="/admin/availability", tags=["Admin Availability"], dependencies=[Depends(get_current_admin)]
)


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


@router.get("", response_model=list[CalendarEntry])
async def list_calendar(service: AvailabilityService = Depends(get_availability_service)):
    return service.list_calendar()


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate, service: AvailabilityService = Depends(get_availability_service)
):
    return service.create_event(data)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int,
    data: EventUpdate,
    service: AvailabilityService = Depends(get_availability_service),
):
    return service.update_event(event_id, data)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: int, service: AvailabilityService = Depends(get_availability_service)
):
    service.delete_event(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
