"""Availability service - admin calendar events plus wedding days of bookings"""

import logging

from sqlalchemy.orm import Session

from ...database import transaction
from ...exceptions import NotFoundError, ValidationError
from ...models import AvailabilityEvent
from ...shared.timeutils import as_utc
from ..bookings.repository import BookingRepository
from .schemas import CalendarEntry, EventCreate, EventUpdate

logger = logging.getLogger(__name__)

EVENT_NOT_FOUND = "Nie znaleziono wydarzenia."
INVALID_RANGE = "Data zakończenia nie może być wcześniejsza niż data rozpoczęcia."


def _event_entry(event: AvailabilityEvent) -> CalendarEntry:
    return CalendarEntry(
        id=event.id,
        title=event.title,
        description=event.description,
        start_time=event.start_time,
        end_time=event.end_time,
        is_all_day=event.is_all_day,
        start=event.start_time,
        end=event.end_time,
        allDay=event.is_all_day,
        resource={"type": "event"},
    )


def _booking_entry(booking) -> CalendarEntry:
    couple = " & ".join(name for name in (booking.bride_name, booking.groom_name) if name)
    return CalendarEntry(
        id=f"booking-{booking.id}",
        title=f"Rezerwacja: {couple or booking.client_id}",
        start_time=booking.wedding_date,
        end_time=booking.wedding_date,
        is_all_day=True,
        start=booking.wedding_date,
        end=booking.wedding_date,
        allDay=True,
        resource={"type": "booking", "bookingId": booking.id},
    )


class AvailabilityService:
    def __init__(self, db: Session):
        self.db = db

    def list_calendar(self) -> list[CalendarEntry]:
        """Admin events followed by the (read-only) wedding days of all bookings"""
        events = self.db.query(AvailabilityEvent).order_by(AvailabilityEvent.start_time).all()
        entries = [_event_entry(event) for event in events]
        entries.extend(
            _booking_entry(booking)
            for booking in BookingRepository.list_with_wedding_date(self.db)
        )
        return entries

    def _get(self, event_id: int) -> AvailabilityEvent:
        event = self.db.get(AvailabilityEvent, event_id)
        if event is None:
            raise NotFoundError(EVENT_NOT_FOUND)
        return event

    def create_event(self, data: EventCreate) -> AvailabilityEvent:
        if as_utc(data.end_time) < as_utc(data.start_time):
            raise ValidationError(INVALID_RANGE)

        event = AvailabilityEvent(**data.model_dump())
        with transaction(self.db, "Błąd tworzenia wydarzenia."):
            self.db.add(event)
        self.db.refresh(event)
        logger.info(f"📅 Calendar event {event.id} created: {event.title}")
        return event

    def update_event(self, event_id: int, data: EventUpdate) -> AvailabilityEvent:
        event = self._get(event_id)
        updates = data.model_dump(exclude_unset=True)
        for field in ("title", "start_time", "end_time", "is_all_day"):
            if field in updates and updates[field] is None:
                raise ValidationError(f"Brak wymaganego pola: {field}.")

        start = as_utc(updates.get("start_time", event.start_time))
        end = as_utc(updates.get("end_time", event.end_time))
        if end < start:
            raise ValidationError(INVALID_RANGE)

        with transaction(self.db, "Błąd aktualizacji wydarzenia."):
            for field, value in updates.items():
                setattr(event, field, value)
        self.db.refresh(event)
        return event

    def delete_event(self, event_id: int) -> None:
        event = self._get(event_id)
        with transaction(self.db, "Błąd usuwania wydarzenia."):
            self.db.delete(event)
        logger.info(f"🗑️ Calendar event {event_id} deleted")
