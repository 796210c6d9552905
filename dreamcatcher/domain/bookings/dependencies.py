"""Booking lookups shared by every route that works on one booking"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...auth import Principal, get_current_admin, get_current_client
from ...database import get_db
from ...exceptions import NotFoundError
from ...models import Booking
from .repository import BookingRepository

BOOKING_NOT_FOUND = "Nie znaleziono rezerwacji."


def get_current_booking(
    principal: Principal = Depends(get_current_client),
    db: Session = Depends(get_db),
) -> Booking:
    """The booking owned by the authenticated client"""
    booking = BookingRepository.get_by_client_id(db, principal.client_id)
    if not booking:
        raise NotFoundError(BOOKING_NOT_FOUND)
    return booking


def get_admin_booking(
    booking_id: int,
    _admin: Principal = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> Booking:
    """Booking addressed by the {booking_id} path parameter of an admin route"""
    booking = BookingRepository.get_by_id(db, booking_id)
    if not booking:
        raise NotFoundError(BOOKING_NOT_FOUND)
    return booking
