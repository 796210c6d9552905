"""Guest repository - Database operations for guests and guest groups"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Guest, GuestGroup

DEFAULT_GUEST_GROUPS = ["Rodzice", "Przyjaciele", "Bliższa Rodzina", "Dalsza Rodzina"]


class GuestRepository:
    """Repository for guest list database operations (callers own the transaction)"""

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    @staticmethod
    def create_default_groups(db: Session, booking_id: int) -> list[GuestGroup]:
        groups = [GuestGroup(booking_id=booking_id, name=name) for name in DEFAULT_GUEST_GROUPS]
        db.add_all(groups)
        db.flush()
        return groups

    @staticmethod
    def list_groups(db: Session, booking_id: int) -> list[GuestGroup]:
        return (
            db.query(GuestGroup)
            .filter(GuestGroup.booking_id == booking_id)
            .order_by(GuestGroup.name, GuestGroup.id)
            .all()
        )

    @staticmethod
    def get_group(db: Session, booking_id: int, group_id: int) -> Optional[GuestGroup]:
        return (
            db.query(GuestGroup)
            .filter(GuestGroup.id == group_id, GuestGroup.booking_id == booking_id)
            .first()
        )

    @staticmethod
    def create_group(db: Session, booking_id: int, name: str) -> GuestGroup:
        group = GuestGroup(booking_id=booking_id, name=name)
        db.add(group)
        db.flush()
        return group

    # ------------------------------------------------------------------
    # Guests
    # ------------------------------------------------------------------

    @staticmethod
    def list_guests(db: Session, booking_id: int) -> list[Guest]:
        return (
            db.query(Guest)
            .outerjoin(GuestGroup, Guest.group_id == GuestGroup.id)
            .options(joinedload(Guest.group))
            .filter(Guest.booking_id == booking_id)
            .order_by(GuestGroup.name, Guest.name)
            .all()
        )

    @staticmethod
    def get_guest(db: Session, booking_id: int, guest_id: int) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.id == guest_id, Guest.booking_id == booking_id).first()

    @staticmethod
    def get_guest_by_token(db: Session, token: str) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.rsvp_token == token).first()

    @staticmethod
    def create_guest(db: Session, booking_id: int, **guest_data) -> Guest:
        guest = Guest(booking_id=booking_id, **guest_data)
        db.add(guest)
        db.flush()
        return guest

    @staticmethod
    def pending_invitees(db: Session, booking_id: int) -> list[Guest]:
        """Guests who have not answered yet and can be reached by email"""
        return (
            db.query(Guest)
            .filter(
                Guest.booking_id == booking_id,
                Guest.rsvp_status == "pending",
                Guest.email.isnot(None),
                Guest.email != "",
            )
            .order_by(Guest.id)
            .all()
        )
