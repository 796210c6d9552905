"""Settings service - admin notification/sender settings and public contact details"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...database import transaction
from ...exceptions import NotFoundError, ValidationError
from .repository import CONTACT_PREFIX, MAPS_KEY, SettingsRepository
from .schemas import AdminSettingsResponse, AdminSettingsUpdate

logger = logging.getLogger(__name__)

SENDER_KEYS = ("senderName", "fromEmail")


class SettingsService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = SettingsRepository()

    def get_admin_settings(self, admin_id: int) -> AdminSettingsResponse:
        admin = self.repo.get_admin(self.db, admin_id)
        if admin is None:
            raise NotFoundError("Nie znaleziono administratora.")

        values = self.repo.get_values(self.db, list(SENDER_KEYS))
        return AdminSettingsResponse(
            loginEmail=admin.email,
            notificationEmail=admin.notification_email,
            senderName=values.get("senderName") or "",
            fromEmail=values.get("fromEmail") or "",
        )

    def update_admin_settings(self, admin_id: int, data: AdminSettingsUpdate) -> None:
        admin = self.repo.get_admin(self.db, admin_id)
        if admin is None:
            raise NotFoundError("Nie znaleziono administratora.")

        updates = data.model_dump(exclude_unset=True)
        with transaction(self.db, "Błąd zapisu ustawień."):
            if "notificationEmail" in updates:
                admin.notification_email = updates["notificationEmail"]
            for key in SENDER_KEYS:
                if key in updates:
                    self.repo.upsert(self.db, key, updates[key])
        logger.info(f"⚙️ Admin {admin_id} updated settings: {sorted(updates)}")

    def get_contact_details(self) -> dict[str, Optional[str]]:
        return self.repo.get_contact_values(self.db)

    def update_contact_settings(self, values: dict[str, Optional[str]]) -> None:
        for key in values:
            if not (key.startswith(CONTACT_PREFIX) or key == MAPS_KEY):
                raise ValidationError(f"Nieznane pole: {key}.")

        with transaction(self.db, "Błąd zapisu ustawień."):
            for key, value in values.items():
                self.repo.upsert(self.db, key, value)
        logger.info(f"⚙️ Contact settings updated: {sorted(values)}")
