"""Settings repository - key/value application settings"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Admin, AppSetting

CONTACT_PREFIX = "contact_"
MAPS_KEY = "google_maps_api_key"


class SettingsRepository:
    @staticmethod
    def get_values(db: Session, keys: list[str]) -> dict[str, Optional[str]]:
        rows = db.query(AppSetting).filter(AppSetting.key.in_(keys)).all()
        return {row.key: row.value for row in rows}

    @staticmethod
    def get_contact_values(db: Session) -> dict[str, Optional[str]]:
        rows = (
            db.query(AppSetting)
            .filter(or_(AppSetting.key.like(f"{CONTACT_PREFIX}%"), AppSetting.key == MAPS_KEY))
            .order_by(AppSetting.key)
            .all()
        )
        return {row.key: row.value for row in rows}

    @staticmethod
    def get_with_prefix(db: Session, prefix: str) -> dict[str, Optional[str]]:
        rows = (
            db.query(AppSetting)
            .filter(AppSetting.key.like(f"{prefix}%"))
            .order_by(AppSetting.key)
            .all()
        )
        # LIKE treats "_" as a wildcard
        return {row.key: row.value for row in rows if row.key.startswith(prefix)}

    @staticmethod
    def upsert(db: Session, key: str, value: Optional[str]) -> None:
        setting = db.get(AppSetting, key)
        if setting is None:
            db.add(AppSetting(key=key, value=value))
        else:
            setting.value = value

    @staticmethod
    def get_admin(db: Session, admin_id: int) -> Optional[Admin]:
        return db.get(Admin, admin_id)

    @staticmethod
    def notification_email(db: Session) -> Optional[str]:
        """Where contact-form alerts go: the first admin with a notification address"""
        admin = (
            db.query(Admin)
            .filter(Admin.notification_email.isnot(None), Admin.notification_email != "")
            .order_by(Admin.id)
            .first()
        )
        return admin.notification_email if admin else None
