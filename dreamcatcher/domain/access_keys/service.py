"""Access key service - admin-issued keys that unlock the booking form"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...database import transaction
from ...exceptions import NotFoundError, ServerError
from ...models import AccessKey
from ...security_utils import mask_sensitive_data
from ...shared import identifiers

logger = logging.getLogger(__name__)

MAX_KEY_ATTEMPTS = 3
KEY_CREATION_FAILED = "Błąd tworzenia klucza."
INVALID_KEY = "Nieprawidłowy klucz dostępu."


class AccessKeyService:
    def __init__(self, db: Session):
        self.db = db

    def is_valid(self, key: str) -> bool:
        return self.db.query(AccessKey.id).filter(AccessKey.key == key).first() is not None

    def validate(self, key: str) -> None:
        if not self.is_valid(key):
            raise NotFoundError(INVALID_KEY, payload={"valid": False})

    def list_keys(self) -> list[AccessKey]:
        return self.db.query(AccessKey).order_by(AccessKey.created_at.desc(), AccessKey.id.desc()).all()

    def create_key(self, client_name: str) -> AccessKey:
        """Issue a fresh key; a key taken concurrently between lookup and insert is re-drawn"""
        for attempt in range(1, MAX_KEY_ATTEMPTS + 1):
            try:
                access_key = AccessKey(
                    key=identifiers.allocate_access_key(self.db), client_name=client_name.strip()
                )
                self.db.add(access_key)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                logger.warning(
                    f"🔁 Access key insert conflicted (attempt {attempt}/{MAX_KEY_ATTEMPTS}): {e.orig}"
                )
                continue
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"❌ Error creating access key: {e}")
                raise ServerError(KEY_CREATION_FAILED) from e

            self.db.refresh(access_key)
            logger.info(f"🔑 Access key {mask_sensitive_data(access_key.key, 2)} issued for {access_key.client_name}")
            return access_key

        raise ServerError(KEY_CREATION_FAILED)

    def delete_key(self, key_id: int) -> None:
        access_key = self.db.get(AccessKey, key_id)
        if access_key is None:
            raise NotFoundError("Nie znaleziono klucza.")
        with transaction(self.db, "Błąd usuwania klucza."):
            self.db.delete(access_key)
        logger.info(f"🗑️ Access key {key_id} deleted")
