"""Gallery service - public portfolio images backed by blob storage"""

import logging

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...database import transaction
from ...exceptions import NotFoundError, ServerError, StorageError
from ...models import GalleryItem
from ...utils.blob_storage import ALLOWED_IMAGE_TYPES, store_upload
from .schemas import GalleryItemCreate

logger = logging.getLogger(__name__)

DELETE_FAILED = "Błąd usuwania z galerii."


class GalleryService:
    def __init__(self, db: Session, storage=None):
        self.db = db
        self.storage = storage

    def list_items(self) -> list[GalleryItem]:
        return self.db.query(GalleryItem).order_by(GalleryItem.created_at.desc(), GalleryItem.id.desc()).all()

    def create_item(self, data: GalleryItemCreate) -> GalleryItem:
        item = GalleryItem(**data.model_dump())
        with transaction(self.db, "Błąd dodawania do galerii."):
            self.db.add(item)
        self.db.refresh(item)
        logger.info(f"🖼️ Gallery item {item.id} added")
        return item

    async def upload_image(self, file: UploadFile) -> dict:
        return await store_upload(self.storage, file, "gallery", ALLOWED_IMAGE_TYPES)

    def delete_item(self, item_id: int) -> None:
        """
        Delete a gallery item and its stored image.

        The row delete is flushed inside the transaction, then the blob is
        removed, and only then is the transaction committed. A failing blob
        delete rolls the row back, so the item stays listed.
        """
        item = self.db.get(GalleryItem, item_id)
        if item is None:
            raise NotFoundError("Nie znaleziono elementu galerii.")

        image_url = item.image_url
        try:
            self.db.delete(item)
            self.db.flush()
            if image_url:
                self.storage.delete(image_url)
            self.db.commit()
        except StorageError as e:
            self.db.rollback()
            logger.error(f"❌ Gallery item {item_id} kept, blob delete failed: {e}")
            raise ServerError(DELETE_FAILED) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error deleting gallery item {item_id}: {e}")
            raise ServerError(DELETE_FAILED) from e

        logger.info(f"🗑️ Gallery item {item_id} deleted with its image")
