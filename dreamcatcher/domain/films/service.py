"""Film service - YouTube film showcase and the films page settings"""

import logging
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from ...database import transaction
from ...exceptions import NotFoundError, ValidationError
from ...models import Film
from ...shared.ordering import apply_sort_order
from ...shared.validators import youtube_video_id
from ...utils.blob_storage import ALLOWED_IMAGE_TYPES, store_upload
from ..settings.repository import SettingsRepository
from .schemas import FilmCreate, FilmResponse, FilmsPage, FilmUpdate

logger = logging.getLogger(__name__)

SETTINGS_PREFIX = "films_page_"
THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"
INVALID_LINK = "Nieprawidłowy link YouTube."


def thumbnail_for(youtube_url: str) -> str:
    video_id = youtube_video_id(youtube_url)
    if video_id is None:
        raise ValidationError(INVALID_LINK)
    return THUMBNAIL_URL.format(video_id=video_id)


class FilmService:
    def __init__(self, db: Session, storage=None):
        self.db = db
        self.storage = storage
        self.settings_repo = SettingsRepository()

    def list_films(self) -> list[Film]:
        return self.db.query(Film).order_by(Film.sort_order, Film.id).all()

    def public_page(self) -> FilmsPage:
        settings = self.settings_repo.get_with_prefix(self.db, SETTINGS_PREFIX)
        return FilmsPage(
            films=[FilmResponse.model_validate(film) for film in self.list_films()],
            settings={key[len(SETTINGS_PREFIX):]: value for key, value in settings.items()},
        )

    def _get_film(self, film_id: int) -> Film:
        film = self.db.get(Film, film_id)
        if film is None:
            raise NotFoundError("Nie znaleziono filmu.")
        return film

    def create_film(self, data: FilmCreate) -> Film:
        film = Film(**data.model_dump(), thumbnail_url=thumbnail_for(data.youtube_url))
        with transaction(self.db, "Błąd dodawania filmu."):
            self.db.add(film)
        self.db.refresh(film)
        logger.info(f"🎬 Film {film.id} added: {film.title}")
        return film

    def update_film(self, film_id: int, data: FilmUpdate) -> Film:
        film = self._get_film(film_id)
        updates = data.model_dump(exclude_unset=True)
        for field in ("youtube_url", "title"):
            if field in updates and updates[field] is None:
                raise ValidationError(f"Brak wymaganego pola: {field}.")
        if "youtube_url" in updates:
            updates["thumbnail_url"] = thumbnail_for(updates["youtube_url"])

        with transaction(self.db, "Błąd aktualizacji filmu."):
            for field, value in updates.items():
                setattr(film, field, value)
        self.db.refresh(film)
        return film

    def delete_film(self, film_id: int) -> None:
        film = self._get_film(film_id)
        with transaction(self.db, "Błąd usuwania filmu."):
            self.db.delete(film)
        logger.info(f"🗑️ Film {film_id} deleted")

    def reorder(self, ordered_ids: list[int]) -> None:
        with transaction(self.db, "Błąd zmiany kolejności."):
            apply_sort_order(self.db, Film, ordered_ids)

    # ============================================================================
    # FILMS PAGE SETTINGS
    # ============================================================================

    def get_settings(self) -> dict[str, Optional[str]]:
        return self.settings_repo.get_with_prefix(self.db, SETTINGS_PREFIX)

    def update_settings(self, values: dict[str, Optional[str]]) -> None:
        for key in values:
            if not key.startswith(SETTINGS_PREFIX):
                raise ValidationError(f"Nieznane pole: {key}.")

        with transaction(self.db, "Błąd zapisu ustawień strony filmów."):
            for key, value in values.items():
                self.settings_repo.upsert(self.db, key, value)
        logger.info(f"⚙️ Films page settings updated: {sorted(values)}")

    async def upload_hero(self, file: UploadFile) -> dict:
        return await store_upload(self.storage, file, "films", ALLOWED_IMAGE_TYPES)
