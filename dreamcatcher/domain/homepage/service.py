"""
Homepage service - the content blocks of the public landing page

Slides and Instagram posts keep a manual order; testimonials are listed in
creation order. The About section lives in app_settings under about_us_* keys.
"""

import logging
from typing import Any, Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from ...database import transaction
from ...exceptions import NotFoundError, StorageError, ValidationError
from ...models import HomepageInstagramPost, HomepageSlide, HomepageTestimonial
from ...shared.ordering import apply_sort_order
from ...utils.blob_storage import ALLOWED_IMAGE_TYPES, store_upload
from ..settings.repository import SettingsRepository
from .schemas import (
    AboutSection,
    AboutUpdate,
    HomepageContent,
    InstagramPostCreate,
    InstagramPostResponse,
    PublicAboutSection,
    SlideCreate,
    SlideResponse,
    SlideUpdate,
    TestimonialCreate,
    TestimonialResponse,
    TestimonialUpdate,
)

logger = logging.getLogger(__name__)

ABOUT_PREFIX = "about_us_"
ABOUT_FIELDS = ("title", "text", "image_url")
DEFAULT_ABOUT_TITLE = "Dreamcatcher powstał z pasji do opowiadania historii obrazem"
DEFAULT_ABOUT_TEXT = "Opis domyślny..."
UPLOAD_FOLDER = "homepage"


def _apply_updates(row: Any, updates: dict[str, Any], required: tuple[str, ...]) -> None:
    for field in required:
        if field in updates and updates[field] is None:
            raise ValidationError(f"Brak wymaganego pola: {field}.")
    for field, value in updates.items():
        setattr(row, field, value)


class HomepageService:
    def __init__(self, db: Session, storage=None):
        self.db = db
        self.storage = storage
        self.settings_repo = SettingsRepository()

    def content(self) -> HomepageContent:
        """Everything the landing page renders, in display order"""
        about = self.get_about()
        return HomepageContent(
            slides=[SlideResponse.model_validate(s) for s in self.list_slides()],
            aboutSection=PublicAboutSection(
                about_us_title=about.title or DEFAULT_ABOUT_TITLE,
                about_us_text=about.text or DEFAULT_ABOUT_TEXT,
                about_us_image_url=about.image_url or None,
            ),
            testimonials=[TestimonialResponse.model_validate(t) for t in self.list_testimonials()],
            instagramPosts=[
                InstagramPostResponse.model_validate(p) for p in self.list_instagram_posts()
            ],
        )

    async def upload_image(self, file: UploadFile) -> dict:
        return await store_upload(self.storage, file, UPLOAD_FOLDER, ALLOWED_IMAGE_TYPES)

    def _delete_blob_quietly(self, url: Optional[str]) -> None:
        # The row is already gone; a leftover blob only costs storage
        if not url:
            return
        try:
            self.storage.delete(url)
        except StorageError as e:
            logger.warning(f"⚠️ Blob delete failed for {url}: {e}")

    def _get(self, model, row_id: int, not_found: str):
        row = self.db.get(model, row_id)
        if row is None:
            raise NotFoundError(not_found)
        return row

    # ============================================================================
    # HERO SLIDES
    # ============================================================================

    def list_slides(self) -> list[HomepageSlide]:
        return self.db.query(HomepageSlide).order_by(HomepageSlide.sort_order, HomepageSlide.id).all()

    def create_slide(self, data: SlideCreate) -> HomepageSlide:
        slide = HomepageSlide(**data.model_dump())
        with transaction(self.db, "Błąd tworzenia slajdu."):
            self.db.add(slide)
        self.db.refresh(slide)
        logger.info(f"🖼️ Homepage slide {slide.id} created")
        return slide

    def update_slide(self, slide_id: int, data: SlideUpdate) -> HomepageSlide:
        slide = self._get(HomepageSlide, slide_id, "Nie znaleziono slajdu.")
        with transaction(self.db, "Błąd aktualizacji slajdu."):
            _apply_updates(slide, data.model_dump(exclude_unset=True), required=("image_url",))
        self.db.refresh(slide)
        return slide

    def delete_slide(self, slide_id: int) -> None:
        slide = self._get(HomepageSlide, slide_id, "Nie znaleziono slajdu.")
        image_url = slide.image_url
        with transaction(self.db, "Błąd usuwania slajdu."):
            self.db.delete(slide)
        self._delete_blob_quietly(image_url)
        logger.info(f"🗑️ Homepage slide {slide_id} deleted")

    def reorder_slides(self, ordered_ids: list[int]) -> None:
        with transaction(self.db, "Błąd zmiany kolejności."):
            apply_sort_order(self.db, HomepageSlide, ordered_ids)

    # ============================================================================
    # ABOUT SECTION
    # ============================================================================

    def get_about(self) -> AboutSection:
        values = self.settings_repo.get_with_prefix(self.db, ABOUT_PREFIX)
        return AboutSection(
            **{field: values.get(f"{ABOUT_PREFIX}{field}") for field in ABOUT_FIELDS}
        )

    def update_about(self, data: AboutUpdate) -> None:
        updates = data.model_dump(exclude_unset=True)
        with transaction(self.db, "Błąd aktualizacji sekcji O nas."):
            for field, value in updates.items():
                self.settings_repo.upsert(self.db, f"{ABOUT_PREFIX}{field}", value)
        logger.info(f"⚙️ About section updated: {sorted(updates)}")

    # ============================================================================
    # TESTIMONIALS
    # ============================================================================

    def list_testimonials(self) -> list[HomepageTestimonial]:
        return self.db.query(HomepageTestimonial).order_by(HomepageTestimonial.id).all()

    def create_testimonial(self, data: TestimonialCreate) -> HomepageTestimonial:
        testimonial = HomepageTestimonial(**data.model_dump())
        with transaction(self.db, "Błąd tworzenia opinii."):
            self.db.add(testimonial)
        self.db.refresh(testimonial)
        return testimonial

    def update_testimonial(self, testimonial_id: int, data: TestimonialUpdate) -> HomepageTestimonial:
        testimonial = self._get(HomepageTestimonial, testimonial_id, "Nie znaleziono opinii.")
        with transaction(self.db, "Błąd aktualizacji opinii."):
            _apply_updates(
                testimonial, data.model_dump(exclude_unset=True), required=("author", "content")
            )
        self.db.refresh(testimonial)
        return testimonial

    def delete_testimonial(self, testimonial_id: int) -> None:
        testimonial = self._get(HomepageTestimonial, testimonial_id, "Nie znaleziono opinii.")
        with transaction(self.db, "Błąd usuwania opinii."):
            self.db.delete(testimonial)

    # ============================================================================
    # INSTAGRAM POSTS
    # ============================================================================

    def list_instagram_posts(self) -> list[HomepageInstagramPost]:
        return (
            self.db.query(HomepageInstagramPost)
            .order_by(HomepageInstagramPost.sort_order, HomepageInstagramPost.id)
            .all()
        )

    def create_instagram_post(self, data: InstagramPostCreate) -> HomepageInstagramPost:
        post = HomepageInstagramPost(**data.model_dump())
        with transaction(self.db, "Błąd dodawania posta."):
            self.db.add(post)
        self.db.refresh(post)
        logger.info(f"📸 Instagram post {post.id} added")
        return post

    def delete_instagram_post(self, post_id: int) -> None:
        post = self._get(HomepageInstagramPost, post_id, "Nie znaleziono posta.")
        image_url = post.image_url
        with transaction(self.db, "Błąd usuwania posta."):
            self.db.delete(post)
        self._delete_blob_quietly(image_url)
        logger.info(f"🗑️ Instagram post {post_id} deleted")

    def reorder_instagram_posts(self, ordered_ids: list[int]) -> None:
        with transaction(self.db, "Błąd zmiany kolejności."):
            apply_sort_order(self.db, HomepageInstagramPost, ordered_ids)
