"""Offer service - package/addon catalog for the calculator and its admin editor"""

import logging

from fastapi import UploadFile
from sqlalchemy.orm import Session

from ...database import transaction
from ...exceptions import ConflictError, NotFoundError, ValidationError
from ...models import Addon, Category, Package
from ...utils.blob_storage import ALLOWED_IMAGE_TYPES, store_upload
from .repository import OfferRepository
from .schemas import (
    AddonCreate,
    AddonResponse,
    AddonUpdate,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    IncludedAddon,
    OfferData,
    PackageAddonRef,
    PackageCreate,
    PackageResponse,
    PackageUpdate,
    PublicOffer,
    PublicPackage,
)

logger = logging.getLogger(__name__)

CATEGORY_NOT_FOUND = "Nie znaleziono kategorii."
ADDON_NOT_FOUND = "Nie znaleziono dodatku."
PACKAGE_NOT_FOUND = "Nie znaleziono pakietu."
CATEGORY_EXISTS = "Kategoria o tej nazwie już istnieje."

PACKAGE_FIELDS = (
    "name",
    "description",
    "price",
    "category_id",
    "is_published",
    "rich_description",
    "rich_description_image_url",
)


def _package_response(package: Package) -> PackageResponse:
    return PackageResponse(
        **{field: getattr(package, field) for field in ("id",) + PACKAGE_FIELDS},
        category_name=package.category.name if package.category else None,
        addons=[
            PackageAddonRef(id=link.addon_id, is_locked=link.is_locked)
            for link in sorted(package.addon_links, key=lambda link: link.addon_id)
        ],
    )


class OfferService:
    def __init__(self, db: Session, storage=None):
        self.db = db
        self.storage = storage
        self.repo = OfferRepository()

    # ============================================================================
    # READ MODELS
    # ============================================================================

    def public_offer(self) -> PublicOffer:
        """Published packages (cheapest first) with their bundled addons, for the calculator"""
        addons = [AddonResponse.model_validate(addon) for addon in self.repo.list_addons(self.db)]
        addons_by_id = {addon.id: addon for addon in addons}

        packages = []
        for package in self.repo.list_packages(self.db, published_only=True):
            included = [
                IncludedAddon(**addons_by_id[link.addon_id].model_dump(), locked=link.is_locked)
                for link in package.addon_links
                if link.addon_id in addons_by_id
            ]
            packages.append(
                PublicPackage(
                    **{field: getattr(package, field) for field in ("id",) + PACKAGE_FIELDS},
                    included=included,
                )
            )

        return PublicOffer(
            categories=[CategoryResponse.model_validate(c) for c in self.repo.list_categories(self.db)],
            packages=packages,
            allAddons=addons,
        )

    def list_addons(self) -> list[AddonResponse]:
        return [AddonResponse.model_validate(a) for a in self.repo.list_addons(self.db)]

    def list_packages(self) -> list[PackageResponse]:
        return [_package_response(p) for p in self.repo.list_packages(self.db)]

    def offer_data(self) -> OfferData:
        return OfferData(
            packages=self.list_packages(),
            addons=self.list_addons(),
            categories=[
                CategoryResponse.model_validate(c)
                for c in self.repo.list_categories(self.db, order_by_name=True)
            ],
        )

    # ============================================================================
    # CATEGORIES
    # ============================================================================

    def create_category(self, data: CategoryCreate) -> Category:
        if self.repo.category_name_taken(self.db, data.name):
            raise ConflictError(CATEGORY_EXISTS)
        category = Category(**data.model_dump())
        with transaction(self.db, "Błąd tworzenia kategorii."):
            self.db.add(category)
        self.db.refresh(category)
        return category

    def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        category = self.repo.get_category(self.db, category_id)
        if category is None:
            raise NotFoundError(CATEGORY_NOT_FOUND)

        updates = data.model_dump(exclude_unset=True)
        if updates.get("name") is None:
            updates.pop("name", None)
        if "name" in updates and self.repo.category_name_taken(
            self.db, updates["name"], exclude_id=category_id
        ):
            raise ConflictError(CATEGORY_EXISTS)

        with transaction(self.db, "Błąd aktualizacji kategorii."):
            for field, value in updates.items():
                setattr(category, field, value)
        self.db.refresh(category)
        return category

    def delete_category(self, category_id: int) -> None:
        category = self.repo.get_category(self.db, category_id)
        if category is None:
            raise NotFoundError(CATEGORY_NOT_FOUND)
        with transaction(self.db, "Błąd usuwania kategorii."):
            self.repo.detach_category(self.db, category_id)
            self.db.delete(category)
        self.db.expire_all()
        logger.info(f"🗑️ Category {category_id} deleted")

    # ============================================================================
    # ADDONS
    # ============================================================================

    def _check_categories(self, category_ids: list[int]) -> None:
        missing = set(category_ids) - self.repo.existing_category_ids(self.db, category_ids)
        if missing:
            raise ValidationError(f"Nieprawidłowa kategoria: {sorted(missing)[0]}.")

    def create_addon(self, data: AddonCreate) -> Addon:
        self._check_categories(data.category_ids)
        addon = Addon(name=data.name, price=data.price)
        with transaction(self.db, "Błąd tworzenia dodatku."):
            self.db.add(addon)
            self.db.flush()
            self.repo.replace_addon_categories(self.db, addon, data.category_ids)
        self.db.refresh(addon)
        logger.info(f"➕ Addon {addon.id} created: {addon.name}")
        return addon

    def update_addon(self, addon_id: int, data: AddonUpdate) -> Addon:
        addon = self.repo.get_addon(self.db, addon_id)
        if addon is None:
            raise NotFoundError(ADDON_NOT_FOUND)

        updates = data.model_dump(exclude_unset=True)
        category_ids = updates.pop("category_ids", None)
        if category_ids is not None:
            self._check_categories(category_ids)

        with transaction(self.db, "Błąd aktualizacji dodatku."):
            for field, value in updates.items():
                if value is not None:
                    setattr(addon, field, value)
            if category_ids is not None:
                self.repo.replace_addon_categories(self.db, addon, category_ids)
        self.db.refresh(addon)
        return addon

    def delete_addon(self, addon_id: int) -> None:
        addon = self.repo.get_addon(self.db, addon_id)
        if addon is None:
            raise NotFoundError(ADDON_NOT_FOUND)
        with transaction(self.db, "Błąd usuwania dodatku."):
            self.db.delete(addon)
        logger.info(f"🗑️ Addon {addon_id} deleted")

    # ============================================================================
    # PACKAGES
    # ============================================================================

    def _addon_refs(self, refs: list[PackageAddonRef]) -> dict[int, bool]:
        by_id = {ref.id: ref.is_locked for ref in refs}
        missing = set(by_id) - self.repo.existing_addon_ids(self.db, list(by_id))
        if missing:
            raise ValidationError(f"Nieprawidłowy dodatek: {sorted(missing)[0]}.")
        return by_id

    def _check_category(self, category_id) -> None:
        if category_id is not None and self.repo.get_category(self.db, category_id) is None:
            raise ValidationError(f"Nieprawidłowa kategoria: {category_id}.")

    def create_package(self, data: PackageCreate) -> PackageResponse:
        self._check_category(data.category_id)
        refs = self._addon_refs(data.addons)

        package = Package(**data.model_dump(exclude={"addons"}))
        with transaction(self.db, "Błąd tworzenia pakietu."):
            self.db.add(package)
            self.db.flush()
            self.repo.replace_package_addons(self.db, package, refs)
        self.db.refresh(package)
        logger.info(f"📦 Package {package.id} created: {package.name}")
        return _package_response(package)

    def update_package(self, package_id: int, data: PackageUpdate) -> PackageResponse:
        package = self.repo.get_package(self.db, package_id)
        if package is None:
            raise NotFoundError(PACKAGE_NOT_FOUND)

        updates = data.model_dump(exclude_unset=True)
        addons = updates.pop("addons", None)
        for field in ("name", "price", "is_published"):
            if field in updates and updates[field] is None:
                raise ValidationError(f"Brak wymaganego pola: {field}.")
        if "category_id" in updates:
            self._check_category(updates["category_id"])
        refs = self._addon_refs(data.addons) if addons is not None else None

        with transaction(self.db, "Błąd aktualizacji pakietu."):
            for field, value in updates.items():
                setattr(package, field, value)
            if refs is not None:
                self.repo.replace_package_addons(self.db, package, refs)
        self.db.refresh(package)
        return _package_response(package)

    def delete_package(self, package_id: int) -> None:
        package = self.repo.get_package(self.db, package_id)
        if package is None:
            raise NotFoundError(PACKAGE_NOT_FOUND)
        with transaction(self.db, "Błąd usuwania pakietu."):
            self.db.delete(package)
        logger.info(f"🗑️ Package {package_id} deleted")

    async def upload_image(self, file: UploadFile) -> dict:
        return await store_upload(self.storage, file, "packages", ALLOWED_IMAGE_TYPES)
