"""Offer repository - Database operations for the package/addon catalog"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import Addon, AddonCategory, Category, Package, PackageAddon


class OfferRepository:
    """Repository for catalog database operations (callers own the transaction)"""

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    @staticmethod
    def list_categories(db: Session, order_by_name: bool = False) -> list[Category]:
        order = Category.name if order_by_name else Category.id
        return db.query(Category).order_by(order).all()

    @staticmethod
    def get_category(db: Session, category_id: int) -> Optional[Category]:
        return db.get(Category, category_id)

    @staticmethod
    def category_name_taken(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
        query = db.query(Category.id).filter(Category.name == name)
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return query.first() is not None

    @staticmethod
    def detach_category(db: Session, category_id: int) -> None:
        """Packages lose the category; addon links to it are dropped"""
        db.query(Package).filter(Package.category_id == category_id).update(
            {Package.category_id: None}, synchronize_session=False
        )
        db.query(AddonCategory).filter(AddonCategory.category_id == category_id).delete(
            synchronize_session=False
        )

    @staticmethod
    def existing_category_ids(db: Session, ids: list[int]) -> set[int]:
        if not ids:
            return set()
        return {row.id for row in db.query(Category.id).filter(Category.id.in_(ids)).all()}

    # ------------------------------------------------------------------
    # Addons
    # ------------------------------------------------------------------

    @staticmethod
    def list_addons(db: Session) -> list[Addon]:
        return (
            db.query(Addon)
            .options(selectinload(Addon.category_links))
            .order_by(Addon.name, Addon.id)
            .all()
        )

    @staticmethod
    def get_addon(db: Session, addon_id: int) -> Optional[Addon]:
        return db.get(Addon, addon_id)

    @staticmethod
    def existing_addon_ids(db: Session, ids: list[int]) -> set[int]:
        if not ids:
            return set()
        return {row.id for row in db.query(Addon.id).filter(Addon.id.in_(ids)).all()}

    @staticmethod
    def replace_addon_categories(db: Session, addon: Addon, category_ids: list[int]) -> None:
        addon.category_links.clear()
        db.flush()
        for category_id in dict.fromkeys(category_ids):
            addon.category_links.append(AddonCategory(addon_id=addon.id, category_id=category_id))

    # ------------------------------------------------------------------
    # Packages
    # ------------------------------------------------------------------

    @staticmethod
    def list_packages(db: Session, published_only: bool = False) -> list[Package]:
        query = db.query(Package).options(
            selectinload(Package.category), selectinload(Package.addon_links)
        )
        if published_only:
            return query.filter(Package.is_published.is_(True)).order_by(Package.price, Package.id).all()
        return query.order_by(Package.name, Package.id).all()

    @staticmethod
    def get_package(db: Session, package_id: int) -> Optional[Package]:
        return db.get(Package, package_id)

    @staticmethod
    def replace_package_addons(db: Session, package: Package, refs: dict[int, bool]) -> None:
        """refs maps addon id -> is_locked"""
        package.addon_links.clear()
        db.flush()
        for addon_id, is_locked in refs.items():
            package.addon_links.append(
                PackageAddon(package_id=package.id, addon_id=addon_id, is_locked=is_locked)
            )
