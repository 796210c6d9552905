"""Offer catalog schemas - categories, addons and packages"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import ORMModel, RequestModel

# ============================================================================
# CATEGORIES
# ============================================================================


class CategoryCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    icon_name: Optional[str] = None


class CategoryUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    icon_name: Optional[str] = None


class CategoryResponse(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    icon_name: Optional[str] = None


# ============================================================================
# ADDONS
# ============================================================================


class AddonCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    price: float = Field(ge=0)
    category_ids: list[int] = Field(default_factory=list)


class AddonUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    price: Optional[float] = Field(default=None, ge=0)
    category_ids: Optional[list[int]] = None


class AddonResponse(ORMModel):
    id: int
    name: str
    price: float
    category_ids: list[int] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class IncludedAddon(AddonResponse):
    """Addon bundled into a published package; the calculator shows it as locked"""

    locked: bool = True


# ============================================================================
# PACKAGES
# ============================================================================


class PackageAddonRef(BaseModel):
    id: int
    is_locked: bool = True


class PackageCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(ge=0)
    category_id: Optional[int] = None
    is_published: bool = False
    rich_description: Optional[str] = None
    rich_description_image_url: Optional[str] = None
    addons: list[PackageAddonRef] = Field(default_factory=list)


class PackageUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    is_published: Optional[bool] = None
    rich_description: Optional[str] = None
    rich_description_image_url: Optional[str] = None
    addons: Optional[list[PackageAddonRef]] = None


class PackageBase(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    category_id: Optional[int] = None
    is_published: bool
    rich_description: Optional[str] = None
    rich_description_image_url: Optional[str] = None


class PackageResponse(PackageBase):
    category_name: Optional[str] = None
    addons: list[PackageAddonRef] = Field(default_factory=list)


class PublicPackage(PackageBase):
    included: list[IncludedAddon] = Field(default_factory=list)


class OfferData(BaseModel):
    packages: list[PackageResponse]
    addons: list[AddonResponse]
    categories: list[CategoryResponse]


class PublicOffer(BaseModel):
    categories: list[CategoryResponse]
    packages: list[PublicPackage]
    allAddons: list[AddonResponse]
