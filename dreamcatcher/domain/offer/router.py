"""Offer router - public packages and the admin catalog editor"""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...schemas import UploadResponse
from ...utils.blob_storage import get_storage
from .schemas import (
    AddonCreate,
    AddonResponse,
    AddonUpdate,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    OfferData,
    PackageCreate,
    PackageResponse,
    PackageUpdate,
    PublicOffer,
)
from .service import OfferService

router = APIRouter(tags=["Offer"])
admin_router = APIRouter(
    prefix="/admin", tags=["Admin Offer"], dependencies=[Depends(get_current_admin)]
)


def get_offer_service(db: Session = Depends(get_db), storage=Depends(get_storage)) -> OfferService:
    return OfferService(db, storage)


@router.get("/packages", response_model=PublicOffer)
async def public_packages(service: OfferService = Depends(get_offer_service)):
    """Categories, published packages with bundled addons and every addon"""
    return service.public_offer()


@admin_router.get("/offer-data", response_model=OfferData)
async def offer_data(service: OfferService = Depends(get_offer_service)):
    return service.offer_data()


# ============================================================================
# CATEGORIES
# ============================================================================


@admin_router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(data: CategoryCreate, service: OfferService = Depends(get_offer_service)):
    return service.create_category(data)


@admin_router.patch("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int, data: CategoryUpdate, service: OfferService = Depends(get_offer_service)
):
    return service.update_category(category_id, data)


@admin_router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, service: OfferService = Depends(get_offer_service)):
    service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# ADDONS
# ============================================================================


@admin_router.get("/addons", response_model=list[AddonResponse])
async def list_addons(service: OfferService = Depends(get_offer_service)):
    return service.list_addons()


@admin_router.post("/addons", response_model=AddonResponse, status_code=status.HTTP_201_CREATED)
async def create_addon(data: AddonCreate, service: OfferService = Depends(get_offer_service)):
    return service.create_addon(data)


@admin_router.patch("/addons/{addon_id}", response_model=AddonResponse)
async def update_addon(
    addon_id: int, data: AddonUpdate, service: OfferService = Depends(get_offer_service)
):
    return service.update_addon(addon_id, data)


@admin_router.delete("/addons/{addon_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_addon(addon_id: int, service: OfferService = Depends(get_offer_service)):
    service.delete_addon(addon_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# PACKAGES
# ============================================================================


@admin_router.get("/packages", response_model=list[PackageResponse])
async def list_packages(service: OfferService = Depends(get_offer_service)):
    return service.list_packages()


@admin_router.post("/packages/upload-image", response_model=UploadResponse)
async def upload_package_image(
    file: UploadFile = File(...), service: OfferService = Depends(get_offer_service)
):
    return await service.upload_image(file)


@admin_router.post("/packages", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
async def create_package(data: PackageCreate, service: OfferService = Depends(get_offer_service)):
    return service.create_package(data)


@admin_router.patch("/packages/{package_id}", response_model=PackageResponse)
async def update_package(
    package_id: int, data: PackageUpdate, service: OfferService = Depends(get_offer_service)
):
    return service.update_package(package_id, data)


@admin_router.delete("/packages/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(package_id: int, service: OfferService = Depends(get_offer_service)):
    service.delete_package(package_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
