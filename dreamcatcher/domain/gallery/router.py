"""Gallery router - public gallery and admin gallery management"""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...schemas import UploadResponse
from ...utils.blob_storage import get_storage
from .schemas import GalleryItemCreate, GalleryItemResponse
from .service import GalleryService

router = APIRouter(tags=["Gallery"])
admin_router = APIRouter(
    prefix="/admin/galleries", tags=["Admin Gallery"], dependencies=[Depends(get_current_admin)]
)


def get_gallery_service(
    db: Session = Depends(get_db), storage=Depends(get_storage)
) -> GalleryService:
    return GalleryService(db, storage)


@router.get("/gallery", response_model=list[GalleryItemResponse])
async def public_gallery(service: GalleryService = Depends(get_gallery_service)):
    return service.list_items()


@admin_router.get("", response_model=list[GalleryItemResponse])
async def list_items(service: GalleryService = Depends(get_gallery_service)):
    return service.list_items()


@admin_router.post("", response_model=GalleryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    data: GalleryItemCreate, service: GalleryService = Depends(get_gallery_service)
):
    return service.create_item(data)


@admin_router.post("/upload", response_model=UploadResponse)
async def upload_image(
    file: UploadFile = File(...), service: GalleryService = Depends(get_gallery_service)
):
    return await service.upload_image(file)


@admin_router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: int, service: GalleryService = Depends(get_gallery_service)):
    service.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
