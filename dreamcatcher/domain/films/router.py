"""Film router - public films page and admin film management"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...schemas import MessageResponse, OrderUpdate, UploadResponse
from ...utils.blob_storage import get_storage
from .schemas import FilmCreate, FilmResponse, FilmsPage, FilmUpdate
from .service import FilmService

router = APIRouter(tags=["Films"])
admin_router = APIRouter(
    prefix="/admin", tags=["Admin Films"], dependencies=[Depends(get_current_admin)]
)


def get_film_service(db: Session = Depends(get_db), storage=Depends(get_storage)) -> FilmService:
    return FilmService(db, storage)


@router.get("/films", response_model=FilmsPage)
async def films_page(service: FilmService = Depends(get_film_service)):
    return service.public_page()


@admin_router.get("/films", response_model=list[FilmResponse])
async def list_films(service: FilmService = Depends(get_film_service)):
    return service.list_films()


@admin_router.post("/films", response_model=FilmResponse, status_code=status.HTTP_201_CREATED)
async def create_film(data: FilmCreate, service: FilmService = Depends(get_film_service)):
    return service.create_film(data)


@admin_router.post("/films/order", response_model=MessageResponse)
async def reorder_films(data: OrderUpdate, service: FilmService = Depends(get_film_service)):
    service.reorder(data.orderedIds)
    return MessageResponse(message="Kolejność zaktualizowana.")


@admin_router.patch("/films/{film_id}", response_model=FilmResponse)
async def update_film(
    film_id: int, data: FilmUpdate, service: FilmService = Depends(get_film_service)
):
    return service.update_film(film_id, data)


@admin_router.delete("/films/{film_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_film(film_id: int, service: FilmService = Depends(get_film_service)):
    service.delete_film(film_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.get("/films-settings", response_model=dict[str, Optional[str]])
async def get_films_settings(service: FilmService = Depends(get_film_service)):
    return service.get_settings()


@admin_router.patch("/films-settings", response_model=MessageResponse)
async def update_films_settings(
    values: dict[str, Optional[str]] = Body(...),
    service: FilmService = Depends(get_film_service),
):
    service.update_settings(values)
    return MessageResponse(message="Ustawienia zaktualizowane.")


@admin_router.post("/films-settings/upload-hero", response_model=UploadResponse)
async def upload_hero_image(
    file: UploadFile = File(...), service: FilmService = Depends(get_film_service)
):
    return await service.upload_hero(file)
