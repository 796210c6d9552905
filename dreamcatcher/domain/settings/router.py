"""Settings router - admin settings, contact settings and public contact details"""

from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ...auth import Principal, get_current_admin
from ...database import get_db
from ...schemas import MessageResponse
from .schemas import AdminSettingsResponse, AdminSettingsUpdate
from .service import SettingsService

router = APIRouter(tags=["Settings"])


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    return SettingsService(db)


@router.get("/contact-details", response_model=dict[str, Optional[str]])
async def get_contact_details(service: SettingsService = Depends(get_settings_service)):
    return service.get_contact_details()


@router.get("/admin/settings", response_model=AdminSettingsResponse)
async def get_admin_settings(
    admin: Principal = Depends(get_current_admin),
    service: SettingsService = Depends(get_settings_service),
):
    return service.get_admin_settings(admin.admin_id)


@router.patch("/admin/settings", response_model=MessageResponse)
async def update_admin_settings(
    data: AdminSettingsUpdate,
    admin: Principal = Depends(get_current_admin),
    service: SettingsService = Depends(get_settings_service),
):
    service.update_admin_settings(admin.admin_id, data)
    return MessageResponse(message="Ustawienia zaktualizowane.")


@router.get(
    "/admin/contact-settings",
    response_model=dict[str, Optional[str]],
    dependencies=[Depends(get_current_admin)],
)
async def get_contact_settings(service: SettingsService = Depends(get_settings_service)):
    return service.get_contact_details()


@router.patch(
    "/admin/contact-settings",
    response_model=MessageResponse,
    dependencies=[Depends(get_current_admin)],
)
async def update_contact_settings(
    values: dict[str, Optional[str]] = Body(...),
    service: SettingsService = Depends(get_settings_service),
):
    service.update_contact_settings(values)
    return MessageResponse(message="Ustawienia zaktualizowane.")
