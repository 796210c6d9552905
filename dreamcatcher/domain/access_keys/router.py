"""Access key router - public key check and admin key management"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...rate_limiter import validate_key_rate_limit
from .schemas import AccessKeyCreate, AccessKeyResponse, ValidateKeyRequest, ValidateKeyResponse
from .service import AccessKeyService

router = APIRouter(tags=["Access Keys"])
admin_router = APIRouter(
    prefix="/admin/access-keys", tags=["Admin Access Keys"], dependencies=[Depends(get_current_admin)]
)


def get_access_key_service(db: Session = Depends(get_db)) -> AccessKeyService:
    return AccessKeyService(db)


@router.post("/validate-key", response_model=ValidateKeyResponse)
async def validate_key(
    data: ValidateKeyRequest,
    _: None = Depends(validate_key_rate_limit),
    service: AccessKeyService = Depends(get_access_key_service),
):
    """Check an access key before the booking form unlocks; unknown keys get 404"""
    service.validate(data.key)
    return ValidateKeyResponse(valid=True)


@admin_router.get("", response_model=list[AccessKeyResponse])
async def list_keys(service: AccessKeyService = Depends(get_access_key_service)):
    return service.list_keys()


@admin_router.post("", response_model=AccessKeyResponse, status_code=status.HTTP_201_CREATED)
async def create_key(
    data: AccessKeyCreate, service: AccessKeyService = Depends(get_access_key_service)
):
    return service.create_key(data.client_name)


@admin_router.delete("/{key_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_key(key_id: int, service: AccessKeyService = Depends(get_access_key_service)):
    service.delete_key(key_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
