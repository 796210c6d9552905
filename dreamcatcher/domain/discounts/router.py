"""Discount router - public code check and admin code management"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from .schemas import DiscountCreate, DiscountResponse, ValidateDiscountRequest
from .service import DiscountService

router = APIRouter(tags=["Discounts"])
admin_router = APIRouter(
    prefix="/admin/discounts", tags=["Admin Discounts"], dependencies=[Depends(get_current_admin)]
)


def get_discount_service(db: Session = Depends(get_db)) -> DiscountService:
    return DiscountService(db)


@router.post("/validate-discount", response_model=DiscountResponse)
async def validate_discount(
    data: ValidateDiscountRequest, service: DiscountService = Depends(get_discount_service)
):
    return service.validate_code(data.code)


@admin_router.get("", response_model=list[DiscountResponse])
async def list_codes(service: DiscountService = Depends(get_discount_service)):
    return service.list_codes()


@admin_router.post("", response_model=DiscountResponse, status_code=status.HTTP_201_CREATED)
async def create_code(data: DiscountCreate, service: DiscountService = Depends(get_discount_service)):
    return service.create_code(data)


@admin_router.delete("/{discount_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_code(discount_id: int, service: DiscountService = Depends(get_discount_service)):
    service.delete_code(discount_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
