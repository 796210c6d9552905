"""Discount code schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from ...schemas import ORMModel, RequestModel


class ValidateDiscountRequest(RequestModel):
    code: Optional[str] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v):
        if v is None:
            return v
        return v.strip().upper() or None


class DiscountCreate(RequestModel):
    code: str = Field(min_length=1, max_length=255)
    type: Literal["percentage", "fixed"]
    value: float = Field(gt=0)
    usage_limit: Optional[int] = Field(default=None, ge=1)
    expires_at: Optional[datetime] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v):
        v = v.strip().upper()
        if not v:
            raise ValueError("Discount code is empty")
        return v


class DiscountResponse(ORMModel):
    id: int
    code: str
    type: str
    value: float
    usage_limit: Optional[int] = None
    times_used: int
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
