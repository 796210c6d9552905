"""Access key schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...schemas import ORMModel, RequestModel


class ValidateKeyRequest(RequestModel):
    key: str = Field(min_length=1)

    @field_validator("key")
    @classmethod
    def normalize_key(cls, v):
        return v.strip().upper()


class ValidateKeyResponse(BaseModel):
    valid: bool


class AccessKeyCreate(RequestModel):
    client_name: str = Field(min_length=1, max_length=255)


class AccessKeyResponse(ORMModel):
    id: int
    key: str
    client_name: str
    created_at: Optional[datetime] = None
