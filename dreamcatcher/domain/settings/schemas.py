"""Admin and contact settings schemas"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...schemas import RequestModel
from ...shared.validators import validate_email


class AdminSettingsResponse(BaseModel):
    loginEmail: str
    notificationEmail: Optional[str] = None
    senderName: str = ""
    fromEmail: str = ""


class AdminSettingsUpdate(RequestModel):
    notificationEmail: Optional[str] = None
    senderName: Optional[str] = None
    fromEmail: Optional[str] = None

    @field_validator("notificationEmail", "fromEmail")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)
