"""Account schemas - logins, password reset and admin credentials"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...schemas import RequestModel
from ...shared.validators import validate_email


class ClientLogin(RequestModel):
    """Client portal login: the 4-digit client ID (or booking email) plus password"""

    clientId: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("clientId")
    @classmethod
    def strip_identifier(cls, v):
        return v.strip()


class AdminLogin(RequestModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class TokenResponse(BaseModel):
    token: str


class ForgotPasswordRequest(RequestModel):
    email: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class ResetPasswordRequest(RequestModel):
    # Both optional so a missing one gets the dedicated message
    token: Optional[str] = None
    password: Optional[str] = None


class CredentialsUpdate(RequestModel):
    currentPassword: str = Field(min_length=1)
    newEmail: Optional[str] = None
    newPassword: Optional[str] = None

    @field_validator("newEmail")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)
