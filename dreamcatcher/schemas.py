from typing import Any

from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """Base for request bodies: unknown fields are rejected at the boundary"""

    model_config = ConfigDict(extra="forbid")


class ORMModel(BaseModel):
    """Base for responses built straight from SQLAlchemy rows"""

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


class CountResponse(BaseModel):
    count: int


class UploadResponse(BaseModel):
    url: str
    pathname: str
    contentType: str
    size: int


class OrderUpdate(RequestModel):
    """New display order, as a list of row IDs"""

    orderedIds: list[int]


# ============================================================================
# REQUEST VALIDATION MESSAGES
# ============================================================================

MISSING_ERROR_TYPES = {"missing", "string_too_short", "too_short"}


def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts)


def validation_message(errors: list[dict[str, Any]]) -> str:
    """Turn the first pydantic error into a field-specific Polish message"""
    if not errors:
        return "Nieprawidłowe dane."

    error = errors[0]
    field = _field_name(tuple(error.get("loc", ())))
    if not field:
        return "Brak danych w żądaniu."

    error_type = error.get("type", "")
    if error_type in MISSING_ERROR_TYPES:
        return f"Brak wymaganego pola: {field}."
    if error_type == "extra_forbidden":
        return f"Nieznane pole: {field}."
    return f"Nieprawidłowa wartość pola: {field}."
