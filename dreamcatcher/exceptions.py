"""Application error taxonomy rendered as JSON {"message": ...} responses"""

from typing import Any, Optional


class AppError(Exception):
    status_code = 500
    default_message = "Wystąpił błąd serwera."

    def __init__(self, message: Optional[str] = None, payload: Optional[dict[str, Any]] = None):
        self.message = message or self.default_message
        self.payload = payload or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, **self.payload}


class ValidationError(AppError):
    status_code = 400
    default_message = "Nieprawidłowe dane."


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Brak nagłówka autoryzacyjnego."


class AuthorizationError(AppError):
    status_code = 403
    default_message = "Nieprawidłowy token."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Nie znaleziono zasobu."


class ConflictError(AppError):
    status_code = 409
    default_message = "Zasób już istnieje."


class ServerError(AppError):
    status_code = 500
    default_message = "Wystąpił błąd serwera."


class StorageError(Exception):
    """Raised by blob storage backends when an upload or delete fails."""
