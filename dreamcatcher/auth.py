import logging
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings
from .exceptions import AuthenticationError, AuthorizationError
from .security_utils import create_jwt_token, verify_jwt_token

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must become our 401, not FastAPI's 403
security = HTTPBearer(auto_error=False)


class PrincipalKind(str, Enum):
    CLIENT = "client"
    ADMIN = "admin"


@dataclass(frozen=True)
class TokenScope:
    """Signing context of one principal kind: its own secret and claim namespace."""

    kind: PrincipalKind
    claim: str
    secret: str
    lifetime: timedelta

    def issue(self, claims: dict[str, Any]) -> str:
        return create_jwt_token({self.claim: claims}, self.secret, self.lifetime)

    def verify(self, token: str) -> Optional[dict[str, Any]]:
        payload = verify_jwt_token(token, self.secret)
        if not payload or not isinstance(payload.get(self.claim), dict):
            return None
        return payload[self.claim]


@dataclass(frozen=True)
class Principal:
    kind: PrincipalKind
    claims: dict[str, Any]

    @property
    def client_id(self) -> str:
        return str(self.claims["clientId"])

    @property
    def admin_id(self) -> int:
        return int(self.claims["id"])

    @property
    def email(self) -> Optional[str]:
        return self.claims.get("email")


def build_scopes(settings: Settings) -> dict[PrincipalKind, TokenScope]:
    lifetime = timedelta(hours=settings.token_expiry_hours)
    return {
        PrincipalKind.CLIENT: TokenScope(
            PrincipalKind.CLIENT, "user", settings.jwt_secret, lifetime
        ),
        PrincipalKind.ADMIN: TokenScope(
            PrincipalKind.ADMIN, "admin", settings.admin_jwt_secret, lifetime
        ),
    }


def get_scope(request: Request, kind: PrincipalKind) -> TokenScope:
    return request.app.state.token_scopes[kind]


def issue_client_token(request: Request, client_id: str) -> str:
    return get_scope(request, PrincipalKind.CLIENT).issue({"clientId": client_id})


def issue_admin_token(request: Request, admin_id: int, email: str) -> str:
    return get_scope(request, PrincipalKind.ADMIN).issue({"id": admin_id, "email": email})


def _authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
    kind: PrincipalKind,
) -> Principal:
    if not credentials or not credentials.credentials:
        logger.warning(f"🔒 Missing bearer token for {request.method} {request.url.path}")
        raise AuthenticationError("Brak nagłówka autoryzacyjnego.")

    claims = get_scope(request, kind).verify(credentials.credentials)
    if claims is None:
        logger.warning(f"🔒 Rejected {kind.value} token for {request.url.path}")
        raise AuthorizationError("Nieprawidłowy token.")

    principal = Principal(kind, claims)
    request.state.principal = principal
    return principal


async def get_current_client(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """Client-scoped guard: only tokens signed with the client secret pass."""
    principal = _authenticate(request, credentials, PrincipalKind.CLIENT)
    if "clientId" not in principal.claims:
        raise AuthorizationError("Nieprawidłowy token.")
    return principal


async def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """Admin-scoped guard: only tokens signed with the admin secret pass."""
    principal = _authenticate(request, credentials, PrincipalKind.ADMIN)
    if "id" not in principal.claims:
        raise AuthorizationError("Nieprawidłowy token.")
    return principal
