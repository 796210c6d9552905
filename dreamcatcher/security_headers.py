"""
Security headers middleware

Every API response gets a locked-down header set; the API only ever serves
JSON, so nothing may frame it, embed it or load sub-resources from it.
HSTS is only sent in production, behind TLS.
"""

from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

DISABLED_BROWSER_FEATURES = ("accelerometer", "camera", "geolocation", "microphone", "payment", "usb")

API_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'; base-uri 'none'",
    "Permissions-Policy": ", ".join(f"{feature}=()" for feature in DISABLED_BROWSER_FEATURES),
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, is_production: bool = False, exclude_paths: Optional[list[str]] = None):
        super().__init__(app)
        self.is_production = is_production
        self.exclude_paths = tuple(exclude_paths or ())

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        # Swagger UI needs its own scripts and styles
        if request.url.path.startswith(self.exclude_paths):
            return response

        response.headers.update(API_HEADERS)
        if self.is_production:
            response.headers["Strict-Transport-Security"] = HSTS_VALUE
        # Booking and guest data must not sit in shared caches
        response.headers.setdefault("Cache-Control", "no-store")
        return response
