import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from . import models  # noqa: F401 - registers the tables on Base
from .auth import build_scopes
from .bootstrap import initialize_database
from .config import Settings
from .database import Database
from .domain.access_keys.router import admin_router as admin_access_keys_router
from .domain.access_keys.router import router as access_keys_router
from .domain.accounts.router import router as accounts_router
from .domain.availability.router import router as availability_router
from .domain.bookings.router import admin_router as admin_bookings_router
from .domain.bookings.router import router as bookings_router
from .domain.discounts.router import admin_router as admin_discounts_router
from .domain.discounts.router import router as discounts_router
from .domain.films.router import admin_router as admin_films_router
from .domain.films.router import router as films_router
from .domain.gallery.router import admin_router as admin_gallery_router
from .domain.gallery.router import router as gallery_router
from .domain.guests.router import admin_router as admin_guests_router
from .domain.guests.router import public_router as rsvp_router
from .domain.guests.router import router as guests_router
from .domain.homepage.router import admin_router as admin_homepage_router
from .domain.homepage.router import router as homepage_router
from .domain.inbox.router import admin_router as admin_inbox_router
from .domain.inbox.router import router as contact_router
from .domain.messages.router import admin_router as admin_messages_router
from .domain.messages.router import router as messages_router
from .domain.offer.router import admin_router as admin_offer_router
from .domain.offer.router import router as offer_router
from .domain.questionnaires.router import admin_router as admin_questionnaires_router
from .domain.questionnaires.router import router as questionnaire_router
from .domain.settings.router import router as settings_router
from .domain.stages.router import admin_router as admin_stages_router
from .domain.stages.router import router as stages_router
from .email_service import Mailer
from .exceptions import AppError
from .rate_limiter import HybridRateLimiter
from .schemas import validation_message
from .security_headers import SecurityHeadersMiddleware
from .utils.blob_storage import R2BlobStorage

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("botocore").setLevel(logging.WARNING)

API_PREFIX = "/api"

ROUTERS = [
    accounts_router,
    access_keys_router,
    admin_access_keys_router,
    bookings_router,
    admin_bookings_router,
    guests_router,
    admin_guests_router,
    rsvp_router,
    settings_router,
    availability_router,
    gallery_router,
    admin_gallery_router,
    offer_router,
    admin_offer_router,
    discounts_router,
    admin_discounts_router,
    stages_router,
    admin_stages_router,
    messages_router,
    admin_messages_router,
    contact_router,
    admin_inbox_router,
    questionnaire_router,
    admin_questionnaires_router,
    films_router,
    admin_films_router,
    homepage_router,
    admin_homepage_router,
]


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path} - {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Every malformed request body renders as 400 with a field-specific message"""
        logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"message": validation_message(exc.errors())})

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"❌ Database error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"message": "Wystąpił błąd serwera."})


def create_app(
    settings: Optional[Settings] = None,
    storage=None,
    mailer: Optional[Mailer] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Runtime configuration, read from the environment when omitted
        storage: Blob store override (tests pass an in-memory fake)
        mailer: Email sender override

    Raises:
        RuntimeError: If no database URL is configured
    """
    settings = settings or Settings.from_env()
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL must be set")

    database = Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        log_slow_queries=settings.db_log_slow_queries,
        slow_query_threshold=settings.db_slow_query_threshold,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Application starting up...")
        initialize_database(database, settings)
        yield
        logger.info("Application shutting down...")
        database.dispose()

    app = FastAPI(title="Dreamcatcher Film API", version="1.0.0", lifespan=lifespan)

    app.state.db = database
    app.state.settings = settings
    app.state.storage = storage if storage is not None else R2BlobStorage.from_settings(settings)
    app.state.mailer = mailer if mailer is not None else Mailer.from_settings(settings)
    app.state.token_scopes = build_scopes(settings)
    app.state.rate_limiter = (
        HybridRateLimiter.from_settings(settings) if settings.rate_limit_enabled else None
    )
    if app.state.rate_limiter is None:
        logger.warning("⚠️ Rate limiting DISABLED")

    register_exception_handlers(app)

    if settings.security_headers_enabled:
        app.add_middleware(
            SecurityHeadersMiddleware,
            is_production=settings.is_production,
            exclude_paths=["/docs", "/openapi.json"],
        )
        logger.info("Security headers enabled")
    else:
        logger.warning("Security headers DISABLED - only use in development!")

    logger.info(f"CORS allowed origins: {settings.allowed_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    @app.get(f"{API_PREFIX}/health")
    def health():
        if not database.ping():
            return JSONResponse(status_code=503, content={"status": "unhealthy"})
        return {"status": "healthy"}

    return app
