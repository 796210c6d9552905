import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Request

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

INSECURE_CLIENT_SECRET = "INSECURE-DEV-CLIENT-SECRET-CHANGE-IN-PRODUCTION"  # noqa: S105
INSECURE_ADMIN_SECRET = "INSECURE-DEV-ADMIN-SECRET-CHANGE-IN-PRODUCTION"  # noqa: S105


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _secret(name: str, fallback: str, is_production: bool) -> str:
    value = os.getenv(name)
    if value:
        return value
    if is_production:
        raise RuntimeError(f"{name} must be set when ENVIRONMENT=production")
    warnings.warn(
        f"{name} not set! Using insecure default - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=3,
    )
    return fallback


@dataclass
class Settings:
    """Runtime configuration, passed explicitly into create_app()."""

    database_url: Optional[str]
    jwt_secret: str = INSECURE_CLIENT_SECRET
    admin_jwt_secret: str = INSECURE_ADMIN_SECRET
    token_expiry_hours: int = 24
    environment: str = "development"

    # Bootstrap seeding
    default_admin_email: str = "admin@dreamcatcher.com"
    default_admin_password: str = "password"  # noqa: S105 - changed after first login
    seed_test_data: bool = True

    # Booking flow
    require_valid_access_key: bool = False

    # Connection pool
    db_pool_size: int = 20
    db_max_overflow: int = 30
    db_pool_timeout: int = 30
    db_pool_recycle: int = 300
    db_log_slow_queries: bool = True
    db_slow_query_threshold: float = 1.0

    # Cloudflare R2 Configuration
    r2_account_id: Optional[str] = None
    r2_access_key_id: Optional[str] = None
    r2_secret_access_key: Optional[str] = None
    r2_bucket_name: str = "dreamcatcher"
    r2_public_url: Optional[str] = None

    # Resend Email Configuration
    resend_api_key: Optional[str] = None
    email_from_address: str = "Dreamcatcher Film <no-reply@dreamcatcherfilms.co.uk>"

    # Frontend base URL for links in emails
    frontend_url: str = "http://localhost:5173"
    allowed_origins: list[str] = field(default_factory=lambda: ["http://localhost:5173"])

    # Rate limiting
    redis_url: Optional[str] = None
    rate_limit_enabled: bool = True

    security_headers_enabled: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        environment = os.getenv("ENVIRONMENT", "development")
        is_production = environment.lower() == "production"
        frontend_url = os.getenv("FRONTEND_URL", "http://localhost:5173")
        origins = os.getenv("ALLOWED_ORIGINS", frontend_url)

        return cls(
            database_url=os.getenv("DATABASE_URL"),
            jwt_secret=_secret("JWT_SECRET", INSECURE_CLIENT_SECRET, is_production),
            admin_jwt_secret=_secret("ADMIN_JWT_SECRET", INSECURE_ADMIN_SECRET, is_production),
            token_expiry_hours=int(os.getenv("TOKEN_EXPIRY_HOURS", "24")),
            environment=environment,
            default_admin_email=os.getenv("DEFAULT_ADMIN_EMAIL", "admin@dreamcatcher.com"),
            default_admin_password=os.getenv("DEFAULT_ADMIN_PASSWORD", "password"),
            seed_test_data=_env_bool("SEED_TEST_DATA", not is_production) and not is_production,
            require_valid_access_key=_env_bool("REQUIRE_VALID_ACCESS_KEY", False),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "20")),
            db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "30")),
            db_pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", "30")),
            db_pool_recycle=int(os.getenv("DB_POOL_RECYCLE", "300")),
            db_log_slow_queries=_env_bool("DB_LOG_SLOW_QUERIES", True),
            db_slow_query_threshold=float(os.getenv("DB_SLOW_QUERY_THRESHOLD", "1.0")),
            r2_account_id=os.getenv("R2_ACCOUNT_ID"),
            r2_access_key_id=os.getenv("R2_ACCESS_KEY_ID"),
            r2_secret_access_key=os.getenv("R2_SECRET_ACCESS_KEY"),
            r2_bucket_name=os.getenv("R2_BUCKET_NAME", "dreamcatcher"),
            r2_public_url=os.getenv("R2_PUBLIC_URL"),
            resend_api_key=os.getenv("RESEND_API_KEY"),
            email_from_address=os.getenv(
                "EMAIL_FROM_ADDRESS", "Dreamcatcher Film <no-reply@dreamcatcherfilms.co.uk>"
            ),
            frontend_url=frontend_url,
            allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
            redis_url=os.getenv("REDIS_URL"),
            rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", True),
            security_headers_enabled=_env_bool("SECURITY_HEADERS_ENABLED", True),
        )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
