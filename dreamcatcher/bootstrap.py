"""
Startup initializer
Creates missing tables and seeds the default admin (and, outside production, a test client)
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from .config import Settings
from .database import Database
from .domain.guests.repository import GuestRepository
from .models import Admin, Booking
from .security_utils import hash_password

logger = logging.getLogger(__name__)

TEST_CLIENT_ID = "9999"
TEST_CLIENT_PASSWORD = "password123"  # noqa: S105 - development fixture


def seed_default_admin(db: Session, settings: Settings) -> bool:
    if db.query(Admin.id).first() is not None:
        return False

    db.add(
        Admin(
            email=settings.default_admin_email,
            password_hash=hash_password(settings.default_admin_password),
        )
    )
    logger.warning(
        f"⚠️ Default admin created: {settings.default_admin_email}. Please change the password immediately."
    )
    return True


def seed_test_booking(db: Session) -> bool:
    if db.query(Booking.id).filter(Booking.client_id == TEST_CLIENT_ID).first() is not None:
        return False

    booking = Booking(
        client_id=TEST_CLIENT_ID,
        password_hash=hash_password(TEST_CLIENT_PASSWORD),
        access_key="TEST",
        package_name="Pakiet Testowy",
        total_price=0,
        selected_items=[],
        bride_name="Anna",
        groom_name="Jan",
        wedding_date=date(date.today().year + 1, 6, 20),
        email="test@dreamcatcher.com",
        phone_number="555000111",
    )
    db.add(booking)
    db.flush()
    GuestRepository.create_default_groups(db, booking.id)
    logger.info(f"🧪 Test booking seeded (client {TEST_CLIENT_ID})")
    return True


def initialize_database(database: Database, settings: Settings) -> None:
    """Idempotent: safe to run on every startup"""
    logger.info("🔄 Running database setup/check...")
    database.create_all()

    with database.session_scope() as db:
        seed_default_admin(db, settings)
        if settings.seed_test_data:
            seed_test_booking(db)

    logger.info("✅ Database setup/check complete")
