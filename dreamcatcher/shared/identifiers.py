"""
Short identifier allocation

Client IDs (4 digits) and access keys (6 upper-case base-36 characters) are
drawn at random and checked against their table until an unused value turns up.
The value is only reserved once the caller's own write commits.
"""

import logging
import secrets
import string
from collections.abc import Callable

from sqlalchemy import exists
from sqlalchemy.orm import InstrumentedAttribute, Session

from ..models import AccessKey, Booking

logger = logging.getLogger(__name__)

CLIENT_ID_LENGTH = 4
ACCESS_KEY_LENGTH = 6
ACCESS_KEY_ALPHABET = string.digits + string.ascii_uppercase


def generate_client_id() -> str:
    return f"{secrets.randbelow(10**CLIENT_ID_LENGTH):0{CLIENT_ID_LENGTH}d}"


def generate_access_key() -> str:
    return "".join(secrets.choice(ACCESS_KEY_ALPHABET) for _ in range(ACCESS_KEY_LENGTH))


def allocate_unique(
    db: Session, column: InstrumentedAttribute, generate: Callable[[], str]
) -> str:
    """Return the first generated candidate with no matching row in column's table."""
    attempts = 0
    while True:
        candidate = generate()
        attempts += 1
        taken = db.query(exists().where(column == candidate)).scalar()
        if not taken:
            if attempts > 1:
                logger.info(f"🔁 Allocated {column.key} after {attempts} draws")
            return candidate


def allocate_client_id(db: Session) -> str:
    return allocate_unique(db, Booking.client_id, generate_client_id)


def allocate_access_key(db: Session) -> str:
    return allocate_unique(db, AccessKey.key, generate_access_key)
