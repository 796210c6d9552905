"""Shared validation utilities"""

import re
import uuid
from typing import Optional
from urllib.parse import parse_qs, urlparse

EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$")
MAX_EMAIL_LENGTH = 255
YOUTUBE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")
YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com"}
YOUTUBE_PATH_PREFIXES = ("embed", "shorts", "live", "v")


def validate_uuid(value: str) -> bool:
    """True for a canonical (hyphenated) UUID string, as issued for RSVP links"""
    try:
        return str(uuid.UUID(value)) == value.lower()
    except (ValueError, AttributeError, TypeError):
        return False


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number.

    Accepts national (e.g. 555 111 222) and international (+48 555-111-222)
    notations; separators are dropped.

    Raises:
        ValueError: If the number has fewer than 7 or more than 15 digits
    """
    if not phone:
        return phone

    phone = phone.strip()
    prefix = "+" if phone.startswith("+") else ""
    digits = re.sub(r"[\s\-().]", "", phone.lstrip("+"))

    if not digits.isdigit() or not 7 <= len(digits) <= 15:
        raise ValueError("Invalid phone number")

    return f"{prefix}{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate an email address and return it trimmed and lower-cased.

    Raises:
        ValueError: If the address is too long or not shaped like local@domain.tld
    """
    if not email:
        return email

    email = email.strip().lower()
    if len(email) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")
    return email


def youtube_video_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the 11-character video ID from a YouTube link.

    Understands watch?v= links, youtu.be short links and the /embed/, /shorts/
    and /live/ paths. Returns None for anything else.
    """
    if not url:
        return None

    url = url.strip()
    if "://" not in url:
        url = f"https://{url}"
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    parts = [part for part in parsed.path.split("/") if part]

    video_id = None
    if host in YOUTUBE_HOSTS:
        if parts == ["watch"]:
            video_id = parse_qs(parsed.query).get("v", [None])[0]
        elif len(parts) >= 2 and parts[0] in YOUTUBE_PATH_PREFIXES:
            video_id = parts[1]
    elif host == "youtu.be" and parts:
        video_id = parts[0]

    if video_id and YOUTUBE_ID_PATTERN.match(video_id):
        return video_id
    return None
