"""
Shared fixtures for the API tests.
Each test case gets its own app bound to a fresh in-memory SQLite database,
with recording fakes in place of R2 storage and Resend.
"""

import unittest
from datetime import date

from fastapi.testclient import TestClient

from dreamcatcher.config import Settings
from dreamcatcher.email_service import EmailDeliveryError
from dreamcatcher.exceptions import StorageError
from dreamcatcher.main import create_app
from dreamcatcher.models import Booking

ADMIN_EMAIL = "admin@dreamcatcher.com"
ADMIN_PASSWORD = "password"  # noqa: S105 - seeded default
TEST_CLIENT_ID = "9999"
TEST_CLIENT_PASSWORD = "password123"  # noqa: S105 - seeded test booking
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeStorage:
    """In-memory blob store that records uploads and deletes"""

    public_url = "https://cdn.test"

    def __init__(self):
        self.objects = {}
        self.deleted = []
        self.fail_deletes = False

    def upload(self, key, content, content_type):
        self.objects[key] = (content, content_type)
        return f"{self.public_url}/{key}"

    def delete(self, url):
        if self.fail_deletes:
            raise StorageError(f"Delete failed for {url}")
        self.deleted.append(url)
        self.objects.pop(url.replace(f"{self.public_url}/", ""), None)


class FakeMailer:
    """Records every email instead of calling Resend"""

    def __init__(self):
        self.sent = []
        self.batches = []
        self.fail = False

    def send_email(self, to, subject, mjml_content, from_address=None, reply_to=None):
        if self.fail:
            raise EmailDeliveryError("Resend unavailable")
        self.sent.append(
            {
                "to": to,
                "subject": subject,
                "mjml_content": mjml_content,
                "from_address": from_address,
                "reply_to": reply_to,
            }
        )
        return {"id": f"email-{len(self.sent)}"}

    def send_batch(self, messages):
        if self.fail:
            raise EmailDeliveryError("Resend unavailable")
        self.batches.append(list(messages))
        return {"data": [{"id": f"batch-{i}"} for i, _ in enumerate(messages)]}

    def subjects(self):
        return [email["subject"] for email in self.sent]


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "jwt_secret": "test-client-secret",
        "admin_jwt_secret": "test-admin-secret",
        "rate_limit_enabled": False,
        "seed_test_data": True,
        "frontend_url": "https://dreamcatcher.test",
        "db_log_slow_queries": False,
    }
    values.update(overrides)
    return Settings(**values)


def booking_payload(**overrides) -> dict:
    payload = {
        "accessKey": "1234",
        "password": "sekret-haslo",
        "packageName": "Złoty",
        "totalPrice": 5000,
        "selectedItems": ["film", "dron"],
        "brideName": "Anna",
        "groomName": "Piotr",
        "weddingDate": date(date.today().year + 1, 8, 15).isoformat(),
        "email": "para@example.com",
        "phoneNumber": "+48 555 111 222",
    }
    payload.update(overrides)
    return payload


class ApiTestCase(unittest.TestCase):
    """Boots the app per test and offers login helpers"""

    settings_overrides: dict = {}

    def setUp(self):
        self.storage = FakeStorage()
        self.mailer = FakeMailer()
        self.settings = make_settings(**self.settings_overrides)
        self.app = create_app(self.settings, storage=self.storage, mailer=self.mailer)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def session(self):
        """Unit of work against the test database, for setup and assertions"""
        return self.app.state.db.session_scope()

    def admin_headers(self) -> dict:
        response = self.client.post(
            "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
        )
        self.assertEqual(response.status_code, 200, response.text)
        return {"Authorization": f"Bearer {response.json()['token']}"}

    def client_headers(self, client_id=TEST_CLIENT_ID, password=TEST_CLIENT_PASSWORD) -> dict:
        response = self.client.post("/api/login", json={"clientId": client_id, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return {"Authorization": f"Bearer {response.json()['token']}"}

    def create_booking(self, **overrides) -> dict:
        response = self.client.post("/api/bookings", json=booking_payload(**overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def seeded_booking_id(self) -> int:
        with self.session() as db:
            return db.query(Booking.id).filter(Booking.client_id == TEST_CLIENT_ID).scalar()
