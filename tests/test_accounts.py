"""
Tests for client/admin login, password reset and admin credential changes.
"""

import re
import unittest
from datetime import timedelta

from dreamcatcher.models import Admin, PasswordResetToken
from dreamcatcher.security_utils import hash_password, hash_token
from dreamcatcher.shared.timeutils import utc_now
from helpers import ADMIN_EMAIL, ADMIN_PASSWORD, TEST_CLIENT_ID, ApiTestCase

RESET_LINK = re.compile(r"/reset-hasla/([0-9a-f]+)")


class LoginTests(ApiTestCase):
    def test_unknown_client_and_wrong_password_look_the_same(self):
        unknown = self.client.post("/api/login", json={"clientId": "0000", "password": "x"})
        wrong = self.client.post(
            "/api/login", json={"clientId": TEST_CLIENT_ID, "password": "zle-haslo"}
        )
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.json(), wrong.json())
        self.assertEqual(unknown.json()["message"], "Nieprawidłowe dane logowania lub hasło.")

    def test_client_can_log_in_with_booking_email(self):
        response = self.client.post(
            "/api/login", json={"clientId": "Test@Dreamcatcher.com", "password": "password123"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("token", response.json())

    def test_missing_password_is_400(self):
        response = self.client.post("/api/login", json={"clientId": TEST_CLIENT_ID})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Brak wymaganego pola: password.")

    def test_admin_login_enumeration(self):
        unknown = self.client.post(
            "/api/admin/login", json={"email": "nobody@example.com", "password": "x"}
        )
        wrong = self.client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": "x"})
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(unknown.json(), wrong.json())
        self.assertEqual(wrong.json()["message"], "Nieprawidłowy e-mail lub hasło.")

    def test_admin_email_is_case_insensitive(self):
        response = self.client.post(
            "/api/admin/login", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD}
        )
        self.assertEqual(response.status_code, 200)


class PasswordResetTests(ApiTestCase):
    def _request_reset(self, email="test@dreamcatcher.com"):
        response = self.client.post("/api/forgot-password", json={"email": email})
        self.assertEqual(response.status_code, 200)
        return response

    def _token_from_email(self):
        match = RESET_LINK.search(self.mailer.sent[-1]["mjml_content"])
        self.assertIsNotNone(match)
        return match.group(1)

    def test_unknown_email_gets_same_answer_and_no_mail(self):
        known = self._request_reset()
        unknown = self._request_reset("nikt@example.com")
        self.assertEqual(known.json(), unknown.json())
        self.assertEqual(len(self.mailer.sent), 1)

    def test_token_is_stored_hashed(self):
        self._request_reset()
        token = self._token_from_email()
        with self.session() as db:
            entry = db.query(PasswordResetToken).one()
            self.assertEqual(entry.token_hash, hash_token(token))
            self.assertNotEqual(entry.token_hash, token)

    def test_reset_changes_password_and_consumes_token(self):
        self._request_reset()
        token = self._token_from_email()

        response = self.client.post(
            "/api/reset-password", json={"token": token, "password": "nowe-haslo"}
        )
        self.assertEqual(response.status_code, 200)
        self.client_headers(TEST_CLIENT_ID, "nowe-haslo")

        again = self.client.post("/api/reset-password", json={"token": token, "password": "x"})
        self.assertEqual(again.status_code, 400)
        self.assertEqual(again.json()["message"], "Token jest nieprawidłowy lub wygasł.")

    def test_expired_token_is_rejected(self):
        self._request_reset()
        token = self._token_from_email()
        with self.session() as db:
            entry = db.query(PasswordResetToken).one()
            entry.expires_at = utc_now() - timedelta(minutes=1)

        response = self.client.post("/api/reset-password", json={"token": token, "password": "x"})
        self.assertEqual(response.status_code, 400)

    def test_missing_token_or_password(self):
        response = self.client.post("/api/reset-password", json={"password": "x"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Brak tokenu lub hasła.")


class AdminCredentialsTests(ApiTestCase):
    def test_wrong_current_password_is_401(self):
        response = self.client.patch(
            "/api/admin/credentials",
            json={"currentPassword": "zle", "newPassword": "nowe"},
            headers=self.admin_headers(),
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Nieprawidłowe bieżące hasło.")

    def test_change_email_and_password(self):
        response = self.client.patch(
            "/api/admin/credentials",
            json={
                "currentPassword": ADMIN_PASSWORD,
                "newEmail": "studio@dreamcatcher.com",
                "newPassword": "mocne-haslo",
            },
            headers=self.admin_headers(),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Dane logowania zaktualizowane.")

        old = self.client.post(
            "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
        )
        self.assertEqual(old.status_code, 401)
        new = self.client.post(
            "/api/admin/login", json={"email": "studio@dreamcatcher.com", "password": "mocne-haslo"}
        )
        self.assertEqual(new.status_code, 200)

    def test_email_of_another_admin_is_409(self):
        with self.session() as db:
            db.add(Admin(email="druga@dreamcatcher.com", password_hash=hash_password("inne-haslo")))

        response = self.client.patch(
            "/api/admin/credentials",
            json={"currentPassword": ADMIN_PASSWORD, "newEmail": "Druga@Dreamcatcher.com"},
            headers=self.admin_headers(),
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["message"], "Ten adres e-mail jest już używany.")

        still = self.client.post(
            "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
        )
        self.assertEqual(still.status_code, 200)


if __name__ == "__main__":
    unittest.main()
