"""
Tests for client/admin bearer tokens: missing vs invalid tokens and scope separation.
"""

import unittest
from datetime import timedelta

from jose import jwt

from dreamcatcher.security_utils import create_jwt_token, verify_jwt_token
from helpers import TEST_CLIENT_ID, ApiTestCase


class TokenHelperTests(unittest.TestCase):
    def test_round_trip_keeps_claims(self):
        token = create_jwt_token({"user": {"clientId": "1234"}}, "secret", timedelta(hours=1))
        payload = verify_jwt_token(token, "secret")
        self.assertEqual(payload["user"], {"clientId": "1234"})
        self.assertIn("exp", payload)

    def test_wrong_secret_is_rejected(self):
        token = create_jwt_token({"user": {"clientId": "1234"}}, "secret", timedelta(hours=1))
        self.assertIsNone(verify_jwt_token(token, "other-secret"))

    def test_expired_token_is_rejected(self):
        token = create_jwt_token({"user": {"clientId": "1234"}}, "secret", timedelta(seconds=-5))
        self.assertIsNone(verify_jwt_token(token, "secret"))


class AuthGuardTests(ApiTestCase):
    def test_missing_token_is_401(self):
        response = self.client.get("/api/my-booking")
        self.assertEqual(response.status_code, 401)
        self.assertIn("message", response.json())

        response = self.client.get("/api/admin/bookings")
        self.assertEqual(response.status_code, 401)

    def test_garbage_token_is_403(self):
        headers = {"Authorization": "Bearer not-a-jwt"}
        self.assertEqual(self.client.get("/api/my-booking", headers=headers).status_code, 403)
        self.assertEqual(self.client.get("/api/admin/bookings", headers=headers).status_code, 403)

    def test_client_token_carries_client_id(self):
        headers = self.client_headers()
        token = headers["Authorization"].split(" ", 1)[1]
        claims = jwt.decode(token, self.settings.jwt_secret, algorithms=["HS256"])
        self.assertEqual(claims["user"]["clientId"], TEST_CLIENT_ID)

    def test_admin_token_carries_id_and_email(self):
        token = self.admin_headers()["Authorization"].split(" ", 1)[1]
        claims = jwt.decode(token, self.settings.admin_jwt_secret, algorithms=["HS256"])
        self.assertEqual(claims["admin"]["email"], "admin@dreamcatcher.com")
        self.assertIsInstance(claims["admin"]["id"], int)

    def test_client_token_cannot_reach_admin_routes(self):
        response = self.client.get("/api/admin/bookings", headers=self.client_headers())
        self.assertEqual(response.status_code, 403)

    def test_admin_token_cannot_reach_client_routes(self):
        response = self.client.get("/api/my-booking", headers=self.admin_headers())
        self.assertEqual(response.status_code, 403)

    def test_token_for_deleted_booking_is_404(self):
        headers = self.client_headers()
        booking_id = self.seeded_booking_id()
        admin = self.admin_headers()
        self.assertEqual(
            self.client.delete(f"/api/admin/bookings/{booking_id}", headers=admin).status_code, 204
        )
        self.assertEqual(self.client.get("/api/my-booking", headers=headers).status_code, 404)


if __name__ == "__main__":
    unittest.main()
