"""
Tests for discount code validation and admin discount management.
"""

import unittest
from datetime import timedelta

from dreamcatcher.models import DiscountCode
from dreamcatcher.shared.timeutils import utc_now
from helpers import ApiTestCase


class DiscountTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.admin_headers()

    def _create(self, **body):
        payload = {"code": "wiosna", "type": "percentage", "value": 10}
        payload.update(body)
        response = self.client.post("/api/admin/discounts", json=payload, headers=self.admin)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_code_is_stored_upper_case(self):
        created = self._create()
        self.assertEqual(created["code"], "WIOSNA")
        self.assertEqual(created["times_used"], 0)

    def test_duplicate_code_is_409(self):
        self._create()
        response = self.client.post(
            "/api/admin/discounts",
            json={"code": "WIOSNA", "type": "fixed", "value": 200},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["message"], "Kod rabatowy już istnieje.")

    def test_validate_returns_code(self):
        self._create(type="fixed", value=300)
        response = self.client.post("/api/validate-discount", json={"code": "wiosna"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["type"], "fixed")
        self.assertEqual(response.json()["value"], 300)

    def test_validate_without_code_is_400(self):
        response = self.client.post("/api/validate-discount", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Kod nie został podany.")

    def test_unknown_expired_and_exhausted_codes_are_404(self):
        self._create(code="STARY", expires_at=(utc_now() - timedelta(days=1)).isoformat())
        self._create(code="RAZ", usage_limit=1)
        with self.session() as db:
            db.query(DiscountCode).filter(DiscountCode.code == "RAZ").update({"times_used": 1})

        for code in ("BRAK", "STARY", "RAZ"):
            response = self.client.post("/api/validate-discount", json={"code": code})
            self.assertEqual(response.status_code, 404, code)
            self.assertEqual(response.json()["message"], "Kod rabatowy jest nieprawidłowy lub wygasł.")

    def test_invalid_type_is_400(self):
        response = self.client.post(
            "/api/admin/discounts",
            json={"code": "X", "type": "gratis", "value": 10},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 400)

    def test_delete(self):
        created = self._create()
        url = f"/api/admin/discounts/{created['id']}"
        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 204)
        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 404)
        self.assertEqual(self.client.get("/api/admin/discounts", headers=self.admin).json(), [])


if __name__ == "__main__":
    unittest.main()
