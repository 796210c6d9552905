"""
Tests for app-wide behavior (error bodies, health, headers) and the small admin
areas: settings, contact details and the availability calendar.
"""

import unittest

from helpers import ApiTestCase


class AppBehaviorTests(ApiTestCase):
    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_security_headers(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.headers["X-Frame-Options"], "DENY")
        self.assertEqual(response.headers["X-Content-Type-Options"], "nosniff")
        self.assertIn("Content-Security-Policy", response.headers)

    def test_unknown_route_has_message_body(self):
        response = self.client.get("/api/nie-istnieje")
        self.assertEqual(response.status_code, 404)
        self.assertIn("message", response.json())

    def test_unknown_field_is_named(self):
        response = self.client.post("/api/validate-key", json={"key": "ABC", "extra": 1})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Nieznane pole: extra.")

    def test_malformed_body(self):
        response = self.client.post(
            "/api/validate-key", content=b"{nie json", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("message", response.json())


class SettingsTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.admin_headers()

    def test_admin_settings_round_trip(self):
        response = self.client.get("/api/admin/settings", headers=self.admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["loginEmail"], "admin@dreamcatcher.com")
        self.assertIsNone(response.json()["notificationEmail"])

        response = self.client.patch(
            "/api/admin/settings",
            json={"senderName": "Dreamcatcher", "fromEmail": "Kontakt@Dreamcatcher.com"},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Ustawienia zaktualizowane.")

        settings = self.client.get("/api/admin/settings", headers=self.admin).json()
        self.assertEqual(settings["senderName"], "Dreamcatcher")
        self.assertEqual(settings["fromEmail"], "kontakt@dreamcatcher.com")

    def test_invalid_notification_email_is_400(self):
        response = self.client.patch(
            "/api/admin/settings", json={"notificationEmail": "zly-adres"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)

    def test_contact_details_are_public(self):
        response = self.client.patch(
            "/api/admin/contact-settings",
            json={"contact_phone": "+48 123 456 789", "google_maps_api_key": "maps-key"},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200)

        details = self.client.get("/api/contact-details").json()
        self.assertEqual(details["contact_phone"], "+48 123 456 789")
        self.assertEqual(details["google_maps_api_key"], "maps-key")

        admin_view = self.client.get("/api/admin/contact-settings", headers=self.admin).json()
        self.assertEqual(admin_view, details)

    def test_contact_settings_reject_foreign_keys(self):
        response = self.client.patch(
            "/api/admin/contact-settings",
            json={"contact_email": "a@b.pl", "fromEmail": "x@y.pl"},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Nieznane pole: fromEmail.")
        self.assertEqual(self.client.get("/api/contact-details").json(), {})


class AvailabilityTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.admin_headers()

    def _create_event(self, **body):
        payload = {
            "title": "Urlop",
            "start_time": "2030-07-01T08:00:00Z",
            "end_time": "2030-07-03T20:00:00Z",
        }
        payload.update(body)
        return self.client.post("/api/admin/availability", json=payload, headers=self.admin)

    def test_calendar_lists_events_and_wedding_days(self):
        event = self._create_event().json()

        calendar = self.client.get("/api/admin/availability", headers=self.admin).json()
        types = [entry["resource"]["type"] for entry in calendar]
        self.assertEqual(types, ["event", "booking"])
        self.assertEqual(calendar[0]["id"], event["id"])

        wedding = calendar[1]
        booking_id = self.seeded_booking_id()
        self.assertEqual(wedding["id"], f"booking-{booking_id}")
        self.assertEqual(wedding["resource"]["bookingId"], booking_id)
        self.assertTrue(wedding["allDay"])
        self.assertEqual(wedding["title"], "Rezerwacja: Anna & Jan")

    def test_end_before_start_is_400(self):
        response = self._create_event(end_time="2030-06-30T08:00:00Z")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["message"],
            "Data zakończenia nie może być wcześniejsza niż data rozpoczęcia.",
        )

    def test_update_and_delete(self):
        event = self._create_event().json()
        url = f"/api/admin/availability/{event['id']}"

        response = self.client.patch(url, json={"title": "Plener"}, headers=self.admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "Plener")

        response = self.client.patch(
            url, json={"end_time": "2030-06-01T00:00:00Z"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)

        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 204)
        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 404)


if __name__ == "__main__":
    unittest.main()
