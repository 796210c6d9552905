"""
Tests for the production stage catalog and per-booking project progress.
"""

import unittest

from dreamcatcher.models import BookingStage
from helpers import ApiTestCase


class StageTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.admin_headers()
        self.booking_id = self.seeded_booking_id()

    def _create_stage(self, name="Montaż", description=None):
        response = self.client.post(
            "/api/admin/stages", json={"name": name, "description": description}, headers=self.admin
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def _assign(self, stage_id):
        return self.client.post(
            f"/api/admin/booking-stages/{self.booking_id}",
            json={"stage_id": stage_id},
            headers=self.admin,
        )

    def _booking_stage_id(self):
        stages = self.client.get(
            f"/api/admin/booking-stages/{self.booking_id}", headers=self.admin
        ).json()
        return stages[0]["id"]

    def test_catalog_create_list_delete(self):
        stage = self._create_stage("Kolor", "Korekcja barwna")
        listed = self.client.get("/api/admin/stages", headers=self.admin).json()
        self.assertIn(stage["id"], [s["id"] for s in listed])

        url = f"/api/admin/stages/{stage['id']}"
        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 204)
        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 404)

    def test_stage_assigned_to_a_booking_cannot_be_deleted(self):
        stage = self._create_stage("Ankieta")
        created = self.create_booking()

        with self.session() as db:
            before = db.query(BookingStage).filter(BookingStage.stage_id == stage["id"]).count()
        self.assertEqual(before, 1)

        response = self.client.delete(f"/api/admin/stages/{stage['id']}", headers=self.admin)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(
            response.json()["message"],
            "Etap jest przypisany do rezerwacji i nie może zostać usunięty.",
        )

        with self.session() as db:
            kept = db.query(BookingStage).filter(BookingStage.stage_id == stage["id"]).all()
            self.assertEqual([bs.booking_id for bs in kept], [created["bookingId"]])
        listed = self.client.get("/api/admin/stages", headers=self.admin).json()
        self.assertIn(stage["id"], [s["id"] for s in listed])

    def test_assign_emails_the_couple(self):
        stage = self._create_stage()
        response = self._assign(stage["id"])
        self.assertEqual(response.status_code, 201)
        self.assertEqual(self.mailer.subjects(), ["Aktualizacja Twojego projektu: Nowy etap"])
        self.assertEqual(self.mailer.sent[0]["to"], "test@dreamcatcher.com")

        stages = self.client.get(
            f"/api/admin/booking-stages/{self.booking_id}", headers=self.admin
        ).json()
        self.assertEqual([(s["name"], s["status"]) for s in stages], [("Montaż", "pending")])

    def test_assign_twice_is_409(self):
        stage = self._create_stage()
        self._assign(stage["id"])
        response = self._assign(stage["id"])
        self.assertEqual(response.status_code, 409)

    def test_assign_unknown_stage_is_404(self):
        self.assertEqual(self._assign(4040).status_code, 404)

    def test_completed_status_stamps_completion(self):
        self._assign(self._create_stage()["id"])
        booking_stage_id = self._booking_stage_id()

        response = self.client.patch(
            f"/api/admin/booking-stages/{booking_stage_id}",
            json={"status": "completed"},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 204)
        with self.session() as db:
            self.assertIsNotNone(db.get(BookingStage, booking_stage_id).completed_at)

        self.client.patch(
            f"/api/admin/booking-stages/{booking_stage_id}",
            json={"status": "in_progress"},
            headers=self.admin,
        )
        with self.session() as db:
            self.assertIsNone(db.get(BookingStage, booking_stage_id).completed_at)

    def test_unknown_status_is_400(self):
        self._assign(self._create_stage()["id"])
        response = self.client.patch(
            f"/api/admin/booking-stages/{self._booking_stage_id()}",
            json={"status": "archived"},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 400)

    def test_client_approves_only_stages_awaiting_approval(self):
        self._assign(self._create_stage("Zwiastun", "Krótki film")["id"])
        booking_stage_id = self._booking_stage_id()
        client = self.client_headers()
        url = f"/api/booking-stages/{booking_stage_id}/approve"

        response = self.client.patch(url, headers=client)
        self.assertEqual(response.status_code, 404)

        self.client.patch(
            f"/api/admin/booking-stages/{booking_stage_id}",
            json={"status": "awaiting_approval"},
            headers=self.admin,
        )
        response = self.client.patch(url, headers=client)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Etap został zatwierdzony.")

        mine = self.client.get("/api/booking-stages", headers=client).json()
        self.assertEqual(mine[0]["status"], "completed")
        self.assertEqual(mine[0]["description"], "Krótki film")
        self.assertIsNotNone(mine[0]["completed_at"])

    def test_client_cannot_approve_another_bookings_stage(self):
        other = self.create_booking()
        self._assign(self._create_stage()["id"])
        booking_stage_id = self._booking_stage_id()
        self.client.patch(
            f"/api/admin/booking-stages/{booking_stage_id}",
            json={"status": "awaiting_approval"},
            headers=self.admin,
        )

        headers = self.client_headers(other["clientId"], "sekret-haslo")
        response = self.client.patch(
            f"/api/booking-stages/{booking_stage_id}/approve", headers=headers
        )
        self.assertEqual(response.status_code, 404)

    def test_remove(self):
        self._assign(self._create_stage()["id"])
        url = f"/api/admin/booking-stages/{self._booking_stage_id()}"
        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 204)
        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 404)


if __name__ == "__main__":
    unittest.main()
