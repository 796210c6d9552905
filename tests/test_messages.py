"""
Tests for the couple <-> studio message thread of a booking.
"""

import unittest

from helpers import PNG_BYTES, ApiTestCase


class MessageThreadTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.admin_headers()
        self.couple = self.client_headers()
        self.booking_id = self.seeded_booking_id()

    def _admin_post(self, body, expected=201):
        response = self.client.post(
            f"/api/admin/messages/{self.booking_id}", json=body, headers=self.admin
        )
        self.assertEqual(response.status_code, expected, response.text)
        return response.json()

    def test_client_message_counts_as_unread_for_admin(self):
        response = self.client.post("/api/messages", json={"content": "Dzień dobry!"}, headers=self.couple)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["sender"], "client")
        self.assertTrue(response.json()["is_read_by_client"])

        count_url = f"/api/admin/bookings/{self.booking_id}/unread-count"
        self.assertEqual(self.client.get(count_url, headers=self.admin).json(), {"count": 1})

        response = self.client.patch(
            f"/api/admin/bookings/{self.booking_id}/messages/mark-as-read", headers=self.admin
        )
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(count_url, headers=self.admin).json(), {"count": 0})

    def test_empty_client_message_is_400(self):
        response = self.client.post("/api/messages", json={"content": ""}, headers=self.couple)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Brak wymaganego pola: content.")

    def test_admin_message_notifies_couple(self):
        message = self._admin_post({"content": "Film jest gotowy."})
        self.assertEqual(message["sender"], "admin")
        self.assertEqual(
            self.mailer.subjects(),
            ["Nowa wiadomość od Dreamcatcher Film w sprawie Twojej rezerwacji"],
        )
        self.assertEqual(self.mailer.sent[0]["to"], "test@dreamcatcher.com")

        unread = self.client.get("/api/messages/unread-count", headers=self.couple)
        self.assertEqual(unread.json(), {"count": 1})
        response = self.client.patch("/api/messages/mark-as-read", headers=self.couple)
        self.assertEqual(response.status_code, 204)
        unread = self.client.get("/api/messages/unread-count", headers=self.couple)
        self.assertEqual(unread.json(), {"count": 0})

    def test_admin_message_survives_mail_failure(self):
        self.mailer.fail = True
        self._admin_post({"content": "Zapraszamy na spotkanie."})
        thread = self.client.get("/api/messages", headers=self.couple).json()
        self.assertEqual(len(thread), 1)

    def test_admin_message_needs_content_or_attachment(self):
        response = self.client.post(
            f"/api/admin/messages/{self.booking_id}", json={}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Brak wymaganego pola: content.")

    def test_attachment_upload_and_message(self):
        upload = self.client.post(
            "/api/admin/messages/upload",
            files={"file": ("kadr.png", PNG_BYTES, "image/png")},
            headers=self.admin,
        )
        self.assertEqual(upload.status_code, 200, upload.text)
        url = upload.json()["url"]
        self.assertIn("/messages/", url)

        self._admin_post({"attachment_url": url, "attachment_type": "image/png"})
        thread = self.client.get(f"/api/admin/messages/{self.booking_id}", headers=self.admin).json()
        self.assertEqual(thread[0]["attachment_url"], url)
        self.assertIsNone(thread[0]["content"])

    def test_thread_is_chronological(self):
        self.client.post("/api/messages", json={"content": "Pierwsza"}, headers=self.couple)
        self._admin_post({"content": "Druga"})
        self.client.post("/api/messages", json={"content": "Trzecia"}, headers=self.couple)

        thread = self.client.get("/api/messages", headers=self.couple).json()
        self.assertEqual([m["content"] for m in thread], ["Pierwsza", "Druga", "Trzecia"])

    def test_unknown_booking_is_404(self):
        response = self.client.get("/api/admin/messages/4040", headers=self.admin)
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
