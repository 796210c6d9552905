"""
Tests for questionnaire templates, the default questionnaire of new bookings,
the couple's answers and the admin per-booking view.
"""

import unittest

from dreamcatcher.models import Answer, QuestionnaireResponse
from helpers import ApiTestCase


class QuestionnaireTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.admin_headers()

    def _create_template(self, title="Ankieta ślubna", is_default=False):
        response = self.client.post(
            "/api/admin/questionnaires",
            json={"title": title, "is_default": is_default},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def _add_question(self, template_id, text, type="text", sort_order=0):
        response = self.client.post(
            f"/api/admin/questionnaires/{template_id}/questions",
            json={"text": text, "type": type, "sort_order": sort_order},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()


class TemplateManagementTests(QuestionnaireTestCase):
    def test_only_one_default_template(self):
        first = self._create_template("Pierwsza", is_default=True)
        second = self._create_template("Druga", is_default=True)

        templates = self.client.get("/api/admin/questionnaires", headers=self.admin).json()
        defaults = {t["id"]: t["is_default"] for t in templates}
        self.assertEqual(defaults, {first["id"]: False, second["id"]: True})

        response = self.client.patch(
            f"/api/admin/questionnaires/{first['id']}", json={"is_default": True}, headers=self.admin
        )
        self.assertEqual(response.status_code, 200)
        templates = self.client.get("/api/admin/questionnaires", headers=self.admin).json()
        self.assertEqual([t["id"] for t in templates if t["is_default"]], [first["id"]])

    def test_questions_are_listed_in_sort_order(self):
        template = self._create_template()
        late = self._add_question(template["id"], "Pierwszy taniec?", "yes_no", sort_order=2)
        early = self._add_question(template["id"], "Godzina ceremonii?", sort_order=1)

        templates = self.client.get("/api/admin/questionnaires", headers=self.admin).json()
        self.assertEqual([q["id"] for q in templates[0]["questions"]], [early["id"], late["id"]])

    def test_update_and_delete_question(self):
        template = self._create_template()
        question = self._add_question(template["id"], "Link do playlisty", "link")
        url = f"/api/admin/questions/{question['id']}"

        response = self.client.patch(url, json={"text": "Link do muzyki"}, headers=self.admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["text"], "Link do muzyki")
        self.assertEqual(response.json()["type"], "link")

        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 204)
        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 404)

    def test_unknown_question_type_is_400(self):
        template = self._create_template()
        response = self.client.post(
            f"/api/admin/questionnaires/{template['id']}/questions",
            json={"text": "Ulubiony kolor?", "type": "color"},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 400)

    def test_question_for_missing_template_is_404(self):
        response = self.client.post(
            "/api/admin/questionnaires/999/questions",
            json={"text": "Pytanie", "type": "text"},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 404)

    def test_requires_admin(self):
        self.assertEqual(self.client.get("/api/admin/questionnaires").status_code, 401)


class ClientQuestionnaireTests(QuestionnaireTestCase):
    def setUp(self):
        super().setUp()
        self.template = self._create_template(is_default=True)
        self.question = self._add_question(self.template["id"], "Godzina ceremonii?")
        self.created = self.create_booking()
        self.couple = self.client_headers(self.created["clientId"], "sekret-haslo")

    def _questionnaire(self):
        response = self.client.get("/api/my-booking/questionnaire", headers=self.couple)
        self.assertEqual(response.status_code, 200)
        return response.json()

    def _save(self, answers, response_id=None):
        return self.client.patch(
            "/api/my-booking/questionnaire/answers",
            json={"response_id": response_id or self._questionnaire()["response_id"], "answers": answers},
            headers=self.couple,
        )

    def test_new_booking_gets_the_default_questionnaire(self):
        booking = self.client.get("/api/my-booking", headers=self.couple).json()
        questionnaire = booking["questionnaire"]
        self.assertEqual(questionnaire["status"], "pending")
        self.assertEqual(questionnaire["template"]["id"], self.template["id"])
        self.assertEqual([q["text"] for q in questionnaire["questions"]], ["Godzina ceremonii?"])
        self.assertEqual(questionnaire["answers"], {})
        self.assertEqual(self._questionnaire(), questionnaire)

    def test_booking_without_default_template_has_none(self):
        booking = self.client.get("/api/my-booking", headers=self.client_headers()).json()
        self.assertIsNone(booking["questionnaire"])

    def test_answers_are_saved_and_overwritten(self):
        question_id = str(self.question["id"])
        response = self._save({question_id: "14:00"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Zapisano odpowiedzi.")

        self._save({question_id: "15:30"})
        self.assertEqual(self._questionnaire()["answers"], {question_id: "15:30"})
        with self.session() as db:
            self.assertEqual(db.query(Answer).count(), 1)

    def test_answer_to_foreign_question_is_400(self):
        other = self._create_template("Inna")
        foreign = self._add_question(other["id"], "Obce pytanie")

        response = self._save({str(foreign["id"]): "tak"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["question_ids"], [foreign["id"]])

    def test_other_couples_questionnaire_is_404(self):
        response_id = self._questionnaire()["response_id"]
        response = self.client.patch(
            "/api/my-booking/questionnaire/answers",
            json={"response_id": response_id, "answers": {str(self.question["id"]): "tak"}},
            headers=self.client_headers(),
        )
        self.assertEqual(response.status_code, 404)

        response = self.client.post(
            "/api/my-booking/questionnaire/submit",
            json={"response_id": response_id},
            headers=self.client_headers(),
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(self._questionnaire()["status"], "pending")

    def test_submit_alerts_the_studio_and_locks_answers(self):
        self.client.patch(
            "/api/admin/settings", json={"notificationEmail": "studio@example.com"}, headers=self.admin
        )
        response_id = self._questionnaire()["response_id"]
        self._save({str(self.question["id"]): "14:00"}, response_id)

        response = self.client.post(
            "/api/my-booking/questionnaire/submit", json={"response_id": response_id}, headers=self.couple
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Ankieta została pomyślnie wysłana.")
        self.assertEqual(self._questionnaire()["status"], "submitted")

        self.assertEqual(self.mailer.subjects()[-1], "Para Anna i Piotr wypełniła ankietę!")
        self.assertEqual(self.mailer.sent[-1]["to"], "studio@example.com")

        sent = len(self.mailer.sent)
        self.assertEqual(self._save({str(self.question["id"]): "16:00"}, response_id).status_code, 409)
        again = self.client.post(
            "/api/my-booking/questionnaire/submit", json={"response_id": response_id}, headers=self.couple
        )
        self.assertEqual(again.status_code, 409)
        self.assertEqual(len(self.mailer.sent), sent)
        self.assertEqual(self._questionnaire()["answers"], {str(self.question["id"]): "14:00"})

    def test_submit_without_notification_email_sends_nothing(self):
        sent = len(self.mailer.sent)
        response_id = self._questionnaire()["response_id"]
        response = self.client.post(
            "/api/my-booking/questionnaire/submit", json={"response_id": response_id}, headers=self.couple
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(self.mailer.sent), sent)

    def test_deleting_template_removes_booking_questionnaires(self):
        response = self.client.delete(
            f"/api/admin/questionnaires/{self.template['id']}", headers=self.admin
        )
        self.assertEqual(response.status_code, 204)
        self.assertIsNone(self._questionnaire())
        with self.session() as db:
            self.assertEqual(db.query(QuestionnaireResponse).count(), 0)

    def test_deleting_booking_removes_its_questionnaire(self):
        self._save({str(self.question["id"]): "14:00"})
        response = self.client.delete(
            f"/api/admin/bookings/{self.created['bookingId']}", headers=self.admin
        )
        self.assertEqual(response.status_code, 204)
        with self.session() as db:
            self.assertEqual(db.query(QuestionnaireResponse).count(), 0)
            self.assertEqual(db.query(Answer).count(), 0)


class BookingQuestionnaireAdminTests(QuestionnaireTestCase):
    def setUp(self):
        super().setUp()
        self.booking_id = self.seeded_booking_id()
        self.url = f"/api/admin/bookings/{self.booking_id}/questionnaire"

    def _assign(self, template_id):
        return self.client.post(self.url, json={"template_id": template_id}, headers=self.admin)

    def test_missing_questionnaire_is_404(self):
        response = self.client.get(self.url, headers=self.admin)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Brak ankiety dla tej rezerwacji.")

    def test_assign_and_view_answers(self):
        template = self._create_template("Plener")
        question = self._add_question(template["id"], "Miejsce pleneru?")

        response = self._assign(template["id"])
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["message"], "Ankieta została przypisana.")

        couple = self.client_headers()
        response_id = self.client.get("/api/my-booking/questionnaire", headers=couple).json()["response_id"]
        self.client.patch(
            "/api/my-booking/questionnaire/answers",
            json={"response_id": response_id, "answers": {str(question["id"]): "Tatry"}},
            headers=couple,
        )

        view = self.client.get(self.url, headers=self.admin).json()
        self.assertEqual(view["response"]["id"], response_id)
        self.assertEqual(view["response"]["status"], "pending")
        self.assertEqual(view["template"]["title"], "Plener")
        self.assertEqual([q["id"] for q in view["questions"]], [question["id"]])
        self.assertEqual(view["answers"], {str(question["id"]): "Tatry"})

    def test_reassigning_replaces_answers(self):
        first = self._create_template("Pierwsza")
        question = self._add_question(first["id"], "Pytanie")
        self._assign(first["id"])
        couple = self.client_headers()
        response_id = self.client.get("/api/my-booking/questionnaire", headers=couple).json()["response_id"]
        self.client.patch(
            "/api/my-booking/questionnaire/answers",
            json={"response_id": response_id, "answers": {str(question["id"]): "tak"}},
            headers=couple,
        )

        second = self._create_template("Druga")
        self.assertEqual(self._assign(second["id"]).status_code, 201)

        view = self.client.get(self.url, headers=self.admin).json()
        self.assertEqual(view["template"]["id"], second["id"])
        self.assertEqual(view["answers"], {})
        with self.session() as db:
            self.assertEqual(db.query(QuestionnaireResponse).count(), 1)
            self.assertEqual(db.query(Answer).count(), 0)

    def test_assigning_unknown_template_is_404(self):
        self.assertEqual(self._assign(999).status_code, 404)

    def test_unknown_booking_is_404(self):
        response = self.client.get("/api/admin/bookings/999/questionnaire", headers=self.admin)
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
