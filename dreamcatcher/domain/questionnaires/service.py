"""
Questionnaire service - admin-built templates and the couple's planning questionnaire

Each booking holds at most one questionnaire response. The couple fills it in
while it is pending; submitting it locks the answers and alerts the studio.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...database import transaction
from ...email_service import send_quietly, studio_sender
from ...email_templates import couple_label, questionnaire_submitted_template
from ...exceptions import ConflictError, NotFoundError, ValidationError
from ...models import Booking, Question, QuestionnaireResponse, QuestionnaireTemplate
from ..settings.repository import SettingsRepository
from .repository import SUBMITTED, QuestionnaireRepository
from .schemas import (
    AdminQuestionnaire,
    AnswersUpdate,
    ClientQuestionnaire,
    QuestionCreate,
    QuestionResponse,
    QuestionUpdate,
    ResponseView,
    TemplateCreate,
    TemplateSummary,
    TemplateUpdate,
)

logger = logging.getLogger(__name__)

TEMPLATE_NOT_FOUND = "Nie znaleziono ankiety."
QUESTION_NOT_FOUND = "Nie znaleziono pytania."
NO_BOOKING_QUESTIONNAIRE = "Brak ankiety dla tej rezerwacji."
ALREADY_SUBMITTED = "Ankieta została już wysłana."


class QuestionnaireService:
    def __init__(self, db: Session, mailer=None):
        self.db = db
        self.mailer = mailer
        self.repo = QuestionnaireRepository()

    # ============================================================================
    # TEMPLATES & QUESTIONS
    # ============================================================================

    def list_templates(self) -> list[QuestionnaireTemplate]:
        return self.repo.list_templates(self.db)

    def _get_template(self, template_id: int) -> QuestionnaireTemplate:
        template = self.db.get(QuestionnaireTemplate, template_id)
        if template is None:
            raise NotFoundError(TEMPLATE_NOT_FOUND)
        return template

    def create_template(self, data: TemplateCreate) -> QuestionnaireTemplate:
        template = QuestionnaireTemplate(**data.model_dump())
        with transaction(self.db, "Błąd tworzenia ankiety."):
            if data.is_default:
                self.repo.clear_default(self.db)
            self.db.add(template)
        self.db.refresh(template)
        logger.info(f"📋 Questionnaire template {template.id} created (default={template.is_default})")
        return template

    def update_template(self, template_id: int, data: TemplateUpdate) -> QuestionnaireTemplate:
        template = self._get_template(template_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        with transaction(self.db, "Błąd aktualizacji ankiety."):
            if updates.get("is_default"):
                self.repo.clear_default(self.db, keep_id=template_id)
            for field, value in updates.items():
                setattr(template, field, value)
        self.db.refresh(template)
        return template

    def delete_template(self, template_id: int) -> None:
        template = self._get_template(template_id)
        # Questions and every response built on the template go with it
        with transaction(self.db, "Błąd usuwania ankiety."):
            self.db.delete(template)
        logger.info(f"🗑️ Questionnaire template {template_id} deleted")

    def add_question(self, template_id: int, data: QuestionCreate) -> Question:
        self._get_template(template_id)
        question = Question(template_id=template_id, **data.model_dump())
        with transaction(self.db, "Błąd dodawania pytania."):
            self.db.add(question)
        self.db.refresh(question)
        return question

    def _get_question(self, question_id: int) -> Question:
        question = self.db.get(Question, question_id)
        if question is None:
            raise NotFoundError(QUESTION_NOT_FOUND)
        return question

    def update_question(self, question_id: int, data: QuestionUpdate) -> Question:
        question = self._get_question(question_id)
        with transaction(self.db, "Błąd aktualizacji pytania."):
            for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(question, field, value)
        self.db.refresh(question)
        return question

    def delete_question(self, question_id: int) -> None:
        question = self._get_question(question_id)
        with transaction(self.db, "Błąd usuwania pytania."):
            self.db.delete(question)

    # ============================================================================
    # PER-BOOKING QUESTIONNAIRE (ADMIN)
    # ============================================================================

    def booking_questionnaire(self, booking: Booking) -> AdminQuestionnaire:
        response = self.repo.response_for_booking(self.db, booking.id)
        if response is None:
            raise NotFoundError(NO_BOOKING_QUESTIONNAIRE)

        return AdminQuestionnaire(
            response=ResponseView.model_validate(response),
            template=TemplateSummary.model_validate(response.template),
            questions=[QuestionResponse.model_validate(q) for q in response.template.questions],
            answers=self.repo.answers_by_question(self.db, response.id),
        )

    def assign_template(self, booking: Booking, template_id: int) -> QuestionnaireResponse:
        """Replace the booking's questionnaire with a fresh, pending one"""
        self._get_template(template_id)
        with transaction(self.db, "Błąd przypisywania ankiety."):
            response = self.repo.replace_response(self.db, booking.id, template_id)
        logger.info(f"📋 Questionnaire template {template_id} assigned to booking {booking.id}")
        return response

    # ============================================================================
    # CLIENT QUESTIONNAIRE
    # ============================================================================

    def client_questionnaire(self, booking: Booking) -> Optional[ClientQuestionnaire]:
        response = self.repo.response_for_booking(self.db, booking.id)
        if response is None:
            return None

        return ClientQuestionnaire(
            response_id=response.id,
            status=response.status,
            template=TemplateSummary.model_validate(response.template),
            questions=[QuestionResponse.model_validate(q) for q in response.template.questions],
            answers=self.repo.answers_by_question(self.db, response.id),
        )

    def _own_response(self, booking: Booking, response_id: int) -> QuestionnaireResponse:
        response = self.db.get(QuestionnaireResponse, response_id)
        if response is None or response.booking_id != booking.id:
            raise NotFoundError(TEMPLATE_NOT_FOUND)
        return response

    def save_answers(self, booking: Booking, data: AnswersUpdate) -> None:
        response = self._own_response(booking, data.response_id)
        if response.status == SUBMITTED:
            raise ConflictError(ALREADY_SUBMITTED)

        question_ids = {q.id for q in response.template.questions}
        unknown = sorted(set(data.answers) - question_ids)
        if unknown:
            raise ValidationError("Pytanie nie należy do tej ankiety.", {"question_ids": unknown})

        with transaction(self.db, "Błąd zapisu odpowiedzi."):
            for question_id, text in data.answers.items():
                self.repo.upsert_answer(self.db, response.id, question_id, text)
        logger.info(f"📝 Booking {booking.id} saved {len(data.answers)} questionnaire answers")

    def submit(self, booking: Booking, response_id: int) -> None:
        response = self._own_response(booking, response_id)
        if response.status == SUBMITTED:
            raise ConflictError(ALREADY_SUBMITTED)

        with transaction(self.db, "Błąd wysyłania ankiety."):
            response.status = SUBMITTED
        logger.info(f"✅ Booking {booking.id} submitted questionnaire {response_id}")

        self._notify_studio(booking)

    def _notify_studio(self, booking: Booking) -> None:
        recipient = SettingsRepository.notification_email(self.db)
        if not recipient or self.mailer is None:
            logger.info("📭 No notification email set, questionnaire alert skipped")
            return

        couple = couple_label(booking.bride_name, booking.groom_name)
        send_quietly(
            self.mailer,
            to=recipient,
            subject=f"Para {couple} wypełniła ankietę!",
            mjml_content=questionnaire_submitted_template(
                booking.bride_name, booking.groom_name, booking.id
            ),
            from_address=studio_sender(self.db),
        )
