"""Questionnaire repository - templates, per-booking responses and answers"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import Answer, QuestionnaireResponse, QuestionnaireTemplate

PENDING = "pending"
SUBMITTED = "submitted"


class QuestionnaireRepository:
    """Repository for questionnaire database operations (callers own the transaction)"""

    @staticmethod
    def list_templates(db: Session) -> list[QuestionnaireTemplate]:
        return (
            db.query(QuestionnaireTemplate)
            .options(selectinload(QuestionnaireTemplate.questions))
            .order_by(QuestionnaireTemplate.id)
            .all()
        )

    @staticmethod
    def default_template(db: Session) -> Optional[QuestionnaireTemplate]:
        return (
            db.query(QuestionnaireTemplate)
            .filter(QuestionnaireTemplate.is_default.is_(True))
            .order_by(QuestionnaireTemplate.id)
            .first()
        )

    @staticmethod
    def clear_default(db: Session, keep_id: Optional[int] = None) -> None:
        """Only one template is the default; unmark every other one"""
        query = db.query(QuestionnaireTemplate).filter(QuestionnaireTemplate.is_default.is_(True))
        if keep_id is not None:
            query = query.filter(QuestionnaireTemplate.id != keep_id)
        for template in query.all():
            template.is_default = False

    # ------------------------------------------------------------------
    # Per-booking responses
    # ------------------------------------------------------------------

    @staticmethod
    def assign_default(db: Session, booking_id: int) -> Optional[QuestionnaireResponse]:
        """Open the default questionnaire for a new booking, if a template is marked default"""
        template = QuestionnaireRepository.default_template(db)
        if template is None:
            return None

        response = QuestionnaireResponse(booking_id=booking_id, template_id=template.id, status=PENDING)
        db.add(response)
        return response

    @staticmethod
    def response_for_booking(db: Session, booking_id: int) -> Optional[QuestionnaireResponse]:
        return (
            db.query(QuestionnaireResponse)
            .options(selectinload(QuestionnaireResponse.template))
            .filter(QuestionnaireResponse.booking_id == booking_id)
            .order_by(QuestionnaireResponse.id.desc())
            .first()
        )

    @staticmethod
    def replace_response(db: Session, booking_id: int, template_id: int) -> QuestionnaireResponse:
        """Drop the booking's questionnaire (answers included) and open a fresh one"""
        existing = (
            db.query(QuestionnaireResponse).filter(QuestionnaireResponse.booking_id == booking_id).all()
        )
        for response in existing:
            db.delete(response)
        db.flush()

        response = QuestionnaireResponse(booking_id=booking_id, template_id=template_id, status=PENDING)
        db.add(response)
        db.flush()
        return response

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    @staticmethod
    def answers_by_question(db: Session, response_id: int) -> dict[int, Optional[str]]:
        rows = db.query(Answer).filter(Answer.response_id == response_id).all()
        return {row.question_id: row.answer_text for row in rows}

    @staticmethod
    def upsert_answer(db: Session, response_id: int, question_id: int, text: Optional[str]) -> None:
        answer = (
            db.query(Answer)
            .filter(Answer.response_id == response_id, Answer.question_id == question_id)
            .first()
        )
        if answer is None:
            db.add(Answer(response_id=response_id, question_id=question_id, answer_text=text))
        else:
            answer.answer_text = text
