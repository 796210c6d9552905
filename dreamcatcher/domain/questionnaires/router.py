"""Questionnaire router - the couple's questionnaire and admin template management"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...email_service import get_mailer
from ...models import Booking
from ...schemas import MessageResponse
from ..bookings.dependencies import get_admin_booking, get_current_booking
from .schemas import (
    AdminQuestionnaire,
    AnswersUpdate,
    ClientQuestionnaire,
    QuestionCreate,
    QuestionnaireSubmit,
    QuestionResponse,
    QuestionUpdate,
    TemplateAssignment,
    TemplateCreate,
    TemplateResponse,
    TemplateUpdate,
)
from .service import QuestionnaireService

router = APIRouter(prefix="/my-booking/questionnaire", tags=["Questionnaire"])
admin_router = APIRouter(
    prefix="/admin", tags=["Admin Questionnaires"], dependencies=[Depends(get_current_admin)]
)


def get_questionnaire_service(
    db: Session = Depends(get_db), mailer=Depends(get_mailer)
) -> QuestionnaireService:
    return QuestionnaireService(db, mailer)


# ============================================================================
# CLIENT QUESTIONNAIRE
# ============================================================================


@router.get("", response_model=Optional[ClientQuestionnaire])
async def get_questionnaire(
    booking: Booking = Depends(get_current_booking),
    service: QuestionnaireService = Depends(get_questionnaire_service),
):
    return service.client_questionnaire(booking)


@router.patch("/answers", response_model=MessageResponse)
async def save_answers(
    data: AnswersUpdate,
    booking: Booking = Depends(get_current_booking),
    service: QuestionnaireService = Depends(get_questionnaire_service),
):
    service.save_answers(booking, data)
    return MessageResponse(message="Zapisano odpowiedzi.")


@router.post("/submit", response_model=MessageResponse)
async def submit_questionnaire(
    data: QuestionnaireSubmit,
    booking: Booking = Depends(get_current_booking),
    service: QuestionnaireService = Depends(get_questionnaire_service),
):
    service.submit(booking, data.response_id)
    return MessageResponse(message="Ankieta została pomyślnie wysłana.")


# ============================================================================
# ADMIN TEMPLATES & QUESTIONS
# ============================================================================


@admin_router.get("/questionnaires", response_model=list[TemplateResponse])
async def list_templates(service: QuestionnaireService = Depends(get_questionnaire_service)):
    return service.list_templates()


@admin_router.post(
    "/questionnaires", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED
)
async def create_template(
    data: TemplateCreate, service: QuestionnaireService = Depends(get_questionnaire_service)
):
    return service.create_template(data)


@admin_router.patch("/questionnaires/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: int,
    data: TemplateUpdate,
    service: QuestionnaireService = Depends(get_questionnaire_service),
):
    return service.update_template(template_id, data)


@admin_router.delete("/questionnaires/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: int, service: QuestionnaireService = Depends(get_questionnaire_service)
):
    service.delete_template(template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.post(
    "/questionnaires/{template_id}/questions",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_question(
    template_id: int,
    data: QuestionCreate,
    service: QuestionnaireService = Depends(get_questionnaire_service),
):
    return service.add_question(template_id, data)


@admin_router.patch("/questions/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: int,
    data: QuestionUpdate,
    service: QuestionnaireService = Depends(get_questionnaire_service),
):
    return service.update_question(question_id, data)


@admin_router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: int, service: QuestionnaireService = Depends(get_questionnaire_service)
):
    service.delete_question(question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# PER-BOOKING QUESTIONNAIRE
# ============================================================================


@admin_router.get("/bookings/{booking_id}/questionnaire", response_model=AdminQuestionnaire)
async def get_booking_questionnaire(
    booking: Booking = Depends(get_admin_booking),
    service: QuestionnaireService = Depends(get_questionnaire_service),
):
    return service.booking_questionnaire(booking)


@admin_router.post(
    "/bookings/{booking_id}/questionnaire",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_questionnaire(
    data: TemplateAssignment,
    booking: Booking = Depends(get_admin_booking),
    service: QuestionnaireService = Depends(get_questionnaire_service),
):
    service.assign_template(booking, data.template_id)
    return MessageResponse(message="Ankieta została przypisana.")
