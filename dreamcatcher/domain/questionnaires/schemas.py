"""Questionnaire schemas - templates, questions and the couple's answers"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ...schemas import ORMModel, RequestModel

QuestionType = Literal["text", "yes_no", "link"]


class TemplateCreate(RequestModel):
    title: str = Field(min_length=1, max_length=255)
    is_default: bool = False


class TemplateUpdate(RequestModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    is_default: Optional[bool] = None


class QuestionCreate(RequestModel):
    text: str = Field(min_length=1)
    type: QuestionType = "text"
    sort_order: int = 0


class QuestionUpdate(RequestModel):
    text: Optional[str] = Field(default=None, min_length=1)
    type: Optional[QuestionType] = None
    sort_order: Optional[int] = None


class QuestionResponse(ORMModel):
    id: int
    template_id: int
    text: str
    type: str
    sort_order: int


class TemplateSummary(ORMModel):
    id: int
    title: str
    is_default: bool


class TemplateResponse(TemplateSummary):
    questions: list[QuestionResponse] = []


class ResponseView(ORMModel):
    id: int
    booking_id: int
    template_id: int
    status: str
    created_at: Optional[datetime] = None


class ClientQuestionnaire(BaseModel):
    """The couple's questionnaire with their answers keyed by question ID"""

    response_id: int
    status: str
    template: TemplateSummary
    questions: list[QuestionResponse]
    answers: dict[int, Optional[str]]


class AdminQuestionnaire(BaseModel):
    response: ResponseView
    template: TemplateSummary
    questions: list[QuestionResponse]
    answers: dict[int, Optional[str]]


class AnswersUpdate(RequestModel):
    response_id: int
    answers: dict[int, Optional[str]]


class QuestionnaireSubmit(RequestModel):
    response_id: int


class TemplateAssignment(RequestModel):
    template_id: int
