"""Inbox router - contact form and the admin inbox/notifications"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...email_service import get_mailer
from ...schemas import CountResponse, MessageResponse
from .schemas import ContactFormRequest, InboxMessage, Notification
from .service import InboxService

router = APIRouter(tags=["Contact"])
admin_router = APIRouter(
    prefix="/admin", tags=["Admin Inbox"], dependencies=[Depends(get_current_admin)]
)


def get_inbox_service(db: Session = Depends(get_db), mailer=Depends(get_mailer)) -> InboxService:
    return InboxService(db, mailer)


@router.post("/contact", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact_form(
    data: ContactFormRequest, service: InboxService = Depends(get_inbox_service)
):
    service.submit_contact_form(data)
    return MessageResponse(message="Wiadomość została wysłana.")


@admin_router.get("/inbox", response_model=list[InboxMessage])
async def list_inbox(service: InboxService = Depends(get_inbox_service)):
    return service.list_inbox()


@admin_router.patch("/inbox/{message_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_inbox_read(message_id: int, service: InboxService = Depends(get_inbox_service)):
    service.mark_read(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.delete("/inbox/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inbox_message(message_id: int, service: InboxService = Depends(get_inbox_service)):
    service.delete(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.get(
    "/notifications", response_model=list[Notification], response_model_exclude_none=True
)
async def list_notifications(service: InboxService = Depends(get_inbox_service)):
    return service.notifications()


@admin_router.get("/notifications/count", response_model=CountResponse)
async def notification_count(service: InboxService = Depends(get_inbox_service)):
    return CountResponse(count=service.notification_count())
