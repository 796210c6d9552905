"""Client/admin conversation schemas"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ...schemas import ORMModel, RequestModel


class ClientMessageCreate(RequestModel):
    content: str = Field(min_length=1)


class AdminMessageCreate(RequestModel):
    content: Optional[str] = None
    attachment_url: Optional[str] = None
    attachment_type: Optional[str] = None


class MessageView(ORMModel):
    id: int
    booking_id: int
    sender: str
    content: Optional[str] = None
    attachment_url: Optional[str] = None
    attachment_type: Optional[str] = None
    is_read_by_admin: bool
    is_read_by_client: bool
    created_at: Optional[datetime] = None
