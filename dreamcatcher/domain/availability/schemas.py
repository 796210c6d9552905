"""Availability (calendar) schemas"""

from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from ...schemas import ORMModel, RequestModel


class EventCreate(RequestModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    is_all_day: bool = False


class EventUpdate(RequestModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    is_all_day: Optional[bool] = None


class EventResponse(ORMModel):
    id: int
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    is_all_day: bool
    created_at: Optional[datetime] = None


class CalendarEntry(BaseModel):
    """One calendar entry: an admin event or a read-only wedding-day projection"""

    id: Union[int, str]
    title: str
    description: Optional[str] = None
    start_time: Union[datetime, date]
    end_time: Union[datetime, date]
    is_all_day: bool
    start: Union[datetime, date]
    end: Union[datetime, date]
    allDay: bool
    resource: dict[str, Any]
