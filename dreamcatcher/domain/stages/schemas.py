"""Production stage schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ...schemas import ORMModel, RequestModel

StageStatus = Literal["pending", "in_progress", "awaiting_approval", "completed"]


class ProductionStageCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class ProductionStageResponse(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class BookingStageAssign(RequestModel):
    stage_id: int


class BookingStageStatusUpdate(RequestModel):
    status: StageStatus


class ClientStageView(BaseModel):
    """A stage of the couple's project as shown in the client portal"""

    id: int
    name: str
    description: Optional[str] = None
    status: str
    completed_at: Optional[datetime] = None


class AdminStageView(BaseModel):
    id: int
    name: str
    status: str
