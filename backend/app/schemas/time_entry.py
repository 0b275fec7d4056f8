"""Time entry schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TimeEntryBase(BaseModel):
    project_id: int
    date: date
    hours: Decimal = Field(gt=0, le=24)
    task_name: Optional[str] = None
    memo: Optional[str] = None
    image_url: Optional[str] = None


class TimeEntryCreate(TimeEntryBase):
    pass


class TimeEntryUpdate(BaseModel):
    project_id: Optional[int] = None
    date: Optional[date] = None
    hours: Optional[Decimal] = Field(default=None, gt=0, le=24)
    task_name: Optional[str] = None
    memo: Optional[str] = None
    image_url: Optional[str] = None


class TimeEntryStatusUpdate(BaseModel):
    status: Literal["Pending", "Approved"]


class TimeEntryRead(TimeEntryBase):
    id: int
    employee_id: int
    status: str
    budget_line_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TimeEntryPage(BaseModel):
    data: List[TimeEntryRead]
    total_count: int
