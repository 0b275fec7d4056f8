"""Estimate schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EstimateItemBase(BaseModel):
    category: Optional[str] = None
    subcategory: Optional[str] = None
    labor_cost: Decimal = Field(default=Decimal("0.00"), ge=0)
    material_cost: Decimal = Field(default=Decimal("0.00"), ge=0)


class EstimateItemRead(EstimateItemBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class EstimateCreate(BaseModel):
    name: str
    project_id: Optional[int] = None
    items: List[EstimateItemBase] = []


class EstimateUpdate(BaseModel):
    name: Optional[str] = None
    project_id: Optional[int] = None
    # When given, replaces every existing item.
    items: Optional[List[EstimateItemBase]] = None


class EstimateRead(BaseModel):
    id: int
    project_id: Optional[int]
    name: str
    status: str
    created_at: datetime
    labor_total: Decimal
    material_total: Decimal
    total: Decimal
    items: List[EstimateItemRead] = []

    model_config = ConfigDict(from_attributes=True)


class EstimateApprovalRead(BaseModel):
    estimate_id: int
    expense_report_id: int


class EstimatePage(BaseModel):
    data: List[EstimateRead]
    total_count: int
    total_pages: int
