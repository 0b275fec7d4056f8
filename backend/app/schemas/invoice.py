"""Invoice schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class InvoiceItemIn(BaseModel):
    budget_line_id: int
    description: Optional[str] = None
    billed_hours: Decimal = Decimal("0")
    billed_labor_amount: Decimal = Decimal("0")


class InvoiceGenerateRequest(BaseModel):
    project_id: int
    expense_report_id: int
    customer_id: int
    items: List[InvoiceItemIn]
    subtotal: Optional[Decimal] = None
    idempotency_key: Optional[str] = Field(default=None, max_length=100)


class InvoiceGenerated(BaseModel):
    invoice_id: int
    invoice_number: str
    replayed: bool = False


class InvoiceStatusUpdate(BaseModel):
    status: Literal["Draft", "Sent", "Paid", "Overdue"]


class InvoiceLineRead(BaseModel):
    id: int
    budget_line_id: Optional[int]
    description: Optional[str]
    billed_hours: Decimal
    billed_labor_amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    expense_report_id: int
    customer_id: int
    invoice_number: str

    issue_date: date
    due_date: date
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    status: str

    created_at: datetime
    updated_at: datetime


class InvoiceDetail(InvoiceRead):
    lines: List[InvoiceLineRead] = []


class InvoicePage(BaseModel):
    data: List[InvoiceRead]
    total_count: int


class OverdueSweepResult(BaseModel):
    updated_invoice_ids: List[int]
