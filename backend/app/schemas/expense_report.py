"""Expense report schemas: the budget header plus aggregated lines."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ExpenseReportHeader(BaseModel):
    id: int
    project_id: int
    project_name: Optional[str] = None
    customer_id: Optional[int] = None
    estimate_id: Optional[int] = None
    name: str
    status: str


class BudgetLineSummary(BaseModel):
    id: int
    task_name: str
    estimated_labor_cost: Decimal
    estimated_material_cost: Decimal
    actual_hours: Decimal
    assigned_entries_count: int
    billed_hours: Decimal
    billed_amount: Decimal


class ExpenseReportDetail(BaseModel):
    report: ExpenseReportHeader
    lines: List[BudgetLineSummary]


class PendingTimeEntry(BaseModel):
    id: int
    employee_id: int
    employee_name: str
    project_id: int
    date: date
    hours: Decimal
    task_name: Optional[str] = None
    memo: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TimeEntryAssignment(BaseModel):
    time_entry_id: int
    budget_line_id: int
