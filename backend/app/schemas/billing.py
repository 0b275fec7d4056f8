"""Billing proposal schemas exchanged with the proposal table."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class ProposalLineRead(BaseModel):
    budget_line_id: int
    task_name: str
    actual_hours: Decimal
    billed_hours: Decimal
    unbilled_hours: Decimal
    hours_to_bill: Decimal
    amount_to_bill: Decimal


class BillingProposalRead(BaseModel):
    expense_report_id: int
    project_id: int
    customer_id: Optional[int] = None
    hourly_rate: Decimal
    lines: List[ProposalLineRead]
    subtotal: Decimal


class ProposalOverride(BaseModel):
    budget_line_id: int
    hours_to_bill: Optional[Decimal] = None
    amount_to_bill: Optional[Decimal] = None


class ProposalOverrideRequest(BaseModel):
    overrides: List[ProposalOverride] = []
