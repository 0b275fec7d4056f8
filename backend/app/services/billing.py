"""Billing proposal: unbilled hours per budget line priced at the default rate."""

from decimal import Decimal
from typing import Dict, Iterable, List

from backend.app.core.settings import BillingConfig
from backend.app.schemas.billing import BillingProposalRead, ProposalLineRead, ProposalOverride
from backend.app.schemas.expense_report import BudgetLineSummary, ExpenseReportDetail
from backend.app.schemas.invoice import InvoiceItemIn
from backend.app.services.errors import BillingValidationError, NotFoundError
from backend.app.services.money import to_cents


def calculate_unbilled_hours(actual_hours: Decimal, billed_hours: Decimal) -> Decimal:
    unbilled = Decimal(str(actual_hours or 0)) - Decimal(str(billed_hours or 0))
    if unbilled < 0:
        return Decimal("0.00")
    return to_cents(unbilled)


def price_hours(hours: Decimal, rate: Decimal) -> Decimal:
    return to_cents(Decimal(str(hours)) * Decimal(str(rate)))


class ProposalLine:
    def __init__(self, line: BudgetLineSummary, rate: Decimal):
        self.budget_line_id = line.id
        self.task_name = line.task_name
        self.actual_hours = line.actual_hours
        self.billed_hours = line.billed_hours
        self.unbilled_hours = calculate_unbilled_hours(line.actual_hours, line.billed_hours)
        self.rate = rate
        self.hours_to_bill = self.unbilled_hours
        self.amount_to_bill = price_hours(self.hours_to_bill, rate)

    def set_hours(self, hours: Decimal) -> None:
        """Edit the hours and reprice them at the proposal rate."""
        hours = Decimal(str(hours))
        if hours < 0:
            raise BillingValidationError("Hours to bill cannot be negative")
        self.hours_to_bill = to_cents(hours)
        self.amount_to_bill = price_hours(self.hours_to_bill, self.rate)

    def set_amount(self, amount: Decimal) -> None:
        # Hours are left as they are; the amount is an independent figure.
        amount = Decimal(str(amount))
        if amount < 0:
            raise BillingValidationError("Amount to bill cannot be negative")
        self.amount_to_bill = to_cents(amount)

    def to_read(self) -> ProposalLineRead:
        return ProposalLineRead(
            budget_line_id=self.budget_line_id,
            task_name=self.task_name,
            actual_hours=self.actual_hours,
            billed_hours=self.billed_hours,
            unbilled_hours=self.unbilled_hours,
            hours_to_bill=self.hours_to_bill,
            amount_to_bill=self.amount_to_bill,
        )


class BillingProposal:
    """In-memory proposal the operator edits before committing an invoice."""

    def __init__(self, detail: ExpenseReportDetail, config: BillingConfig):
        self.report = detail.report
        self.rate = config.default_hourly_rate
        self.lines: Dict[int, ProposalLine] = {
            line.id: ProposalLine(line, self.rate) for line in detail.lines
        }

    def _line(self, budget_line_id: int) -> ProposalLine:
        line = self.lines.get(budget_line_id)
        if line is None:
            raise NotFoundError(f"Budget line {budget_line_id} is not part of this expense report")
        return line

    def set_hours(self, budget_line_id: int, hours: Decimal) -> None:
        self._line(budget_line_id).set_hours(hours)

    def set_amount(self, budget_line_id: int, amount: Decimal) -> None:
        self._line(budget_line_id).set_amount(amount)

    def apply_overrides(self, overrides: Iterable[ProposalOverride]) -> None:
        # Hours first, so a typed amount on the same line wins over the repriced one.
        for override in overrides:
            if override.hours_to_bill is not None:
                self.set_hours(override.budget_line_id, override.hours_to_bill)
            if override.amount_to_bill is not None:
                self.set_amount(override.budget_line_id, override.amount_to_bill)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.amount_to_bill for line in self.lines.values()), Decimal("0.00"))

    def invoice_items(self) -> List[InvoiceItemIn]:
        """Lines with a positive amount, shaped for the invoice generator."""
        return [
            InvoiceItemIn(
                budget_line_id=line.budget_line_id,
                description=line.task_name,
                billed_hours=line.hours_to_bill,
                billed_labor_amount=line.amount_to_bill,
            )
            for line in self.lines.values()
            if line.amount_to_bill > 0
        ]

    def to_read(self) -> BillingProposalRead:
        return BillingProposalRead(
            expense_report_id=self.report.id,
            project_id=self.report.project_id,
            customer_id=self.report.customer_id,
            hourly_rate=self.rate,
            lines=[line.to_read() for line in self.lines.values()],
            subtotal=self.subtotal,
        )


def build_billing_proposal(detail: ExpenseReportDetail, config: BillingConfig) -> BillingProposal:
    return BillingProposal(detail, config)
