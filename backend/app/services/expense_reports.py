"""Budget-vs-actuals aggregation over expense reports and time entries."""

from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.models.employee import Employee
from backend.app.models.expense_report import BudgetLine, ExpenseReport
from backend.app.models.invoice_line import InvoiceLine
from backend.app.models.project import Project
from backend.app.models.time_entry import TIME_ENTRY_STATUS_APPROVED, TIME_ENTRY_STATUS_PENDING, TimeEntry
from backend.app.schemas.expense_report import (
    BudgetLineSummary,
    ExpenseReportDetail,
    ExpenseReportHeader,
    PendingTimeEntry,
)
from backend.app.services.errors import BillingValidationError, NotFoundError
from backend.app.services.money import to_cents

logger = get_logger(__name__)


def _actual_hours_by_line(db: Session, line_ids: List[int]) -> Dict[int, Tuple[Decimal, int]]:
    """Sum linked time entry hours per line, whatever the entry status."""
    if not line_ids:
        return {}
    rows = (
        db.query(
            TimeEntry.budget_line_id,
            func.coalesce(func.sum(TimeEntry.hours), 0),
            func.count(TimeEntry.id),
        )
        .filter(TimeEntry.budget_line_id.in_(line_ids))
        .group_by(TimeEntry.budget_line_id)
        .all()
    )
    return {line_id: (to_cents(hours), int(count)) for line_id, hours, count in rows}


def _billed_by_line(db: Session, line_ids: List[int]) -> Dict[int, Tuple[Decimal, Decimal]]:
    if not line_ids:
        return {}
    rows = (
        db.query(
            InvoiceLine.budget_line_id,
            func.coalesce(func.sum(InvoiceLine.billed_hours), 0),
            func.coalesce(func.sum(InvoiceLine.billed_labor_amount), 0),
        )
        .filter(InvoiceLine.budget_line_id.in_(line_ids))
        .group_by(InvoiceLine.budget_line_id)
        .all()
    )
    return {line_id: (to_cents(hours), to_cents(amount)) for line_id, hours, amount in rows}


def get_expense_report(db: Session, report_id: int) -> ExpenseReportDetail:
    """Return the report header and its lines annotated with actual and billed figures."""
    report = db.query(ExpenseReport).filter(ExpenseReport.id == report_id).first()
    if not report:
        raise NotFoundError("Expense report not found")

    project = db.query(Project).filter(Project.id == report.project_id).first()
    header = ExpenseReportHeader(
        id=report.id,
        project_id=report.project_id,
        project_name=project.name if project else None,
        customer_id=project.customer_id if project else None,
        estimate_id=report.estimate_id,
        name=report.name,
        status=report.status,
    )

    lines = (
        db.query(BudgetLine)
        .filter(BudgetLine.expense_report_id == report_id)
        .order_by(BudgetLine.created_at.asc(), BudgetLine.id.asc())
        .all()
    )
    line_ids = [line.id for line in lines]
    actuals = _actual_hours_by_line(db, line_ids)
    billed = _billed_by_line(db, line_ids)

    summaries = []
    for line in lines:
        actual_hours, entry_count = actuals.get(line.id, (Decimal("0.00"), 0))
        billed_hours, billed_amount = billed.get(line.id, (Decimal("0.00"), Decimal("0.00")))
        summaries.append(
            BudgetLineSummary(
                id=line.id,
                task_name=line.task_name,
                estimated_labor_cost=to_cents(line.estimated_labor_cost),
                estimated_material_cost=to_cents(line.estimated_material_cost),
                actual_hours=actual_hours,
                assigned_entries_count=entry_count,
                billed_hours=billed_hours,
                billed_amount=billed_amount,
            )
        )
    return ExpenseReportDetail(report=header, lines=summaries)


def get_pending_time_entries(db: Session, project_id: int) -> List[PendingTimeEntry]:
    """Return pending entries of a project not yet assigned to a budget line, oldest first."""
    rows = (
        db.query(TimeEntry, Employee)
        .join(Employee, TimeEntry.employee_id == Employee.id)
        .filter(
            TimeEntry.project_id == project_id,
            TimeEntry.budget_line_id.is_(None),
            TimeEntry.status == TIME_ENTRY_STATUS_PENDING,
        )
        .order_by(TimeEntry.date.asc(), TimeEntry.id.asc())
        .all()
    )
    return [
        PendingTimeEntry(
            id=entry.id,
            employee_id=entry.employee_id,
            employee_name=employee.display_name,
            project_id=entry.project_id,
            date=entry.date,
            hours=to_cents(entry.hours),
            task_name=entry.task_name,
            memo=entry.memo,
        )
        for entry, employee in rows
    ]


def assign_time_entry_to_budget_line(db: Session, time_entry_id: int, budget_line_id: int) -> TimeEntry:
    """Link a time entry to a budget line and approve it in a single write."""
    entry = db.query(TimeEntry).filter(TimeEntry.id == time_entry_id).first()
    if not entry:
        raise NotFoundError("Time entry not found")
    line = db.query(BudgetLine).filter(BudgetLine.id == budget_line_id).first()
    if not line:
        raise NotFoundError("Budget line not found")
    if line.expense_report.project_id != entry.project_id:
        raise BillingValidationError("Budget line belongs to another project")

    previous_line_id = entry.budget_line_id
    entry.budget_line_id = line.id
    entry.status = TIME_ENTRY_STATUS_APPROVED
    db.commit()
    db.refresh(entry)
    logger.info(
        "time_entry_assigned",
        time_entry_id=entry.id,
        budget_line_id=line.id,
        previous_budget_line_id=previous_line_id,
    )
    return entry
