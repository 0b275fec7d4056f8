"""Expense report endpoints: budget vs actuals, assignment and billing proposals."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.api.results import to_http_error, unwrap
from backend.app.core.settings import get_billing_config
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_manager
from backend.app.models.employee import Employee
from backend.app.schemas.billing import BillingProposalRead, ProposalOverrideRequest
from backend.app.schemas.expense_report import ExpenseReportDetail, TimeEntryAssignment
from backend.app.services.billing import build_billing_proposal
from backend.app.services.billing_actions import assign_time_entry_action, get_expense_report_action
from backend.app.services.errors import BillingError

router = APIRouter(prefix="/expense-reports", tags=["expense-reports"])


@router.get("/{report_id}", response_model=ExpenseReportDetail)
async def get_expense_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    return unwrap(get_expense_report_action(db, report_id))


@router.post("/assignments")
async def assign_time_entry(
    payload: TimeEntryAssignment,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    return unwrap(assign_time_entry_action(db, payload.time_entry_id, payload.budget_line_id))


@router.get("/{report_id}/billing-proposal", response_model=BillingProposalRead)
async def get_billing_proposal(
    report_id: int,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    detail = unwrap(get_expense_report_action(db, report_id))
    return build_billing_proposal(detail, get_billing_config()).to_read()


@router.post("/{report_id}/billing-proposal", response_model=BillingProposalRead)
async def apply_billing_overrides(
    report_id: int,
    payload: ProposalOverrideRequest,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    detail = unwrap(get_expense_report_action(db, report_id))
    proposal = build_billing_proposal(detail, get_billing_config())
    try:
        proposal.apply_overrides(payload.overrides)
    except BillingError as exc:
        raise to_http_error(exc)
    return proposal.to_read()
