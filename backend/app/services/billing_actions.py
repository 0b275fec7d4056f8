"""Public billing operations.

Each operation returns an ActionResult and never raises: domain errors keep
their code, database failures are logged here and reported as ``database``, anything
else unexpected as ``internal``.
"""

from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.core.settings import BillingConfig, get_billing_config
from backend.app.models.employee import Employee
from backend.app.schemas.invoice import InvoiceGenerateRequest
from backend.app.schemas.result import ActionResult
from backend.app.services import expense_reports, invoices
from backend.app.services.errors import BillingError

logger = get_logger(__name__)


def _run(db: Session, operation: str, func: Callable[[], object]) -> ActionResult:
    try:
        return ActionResult.ok(func())
    except BillingError as exc:
        logger.info("billing_action_rejected", operation=operation, error=exc.message, error_code=exc.error_code)
        return ActionResult.fail(exc.message, exc.error_code)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("billing_action_failed", operation=operation, error=str(exc), exc_info=True)
        return ActionResult.fail(str(exc), "database")
    except Exception as exc:
        db.rollback()
        logger.error("billing_action_crashed", operation=operation, error=str(exc), exc_info=True)
        return ActionResult.fail(str(exc), "internal")


def get_expense_report_action(db: Session, report_id: int) -> ActionResult:
    return _run(db, "get_expense_report", lambda: expense_reports.get_expense_report(db, report_id))


def get_pending_time_entries_action(db: Session, project_id: int) -> ActionResult:
    return _run(db, "get_pending_time_entries", lambda: expense_reports.get_pending_time_entries(db, project_id))


def assign_time_entry_action(db: Session, time_entry_id: int, budget_line_id: int) -> ActionResult:
    def assign():
        entry = expense_reports.assign_time_entry_to_budget_line(db, time_entry_id, budget_line_id)
        return {"time_entry_id": entry.id, "budget_line_id": entry.budget_line_id, "status": entry.status}

    return _run(db, "assign_time_entry", assign)


def generate_invoice_action(
    db: Session,
    payload: InvoiceGenerateRequest,
    config: BillingConfig | None = None,
) -> ActionResult:
    billing_config = config or get_billing_config()
    return _run(db, "generate_invoice", lambda: invoices.generate_invoice(db, payload, billing_config))


def update_invoice_status_action(db: Session, invoice_id: int, new_status: str, acting_employee: Employee) -> ActionResult:
    def update():
        invoice = invoices.update_invoice_status(db, invoice_id, new_status, acting_employee)
        return {"invoice_id": invoice.id, "status": invoice.status}

    return _run(db, "update_invoice_status", update)
