"""Invoice routes: generation, listing and status changes."""

from datetime import date

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from backend.app.api.results import to_http_error, unwrap
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_employee, get_current_manager
from backend.app.models.employee import Employee
from backend.app.schemas.invoice import (
    InvoiceDetail,
    InvoiceGenerated,
    InvoiceGenerateRequest,
    InvoicePage,
    InvoiceStatusUpdate,
    OverdueSweepResult,
)
from backend.app.services.billing_actions import generate_invoice_action, update_invoice_status_action
from backend.app.services.errors import BillingError
from backend.app.services.invoices import get_invoice, list_invoices, mark_overdue_invoices

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("/", response_model=InvoicePage)
async def get_invoices(
    q: str = "",
    page: int = 1,
    limit: int = 50,
    db: Session = Depends(get_db),
    current_employee: Employee = Depends(get_current_employee),
):
    rows, total = list_invoices(db, query=q, page=page, limit=limit)
    return InvoicePage(data=rows, total_count=total)


@router.post("/generate", response_model=InvoiceGenerated, status_code=status.HTTP_201_CREATED)
async def generate_invoice(
    payload: InvoiceGenerateRequest,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    return unwrap(generate_invoice_action(db, payload))


@router.post("/overdue-sweep", response_model=OverdueSweepResult)
async def sweep_overdue_invoices(
    as_of: date | None = None,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    return OverdueSweepResult(updated_invoice_ids=mark_overdue_invoices(db, as_of=as_of))


@router.get("/{invoice_id}", response_model=InvoiceDetail)
async def get_invoice_detail(
    invoice_id: int,
    db: Session = Depends(get_db),
    current_employee: Employee = Depends(get_current_employee),
):
    try:
        return get_invoice(db, invoice_id)
    except BillingError as exc:
        raise to_http_error(exc)


@router.put("/{invoice_id}/status")
async def update_invoice_status(
    invoice_id: int,
    payload: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
    current_employee: Employee = Depends(get_current_employee),
):
    return unwrap(update_invoice_status_action(db, invoice_id, payload.status, current_employee))
