"""Progress invoice generation, status changes and listing."""

from datetime import date, timedelta
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.core.settings import BillingConfig
from backend.app.core.time import utc_today
from backend.app.db.session import transaction
from backend.app.models.audit_log import AuditLog
from backend.app.models.customer import Customer
from backend.app.models.employee import Employee
from backend.app.models.expense_report import BudgetLine, ExpenseReport
from backend.app.models.invoice import (
    INVOICE_STATUS_DRAFT,
    INVOICE_STATUS_OVERDUE,
    INVOICE_STATUS_PAID,
    INVOICE_STATUS_SENT,
    INVOICE_STATUSES,
    Invoice,
)
from backend.app.models.invoice_line import InvoiceLine
from backend.app.models.invoice_sequence import InvoiceNumberSequence
from backend.app.models.project import Project
from backend.app.schemas.invoice import InvoiceGenerated, InvoiceGenerateRequest, InvoiceItemIn
from backend.app.services.errors import (
    BillingValidationError,
    InvalidStatusTransitionError,
    NotFoundError,
    PermissionDeniedError,
)
from backend.app.services.money import to_cents

logger = get_logger(__name__)

INVOICE_SEQUENCE_NAME = "invoices"

ALLOWED_TRANSITIONS = {
    INVOICE_STATUS_DRAFT: {INVOICE_STATUS_SENT},
    INVOICE_STATUS_SENT: {INVOICE_STATUS_PAID, INVOICE_STATUS_OVERDUE},
    INVOICE_STATUS_OVERDUE: {INVOICE_STATUS_PAID},
    INVOICE_STATUS_PAID: set(),
}


def calculate_invoice_totals(subtotal: Decimal, tax_rate: Decimal) -> Tuple[Decimal, Decimal]:
    """Return (tax_amount, total_amount) for a subtotal, rounded half-up to cents."""
    subtotal = to_cents(subtotal)
    tax_amount = to_cents(subtotal * Decimal(str(tax_rate)))
    return tax_amount, subtotal + tax_amount


def billable_items(items: List[InvoiceItemIn]) -> List[InvoiceItemIn]:
    """Items whose amount is still positive once rounded to cents."""
    return [item for item in items if to_cents(item.billed_labor_amount) > 0]


def next_invoice_number(db: Session, prefix: str) -> str:
    """Advance the invoice counter inside the caller's transaction."""
    sequence = (
        db.query(InvoiceNumberSequence)
        .filter(InvoiceNumberSequence.name == INVOICE_SEQUENCE_NAME)
        .with_for_update()
        .first()
    )
    if sequence is None:
        sequence = InvoiceNumberSequence(name=INVOICE_SEQUENCE_NAME, next_value=1)
        db.add(sequence)
        db.flush()
    value = sequence.next_value
    sequence.next_value = value + 1
    return f"{prefix}{value:06d}"


def _validate_references(db: Session, payload: InvoiceGenerateRequest, items: List[InvoiceItemIn]) -> Customer:
    report = db.query(ExpenseReport).filter(ExpenseReport.id == payload.expense_report_id).first()
    if not report:
        raise BillingValidationError("Expense report not found")
    if report.project_id != payload.project_id:
        raise BillingValidationError("Expense report does not belong to this project")
    if not db.query(Project).filter(Project.id == payload.project_id).first():
        raise BillingValidationError("Project not found")
    customer = db.query(Customer).filter(Customer.id == payload.customer_id).first()
    if not customer:
        raise BillingValidationError("Customer not found")

    line_ids = {
        line_id
        for (line_id,) in db.query(BudgetLine.id).filter(BudgetLine.expense_report_id == report.id).all()
    }
    for item in items:
        if item.budget_line_id not in line_ids:
            raise BillingValidationError(f"Budget line {item.budget_line_id} is not part of this expense report")
    return customer


def generate_invoice(
    db: Session,
    payload: InvoiceGenerateRequest,
    config: BillingConfig,
    issue_date: date | None = None,
) -> InvoiceGenerated:
    """Create a Draft invoice header and its lines in one transaction.

    Zero-amount items are dropped first; if nothing is left the request is
    rejected before any write. The header keeps the caller's subtotal as given,
    falling back to the sum of the items only when none was sent.
    """
    items = billable_items(payload.items)
    if not items:
        raise BillingValidationError("Please enter billable amounts for at least one line.")

    if payload.idempotency_key:
        existing = db.query(Invoice).filter(Invoice.idempotency_key == payload.idempotency_key).first()
        if existing:
            logger.info("invoice_generation_replayed", invoice_id=existing.id, idempotency_key=payload.idempotency_key)
            return InvoiceGenerated(invoice_id=existing.id, invoice_number=existing.invoice_number, replayed=True)

    customer = _validate_references(db, payload, items)

    subtotal = payload.subtotal
    if subtotal is None:
        subtotal = sum((to_cents(item.billed_labor_amount) for item in items), Decimal("0.00"))
    subtotal = to_cents(subtotal)
    tax_rate = config.tax_rate_for(customer.jurisdiction)
    tax_amount, total_amount = calculate_invoice_totals(subtotal, tax_rate)
    issued = issue_date or utc_today()

    with transaction(db):
        invoice = Invoice(
            project_id=payload.project_id,
            expense_report_id=payload.expense_report_id,
            customer_id=payload.customer_id,
            invoice_number=next_invoice_number(db, config.invoice_number_prefix),
            idempotency_key=payload.idempotency_key,
            issue_date=issued,
            due_date=issued + timedelta(days=config.payment_terms_days),
            subtotal=subtotal,
            tax_rate=tax_rate,
            tax_amount=tax_amount,
            total_amount=total_amount,
            status=INVOICE_STATUS_DRAFT,
        )
        db.add(invoice)
        db.flush()  # obtain invoice id for invoice lines
        db.add_all(_build_invoice_lines(invoice.id, items))

    logger.info(
        "invoice_generated",
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        expense_report_id=payload.expense_report_id,
        line_count=len(items),
        subtotal=str(subtotal),
        total_amount=str(total_amount),
    )
    return InvoiceGenerated(invoice_id=invoice.id, invoice_number=invoice.invoice_number)


def _build_invoice_lines(invoice_id: int, items: List[InvoiceItemIn]) -> List[InvoiceLine]:
    return [
        InvoiceLine(
            invoice_id=invoice_id,
            budget_line_id=item.budget_line_id,
            description=item.description,
            billed_hours=to_cents(item.billed_hours),
            billed_labor_amount=to_cents(item.billed_labor_amount),
        )
        for item in items
    ]


def update_invoice_status(db: Session, invoice_id: int, new_status: str, acting_employee: Employee) -> Invoice:
    if acting_employee is None or not acting_employee.can_manage:
        raise PermissionDeniedError("Unauthorized")
    if new_status not in INVOICE_STATUSES:
        raise BillingValidationError(f"Unknown invoice status: {new_status}")

    invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
    if not invoice:
        raise NotFoundError("Invoice not found")
    current = invoice.status
    if new_status not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidStatusTransitionError(current, new_status)

    with transaction(db):
        invoice.status = new_status
        db.add(
            AuditLog(
                acting_employee_id=acting_employee.id,
                entity_type="invoice",
                entity_id=invoice.id,
                action="status_change",
                detail=f"{current} -> {new_status}",
            )
        )
    db.refresh(invoice)
    logger.info("invoice_status_changed", invoice_id=invoice.id, from_status=current, to_status=new_status, acting_employee_id=acting_employee.id)
    return invoice


def mark_overdue_invoices(db: Session, as_of: date | None = None) -> List[int]:
    """Move Sent invoices past their due date to Overdue."""
    check_date = as_of or utc_today()
    invoices = (
        db.query(Invoice)
        .filter(Invoice.status == INVOICE_STATUS_SENT, Invoice.due_date < check_date)
        .order_by(Invoice.id.asc())
        .all()
    )
    if not invoices:
        return []

    with transaction(db):
        for invoice in invoices:
            invoice.status = INVOICE_STATUS_OVERDUE
            db.add(
                AuditLog(
                    acting_employee_id=None,
                    entity_type="invoice",
                    entity_id=invoice.id,
                    action="status_change",
                    detail=f"{INVOICE_STATUS_SENT} -> {INVOICE_STATUS_OVERDUE}",
                )
            )
    updated = [invoice.id for invoice in invoices]
    logger.info("overdue_invoices_marked", as_of=check_date.isoformat(), count=len(updated))
    return updated


def list_invoices(db: Session, query: str = "", page: int = 1, limit: int = 50) -> Tuple[List[Invoice], int]:
    """Search by invoice number, project name or customer name; newest first."""
    limit = max(1, limit)
    page = max(1, page)
    q = (
        db.query(Invoice)
        .outerjoin(Project, Invoice.project_id == Project.id)
        .outerjoin(Customer, Invoice.customer_id == Customer.id)
    )
    if query:
        term = f"%{query}%"
        q = q.filter(or_(Invoice.invoice_number.like(term), Project.name.like(term), Customer.name.like(term)))
    total = q.count()
    rows = q.order_by(Invoice.created_at.desc(), Invoice.id.desc()).offset((page - 1) * limit).limit(limit).all()
    return rows, total


def get_invoice(db: Session, invoice_id: int) -> Invoice:
    invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
    if not invoice:
        raise NotFoundError("Invoice not found")
    return invoice
