from datetime import date
from decimal import Decimal

import pytest

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.customer import Customer
from backend.app.models.employee import Employee
from backend.app.models.expense_report import BudgetLine, ExpenseReport
from backend.app.models.invoice import Invoice
from backend.app.models.invoice_line import InvoiceLine
from backend.app.models.project import Project
from backend.app.models.time_entry import TimeEntry
from backend.app.services.errors import BillingValidationError, NotFoundError
from backend.app.services.expense_reports import (
    assign_time_entry_to_budget_line,
    get_expense_report,
    get_pending_time_entries,
)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def _seed(db):
    customer = Customer(name="Acme Homes")
    employee = Employee(email="crew@example.com", first_name="Sam", last_name="Crew", access_level=3)
    db.add_all([customer, employee])
    db.commit()
    project = Project(name="Maple St", customer_id=customer.id)
    db.add(project)
    db.commit()
    report = ExpenseReport(project_id=project.id, name="Budget: Maple St", status="Active")
    report.lines = [
        BudgetLine(task_name="Framing", estimated_labor_cost=Decimal("1000.00")),
        BudgetLine(task_name="Roofing", estimated_labor_cost=Decimal("500.00")),
    ]
    db.add(report)
    db.commit()
    db.refresh(report)
    return customer, employee, project, report


def _entry(db, employee, project, hours, day, status="Pending", line=None):
    entry = TimeEntry(
        employee_id=employee.id,
        project_id=project.id,
        date=day,
        hours=Decimal(hours),
        task_name="Work",
        status=status,
        budget_line_id=line.id if line else None,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def test_actual_hours_sum_linked_entries_regardless_of_status():
    db = SessionLocal()
    try:
        _, employee, project, report = _seed(db)
        framing, roofing = report.lines
        _entry(db, employee, project, "3.5", date(2030, 1, 1), status="Approved", line=framing)
        _entry(db, employee, project, "2", date(2030, 1, 2), status="Pending", line=framing)
        _entry(db, employee, project, "4", date(2030, 1, 3))

        detail = get_expense_report(db, report.id)
        by_id = {line.id: line for line in detail.lines}
        assert by_id[framing.id].actual_hours == Decimal("5.50")
        assert by_id[framing.id].assigned_entries_count == 2
        assert by_id[roofing.id].actual_hours == Decimal("0.00")
        assert by_id[roofing.id].assigned_entries_count == 0
        assert detail.report.project_name == "Maple St"
        assert detail.report.customer_id == project.customer_id
    finally:
        db.close()


def test_billed_hours_come_from_invoice_lines():
    db = SessionLocal()
    try:
        customer, employee, project, report = _seed(db)
        framing = report.lines[0]
        _entry(db, employee, project, "10", date(2030, 1, 1), status="Approved", line=framing)
        invoice = Invoice(
            project_id=project.id,
            expense_report_id=report.id,
            customer_id=customer.id,
            invoice_number="INV-000001",
            issue_date=date(2030, 1, 5),
            due_date=date(2030, 2, 4),
            subtotal=Decimal("260.00"),
            tax_rate=Decimal("0.14975"),
            tax_amount=Decimal("38.94"),
            total_amount=Decimal("298.94"),
        )
        invoice.lines = [
            InvoiceLine(budget_line_id=framing.id, description="Framing", billed_hours=Decimal("4"), billed_labor_amount=Decimal("260"))
        ]
        db.add(invoice)
        db.commit()

        line = get_expense_report(db, report.id).lines[0]
        assert line.actual_hours == Decimal("10.00")
        assert line.billed_hours == Decimal("4.00")
        assert line.billed_amount == Decimal("260.00")
    finally:
        db.close()


def test_lines_are_returned_in_creation_order():
    db = SessionLocal()
    try:
        _, _, _, report = _seed(db)
        detail = get_expense_report(db, report.id)
        assert [line.task_name for line in detail.lines] == ["Framing", "Roofing"]
    finally:
        db.close()


def test_missing_report_is_not_found():
    db = SessionLocal()
    try:
        with pytest.raises(NotFoundError):
            get_expense_report(db, 999)
    finally:
        db.close()


def test_pending_entries_are_unassigned_and_oldest_first():
    db = SessionLocal()
    try:
        _, employee, project, report = _seed(db)
        later = _entry(db, employee, project, "2", date(2030, 1, 9))
        earlier = _entry(db, employee, project, "3", date(2030, 1, 2))
        _entry(db, employee, project, "1", date(2030, 1, 1), status="Approved")
        _entry(db, employee, project, "1", date(2030, 1, 1), line=report.lines[0])

        pending = get_pending_time_entries(db, project.id)
        assert [entry.id for entry in pending] == [earlier.id, later.id]
        assert pending[0].employee_name == "Sam Crew"
    finally:
        db.close()


def test_assignment_approves_entry_and_moves_hours():
    db = SessionLocal()
    try:
        _, employee, project, report = _seed(db)
        framing, roofing = report.lines
        entry = _entry(db, employee, project, "6", date(2030, 1, 1))

        assigned = assign_time_entry_to_budget_line(db, entry.id, framing.id)
        assert assigned.status == "Approved"
        assert assigned.budget_line_id == framing.id
        assert get_expense_report(db, report.id).lines[0].actual_hours == Decimal("6.00")
        assert get_pending_time_entries(db, project.id) == []

        assign_time_entry_to_budget_line(db, entry.id, roofing.id)
        lines = get_expense_report(db, report.id).lines
        assert lines[0].actual_hours == Decimal("0.00")
        assert lines[1].actual_hours == Decimal("6.00")
    finally:
        db.close()


def test_assignment_with_unknown_ids_is_not_found():
    db = SessionLocal()
    try:
        _, employee, project, report = _seed(db)
        entry = _entry(db, employee, project, "1", date(2030, 1, 1))
        with pytest.raises(NotFoundError):
            assign_time_entry_to_budget_line(db, 999, report.lines[0].id)
        with pytest.raises(NotFoundError):
            assign_time_entry_to_budget_line(db, entry.id, 999)
        db.refresh(entry)
        assert entry.status == "Pending"
        assert entry.budget_line_id is None
    finally:
        db.close()


def test_entry_cannot_be_assigned_to_another_projects_line():
    db = SessionLocal()
    try:
        customer, employee, project, report = _seed(db)
        other = Project(name="Oak Ave", customer_id=customer.id)
        db.add(other)
        db.commit()
        entry = _entry(db, employee, other, "5", date(2030, 1, 1))

        with pytest.raises(BillingValidationError):
            assign_time_entry_to_budget_line(db, entry.id, report.lines[0].id)

        assert get_expense_report(db, report.id).lines[0].actual_hours == Decimal("0.00")
        db.refresh(entry)
        assert entry.budget_line_id is None
        assert entry.status == "Pending"
    finally:
        db.close()
