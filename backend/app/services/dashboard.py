"""Back-office dashboard cards and the custom chart builder."""

from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from backend.app.models.customer import Customer
from backend.app.models.employee import Employee
from backend.app.models.estimate import ESTIMATE_STATUS_APPROVED, ESTIMATE_STATUS_DRAFT, Estimate, EstimateItem
from backend.app.models.invoice import INVOICE_STATUS_DRAFT, Invoice
from backend.app.models.project import Project
from backend.app.models.time_entry import TimeEntry
from backend.app.services.errors import BillingValidationError
from backend.app.services.money import to_cents

CHART_METRICS = ("hours", "revenue", "projects")
CHART_GROUPINGS = ("day", "week", "month", "project", "employee")
RECENT_PROJECT_LIMIT = 5


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def _estimate_totals(db: Session) -> List[Tuple[Estimate, str | None, Decimal]]:
    """Every estimate with its project name and item total (labor plus material)."""
    rows = (
        db.query(
            Estimate,
            Project.name,
            func.coalesce(func.sum(EstimateItem.labor_cost + EstimateItem.material_cost), 0),
        )
        .select_from(Estimate)
        .outerjoin(EstimateItem, EstimateItem.estimate_id == Estimate.id)
        .outerjoin(Project, Estimate.project_id == Project.id)
        .group_by(Estimate.id, Project.name)
        .all()
    )
    return [(estimate, project_name, to_cents(total)) for estimate, project_name, total in rows]


def get_dashboard_stats(db: Session, *, today: date) -> dict:
    active_projects = db.query(func.count(Project.id)).filter(Project.status == "Active").scalar() or 0

    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)
    hours_week = (
        db.query(func.coalesce(func.sum(TimeEntry.hours), 0))
        .filter(TimeEntry.date >= week_start, TimeEntry.date <= week_end)
        .scalar()
    )

    estimates = _estimate_totals(db)
    # Sent or approved work counts toward the pipeline; drafts do not.
    total_estimates = sum((total for estimate, _, total in estimates if estimate.status != ESTIMATE_STATUS_DRAFT), Decimal("0.00"))
    revenue_month = sum(
        (
            total
            for estimate, _, total in estimates
            if estimate.status == ESTIMATE_STATUS_APPROVED
            and _as_date(estimate.created_at).year == today.year
            and _as_date(estimate.created_at).month == today.month
        ),
        Decimal("0.00"),
    )

    month_start = today.replace(day=1)
    invoiced_month = (
        db.query(func.coalesce(func.sum(Invoice.subtotal), 0))
        .filter(Invoice.status != INVOICE_STATUS_DRAFT, Invoice.issue_date >= month_start, Invoice.issue_date <= today)
        .scalar()
    )

    recent = (
        db.query(Project, Customer.name)
        .select_from(Project)
        .outerjoin(Customer, Project.customer_id == Customer.id)
        .order_by(Project.created_at.desc(), Project.id.desc())
        .limit(RECENT_PROJECT_LIMIT)
        .all()
    )

    return {
        "as_of": today.isoformat(),
        "active_projects": int(active_projects),
        "total_estimates": total_estimates,
        "hours_week": to_cents(hours_week),
        "revenue_month": revenue_month,
        "invoiced_month": to_cents(invoiced_month),
        "recent_projects": [
            {"id": project.id, "name": project.name, "status": project.status, "customer_name": customer_name}
            for project, customer_name in recent
        ],
    }


def _bucket(group_by: str, day: date) -> str:
    if group_by == "day":
        return day.isoformat()
    if group_by == "week":
        iso_year, iso_week, _ = day.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    return f"{day.year}-{day.month:02d}"


def _in_range(day: date, start_date: date | None, end_date: date | None) -> bool:
    if start_date and day < start_date:
        return False
    if end_date and day > end_date:
        return False
    return True


def get_chart_data(
    db: Session,
    *,
    metric: str,
    group_by: str,
    start_date: date | None = None,
    end_date: date | None = None,
) -> List[dict]:
    """Series of ``{name, value}`` points sorted by name.

    Hours come from time entries, revenue from estimate totals and projects
    from project counts. Groupings without a meaning for the metric (revenue or
    projects per employee, projects per project) give an empty series.
    """
    if metric not in CHART_METRICS:
        raise BillingValidationError(f"Unknown chart metric: {metric}")
    if group_by not in CHART_GROUPINGS:
        raise BillingValidationError(f"Unknown chart grouping: {group_by}")

    series: Dict[str, Decimal] = defaultdict(lambda: Decimal("0.00"))

    if metric == "hours":
        query = (
            db.query(TimeEntry.date, TimeEntry.hours, Project.name, Employee)
            .select_from(TimeEntry)
            .outerjoin(Project, TimeEntry.project_id == Project.id)
            .outerjoin(Employee, TimeEntry.employee_id == Employee.id)
        )
        if start_date:
            query = query.filter(TimeEntry.date >= start_date)
        if end_date:
            query = query.filter(TimeEntry.date <= end_date)
        for day, hours, project_name, employee in query.all():
            if group_by == "project":
                name = project_name or "Unassigned"
            elif group_by == "employee":
                name = employee.display_name if employee else "Unknown"
            else:
                name = _bucket(group_by, day)
            series[name] += to_cents(hours)

    elif metric == "revenue":
        if group_by == "employee":
            return []
        for estimate, project_name, total in _estimate_totals(db):
            day = _as_date(estimate.created_at)
            if not _in_range(day, start_date, end_date):
                continue
            name = (project_name or "Unassigned") if group_by == "project" else _bucket(group_by, day)
            series[name] += total

    else:
        if group_by in ("project", "employee"):
            return []
        for (created_at,) in db.query(Project.created_at).all():
            day = _as_date(created_at)
            if _in_range(day, start_date, end_date):
                series[_bucket(group_by, day)] += 1

    return [{"name": name, "value": series[name]} for name in sorted(series)]
