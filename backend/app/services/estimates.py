"""Estimates: creation, listing, editing and approval into an expense report."""

from decimal import Decimal
from typing import List, Tuple

from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.db.session import transaction
from backend.app.models.estimate import ESTIMATE_STATUS_APPROVED, Estimate, EstimateItem
from backend.app.models.expense_report import BudgetLine, ExpenseReport
from backend.app.models.project import Project
from backend.app.schemas.estimate import EstimateCreate, EstimateUpdate
from backend.app.services.errors import BillingValidationError, NotFoundError

logger = get_logger(__name__)

SORTABLE_COLUMNS = {
    "id": Estimate.id,
    "name": Estimate.name,
    "status": Estimate.status,
    "created_at": Estimate.created_at,
}


def create_estimate(db: Session, payload: EstimateCreate) -> Estimate:
    if payload.project_id is not None and not db.query(Project).filter(Project.id == payload.project_id).first():
        raise NotFoundError("Project not found")
    with transaction(db):
        estimate = Estimate(project_id=payload.project_id, name=payload.name)
        estimate.items = [EstimateItem(**item.model_dump()) for item in payload.items]
        db.add(estimate)
    db.refresh(estimate)
    return estimate


def list_estimates(
    db: Session,
    page: int = 1,
    limit: int = 50,
    project_id: int | None = None,
    sort: str = "id",
    direction: str = "desc",
) -> Tuple[List[Estimate], int]:
    """Paginated estimates; unknown sort keys fall back to id."""
    query = db.query(Estimate)
    if project_id:
        query = query.filter(Estimate.project_id == project_id)
    total = query.count()

    column = SORTABLE_COLUMNS.get(sort, Estimate.id)
    ordering = column.asc() if direction.lower() == "asc" else column.desc()
    limit = max(1, limit)
    page = max(1, page)
    rows = query.order_by(ordering, Estimate.id.desc()).offset((page - 1) * limit).limit(limit).all()
    return rows, total


def update_estimate(db: Session, estimate_id: int, payload: EstimateUpdate) -> Estimate:
    estimate = db.query(Estimate).filter(Estimate.id == estimate_id).first()
    if not estimate:
        raise NotFoundError("Estimate not found.")
    # Its budget lines were already derived from the items.
    if estimate.status == ESTIMATE_STATUS_APPROVED:
        raise BillingValidationError("Approved estimates cannot be edited.")

    update_data = payload.model_dump(exclude_unset=True, exclude={"items"})
    if update_data.get("project_id") is not None and not db.query(Project).filter(Project.id == update_data["project_id"]).first():
        raise NotFoundError("Project not found")

    with transaction(db):
        for field, value in update_data.items():
            if field == "name" and value is None:
                continue
            setattr(estimate, field, value)
        if payload.items is not None:
            estimate.items = [EstimateItem(**item.model_dump()) for item in payload.items]
    db.refresh(estimate)
    logger.info("estimate_updated", estimate_id=estimate.id, item_count=len(estimate.items))
    return estimate


def _task_name(item: EstimateItem) -> str:
    return item.subcategory or item.category or "Unnamed Task"


def approve_estimate(db: Session, estimate_id: int) -> ExpenseReport:
    """Approve an estimate and open an expense report with one budget line per item."""
    estimate = db.query(Estimate).filter(Estimate.id == estimate_id).first()
    if not estimate:
        raise NotFoundError("Estimate not found.")
    if estimate.status == ESTIMATE_STATUS_APPROVED:
        raise BillingValidationError("Estimate is already approved.")
    if not estimate.project_id:
        raise BillingValidationError("Cannot approve an estimate that is not linked to a Project.")

    project = db.query(Project).filter(Project.id == estimate.project_id).first()
    report_name = f"Budget: {project.name if project else f'Estimate {estimate.id}'}"

    with transaction(db):
        estimate.status = ESTIMATE_STATUS_APPROVED
        report = ExpenseReport(project_id=estimate.project_id, estimate_id=estimate.id, name=report_name, status="Active")
        report.lines = [
            BudgetLine(
                task_name=_task_name(item),
                estimated_labor_cost=item.labor_cost or Decimal("0.00"),
                estimated_material_cost=item.material_cost or Decimal("0.00"),
            )
            for item in estimate.items
        ]
        db.add(report)

    db.refresh(report)
    logger.info("estimate_approved", estimate_id=estimate.id, expense_report_id=report.id, line_count=len(report.lines))
    return report
