"""Time entry logging and approval rules."""

from typing import List, Tuple

from sqlalchemy.orm import Session

from backend.app.models.employee import ACCESS_LEVEL_TIME_ENTRY, Employee
from backend.app.models.estimate import Estimate, EstimateItem
from backend.app.models.project import Project
from backend.app.models.time_entry import TIME_ENTRY_STATUS_APPROVED, TIME_ENTRY_STATUS_PENDING, TimeEntry
from backend.app.schemas.time_entry import TimeEntryCreate, TimeEntryUpdate
from backend.app.services.errors import NotFoundError, PermissionDeniedError


def _ensure_project(db: Session, project_id: int) -> None:
    if not db.query(Project).filter(Project.id == project_id).first():
        raise NotFoundError("Project not found")


def create_time_entry(db: Session, employee: Employee, payload: TimeEntryCreate) -> TimeEntry:
    _ensure_project(db, payload.project_id)
    entry = TimeEntry(employee_id=employee.id, status=TIME_ENTRY_STATUS_PENDING, **payload.model_dump())
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def update_time_entry(db: Session, employee: Employee, entry_id: int, payload: TimeEntryUpdate) -> TimeEntry:
    entry = db.query(TimeEntry).filter(TimeEntry.id == entry_id).first()
    if not entry:
        raise NotFoundError("Entry not found")
    if employee.access_level == ACCESS_LEVEL_TIME_ENTRY:
        if entry.status == TIME_ENTRY_STATUS_APPROVED:
            raise PermissionDeniedError("This entry is Approved and cannot be edited.")
        if entry.employee_id != employee.id:
            raise PermissionDeniedError("You can only edit your own entries.")

    update_data = payload.model_dump(exclude_unset=True)
    new_project_id = update_data.get("project_id")
    if new_project_id is not None and new_project_id != entry.project_id:
        _ensure_project(db, new_project_id)
        if entry.budget_line_id is not None:
            # Budget lines only count hours logged on their own project.
            entry.budget_line_id = None
            entry.status = TIME_ENTRY_STATUS_PENDING
    for field, value in update_data.items():
        setattr(entry, field, value)
    db.commit()
    db.refresh(entry)
    return entry


def set_time_entry_status(db: Session, employee: Employee, entry_id: int, status: str) -> TimeEntry:
    if not employee.can_manage:
        raise PermissionDeniedError("Unauthorized")
    entry = db.query(TimeEntry).filter(TimeEntry.id == entry_id).first()
    if not entry:
        raise NotFoundError("Entry not found")
    entry.status = status
    db.commit()
    db.refresh(entry)
    return entry


def list_time_entries(
    db: Session,
    employee: Employee,
    page: int = 1,
    limit: int = 50,
    employee_id: int | None = None,
    project_id: int | None = None,
) -> Tuple[List[TimeEntry], int]:
    """Newest first; time-entry-only employees are always limited to their own rows."""
    query = db.query(TimeEntry)
    if employee.access_level == ACCESS_LEVEL_TIME_ENTRY:
        query = query.filter(TimeEntry.employee_id == employee.id)
    elif employee_id:
        query = query.filter(TimeEntry.employee_id == employee_id)
    if project_id:
        query = query.filter(TimeEntry.project_id == project_id)

    total = query.count()
    limit = max(1, limit)
    page = max(1, page)
    rows = (
        query.order_by(TimeEntry.date.desc(), TimeEntry.created_at.desc(), TimeEntry.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total


def list_project_tasks(db: Session, project_id: int) -> List[str]:
    """Distinct task names offered by the project's estimate items, alphabetical."""
    rows = (
        db.query(EstimateItem.subcategory)
        .join(Estimate, EstimateItem.estimate_id == Estimate.id)
        .filter(Estimate.project_id == project_id, EstimateItem.subcategory.isnot(None))
        .distinct()
        .order_by(EstimateItem.subcategory.asc())
        .all()
    )
    return [name for (name,) in rows if name]
