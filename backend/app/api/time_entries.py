"""Time entry endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from backend.app.api.results import to_http_error
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_employee
from backend.app.models.employee import Employee
from backend.app.schemas.time_entry import (
    TimeEntryCreate,
    TimeEntryPage,
    TimeEntryRead,
    TimeEntryStatusUpdate,
    TimeEntryUpdate,
)
from backend.app.services.errors import BillingError
from backend.app.services.time_entries import (
    create_time_entry,
    list_time_entries,
    set_time_entry_status,
    update_time_entry,
)

router = APIRouter(prefix="/time-entries", tags=["time-entries"])


@router.get("/", response_model=TimeEntryPage)
async def get_time_entries(
    page: int = 1,
    limit: int = 50,
    employee_id: int | None = None,
    project_id: int | None = None,
    db: Session = Depends(get_db),
    current_employee: Employee = Depends(get_current_employee),
):
    rows, total = list_time_entries(
        db, current_employee, page=page, limit=limit, employee_id=employee_id, project_id=project_id
    )
    return TimeEntryPage(data=rows, total_count=total)


@router.post("/", response_model=TimeEntryRead, status_code=status.HTTP_201_CREATED)
async def log_time_entry(
    payload: TimeEntryCreate,
    db: Session = Depends(get_db),
    current_employee: Employee = Depends(get_current_employee),
):
    try:
        return create_time_entry(db, current_employee, payload)
    except BillingError as exc:
        raise to_http_error(exc)


@router.patch("/{entry_id}", response_model=TimeEntryRead)
async def edit_time_entry(
    entry_id: int,
    payload: TimeEntryUpdate,
    db: Session = Depends(get_db),
    current_employee: Employee = Depends(get_current_employee),
):
    try:
        return update_time_entry(db, current_employee, entry_id, payload)
    except BillingError as exc:
        raise to_http_error(exc)


@router.put("/{entry_id}/status", response_model=TimeEntryRead)
async def toggle_time_entry_approval(
    entry_id: int,
    payload: TimeEntryStatusUpdate,
    db: Session = Depends(get_db),
    current_employee: Employee = Depends(get_current_employee),
):
    try:
        return set_time_entry_status(db, current_employee, entry_id, payload.status)
    except BillingError as exc:
        raise to_http_error(exc)
