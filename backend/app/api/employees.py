"""Admin endpoints for managing employee access."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_admin, get_current_manager
from backend.app.models.audit_log import AuditLog
from backend.app.models.employee import Employee
from backend.app.models.time_entry import TimeEntry
from backend.app.schemas.employee import EmployeeAccessUpdate, EmployeeRead

router = APIRouter(prefix="/employees", tags=["employees"])
logger = get_logger(__name__)


@router.get("/", response_model=List[EmployeeRead])
async def list_employees(db: Session = Depends(get_db), current_manager: Employee = Depends(get_current_manager)):
    return db.query(Employee).order_by(Employee.id.asc()).all()


@router.patch("/{employee_id}", response_model=EmployeeRead)
async def update_employee_access(
    employee_id: int,
    payload: EmployeeAccessUpdate,
    db: Session = Depends(get_db),
    current_admin: Employee = Depends(get_current_admin),
):
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    if payload.access_level is not None:
        employee.access_level = payload.access_level
    if payload.is_active is not None:
        employee.is_active = payload.is_active
    db.commit()
    db.refresh(employee)
    return employee


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_admin: Employee = Depends(get_current_admin),
):
    if employee_id == current_admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Record not found or already deleted.")
    # Logged time and audit rows must keep their author; deactivate instead.
    has_history = (
        db.query(TimeEntry.id).filter(TimeEntry.employee_id == employee_id).first()
        or db.query(AuditLog.id).filter(AuditLog.acting_employee_id == employee_id).first()
    )
    if has_history:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Employee has logged time or audit history; deactivate instead")
    db.delete(employee)
    db.commit()
    logger.info("employee_deleted", employee_id=employee_id, acting_employee_id=current_admin.id)
    return {"status": "deleted", "id": employee_id}
