"""Handles employee registration."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.db.session import get_db
from backend.app.models.employee import ACCESS_LEVEL_ADMIN, ACCESS_LEVEL_TIME_ENTRY, Employee
from backend.app.schemas.employee import EmployeeCreate, EmployeeRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=EmployeeRead)
def register_employee(employee_in: EmployeeCreate, db: Session = Depends(get_db)):
    existing = db.query(Employee).filter(Employee.email == employee_in.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")
    # The first employee in an empty system administers it.
    is_first = db.query(Employee).count() == 0
    employee = Employee(
        email=employee_in.email,
        hashed_password=get_password_hash(employee_in.password),  # Hash password before storing
        first_name=employee_in.first_name,
        last_name=employee_in.last_name,
        job_title=employee_in.job_title,
        access_level=ACCESS_LEVEL_ADMIN if is_first else ACCESS_LEVEL_TIME_ENTRY,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee
