"""Employee login and the current-employee endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.core.security import create_access_token, verify_password
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_employee
from backend.app.models.employee import Employee
from backend.app.schemas.employee import AccessToken, EmployeeLogin, EmployeeRead

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)


@router.post("/login", response_model=AccessToken)
def login(credentials: EmployeeLogin, db: Session = Depends(get_db)):
    employee = db.query(Employee).filter(Employee.email == credentials.email).first()
    if not employee or not employee.hashed_password or not verify_password(credentials.password, employee.hashed_password):
        logger.info("login_rejected", email=credentials.email, reason="invalid_credentials")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")
    if not employee.is_active:
        logger.info("login_rejected", email=credentials.email, reason="inactive")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Employee is inactive")

    # The level is baked into the token so a later promotion or demotion invalidates it.
    token = create_access_token(employee_id=employee.id, access_level=employee.access_level)
    logger.info("employee_logged_in", employee_id=employee.id, access_level=employee.access_level)
    return AccessToken(access_token=token, access_level=employee.access_level)


@router.get("/me", response_model=EmployeeRead)
def read_me(current_employee: Employee = Depends(get_current_employee)):
    return current_employee
