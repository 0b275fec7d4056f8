"""Request dependencies resolving the calling employee and their access level."""

from typing import Callable

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.core.security import decode_access_token
from backend.app.db.session import get_db
from backend.app.models.employee import ACCESS_LEVEL_ADMIN, ACCESS_LEVEL_MANAGER, Employee

logger = get_logger(__name__)


def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_employee(db: Session = Depends(get_db), authorization: str | None = Header(default=None)) -> Employee:
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized()
    try:
        claims = decode_access_token(authorization.split(" ", 1)[1])
        employee_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized()

    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee or not employee.is_active:
        raise _unauthorized()
    # A token minted before a promotion or demotion no longer describes the employee.
    token_level = claims.get("lvl")
    if token_level is not None and token_level != employee.access_level:
        logger.info("stale_access_token", employee_id=employee.id, token_level=token_level, access_level=employee.access_level)
        raise _unauthorized("Access level changed, please log in again")
    return employee


def require_access_level(max_level: int, detail: str) -> Callable[..., Employee]:
    """Dependency allowing employees whose level is at most ``max_level`` (1 is the highest)."""

    def dependency(current_employee: Employee = Depends(get_current_employee)) -> Employee:
        if current_employee.access_level is None or current_employee.access_level > max_level:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return current_employee

    return dependency


get_current_manager = require_access_level(ACCESS_LEVEL_MANAGER, "Manager access required")
get_current_admin = require_access_level(ACCESS_LEVEL_ADMIN, "Admin access required")
