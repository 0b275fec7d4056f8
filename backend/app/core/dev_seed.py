import os

from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.core.security import get_password_hash
from backend.app.models.employee import ACCESS_LEVEL_ADMIN, Employee

logger = get_logger(__name__)

DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_ADMIN = "admin@wyatt.example.com"


def ensure_default_dev_admin(db: Session) -> None:
    """
    Create a default admin employee for local development if none exists.
    Skips execution outside development and when running under pytest.
    """
    if os.getenv("PYTEST_CURRENT_TEST") or os.getenv("WYATT_ENV", "development") != "development":
        return

    if db.query(Employee).filter(Employee.email == DEFAULT_DEV_ADMIN).first():
        return

    db.add(
        Employee(
            email=DEFAULT_DEV_ADMIN,
            hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD),
            first_name="Dev",
            last_name="Admin",
            access_level=ACCESS_LEVEL_ADMIN,
            is_active=True,
        )
    )
    db.commit()
    logger.info("dev_admin_seeded", email=DEFAULT_DEV_ADMIN)
