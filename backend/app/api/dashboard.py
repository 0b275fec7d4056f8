"""Manager dashboard cards and custom charts."""

from datetime import date
from typing import List, Literal

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.core.time import utc_today
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_manager
from backend.app.models.employee import Employee
from backend.app.schemas.dashboard import ChartPoint, DashboardStats
from backend.app.services.dashboard import get_chart_data, get_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(
    today: date | None = None,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    return get_dashboard_stats(db, today=today or utc_today())


@router.get("/chart", response_model=List[ChartPoint])
def dashboard_chart(
    metric: Literal["hours", "revenue", "projects"] = "hours",
    group_by: Literal["day", "week", "month", "project", "employee"] = "month",
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    return get_chart_data(db, metric=metric, group_by=group_by, start_date=start_date, end_date=end_date)
