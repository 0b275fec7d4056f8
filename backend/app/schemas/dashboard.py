from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class RecentProject(BaseModel):
    id: int
    name: str
    status: str
    customer_name: Optional[str] = None


class DashboardStats(BaseModel):
    as_of: str
    active_projects: int
    total_estimates: Decimal
    hours_week: Decimal
    revenue_month: Decimal
    invoiced_month: Decimal
    recent_projects: List[RecentProject]


class ChartPoint(BaseModel):
    name: str
    value: Decimal
