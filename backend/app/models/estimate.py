"""Estimate models: the quoted plan an expense report is created from."""

from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now

ESTIMATE_STATUS_DRAFT = "Draft"
ESTIMATE_STATUS_APPROVED = "Approved"


class Estimate(Base):
    __tablename__ = "estimates"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=ESTIMATE_STATUS_DRAFT)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    project = relationship("Project", back_populates="estimates")
    items = relationship("EstimateItem", back_populates="estimate", cascade="all, delete-orphan", order_by="EstimateItem.id")

    @property
    def labor_total(self) -> Decimal:
        return sum((item.labor_cost or Decimal("0.00") for item in self.items), Decimal("0.00"))

    @property
    def material_total(self) -> Decimal:
        return sum((item.material_cost or Decimal("0.00") for item in self.items), Decimal("0.00"))

    @property
    def total(self) -> Decimal:
        return self.labor_total + self.material_total


class EstimateItem(Base):
    __tablename__ = "estimate_items"

    id = Column(Integer, primary_key=True, index=True)
    estimate_id = Column(Integer, ForeignKey("estimates.id"), nullable=False, index=True)
    category = Column(String(100), nullable=True)
    subcategory = Column(String(100), nullable=True)
    labor_cost = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    material_cost = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    estimate = relationship("Estimate", back_populates="items")
