"""Expense report (budget header) and its budget lines."""

from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class ExpenseReport(Base):
    __tablename__ = "expense_reports"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    estimate_id = Column(Integer, ForeignKey("estimates.id"), nullable=True)
    name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="Active")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    project = relationship("Project", back_populates="expense_reports")
    lines = relationship("BudgetLine", back_populates="expense_report", cascade="all, delete-orphan", order_by="BudgetLine.id")


class BudgetLine(Base):
    __tablename__ = "expense_report_lines"

    id = Column(Integer, primary_key=True, index=True)
    expense_report_id = Column(Integer, ForeignKey("expense_reports.id"), nullable=False, index=True)
    task_name = Column(String(255), nullable=False)
    estimated_labor_cost = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    estimated_material_cost = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    expense_report = relationship("ExpenseReport", back_populates="lines")
