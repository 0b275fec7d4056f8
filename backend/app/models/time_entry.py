"""Time entry model: hours an employee worked on a project."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now

TIME_ENTRY_STATUS_PENDING = "Pending"
TIME_ENTRY_STATUS_APPROVED = "Approved"


class TimeEntry(Base):
    __tablename__ = "time_entries"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    hours = Column(Numeric(10, 2), nullable=False)
    task_name = Column(String(255), nullable=True)
    memo = Column(Text, nullable=True)
    image_url = Column(String(512), nullable=True)
    status = Column(String(20), nullable=False, default=TIME_ENTRY_STATUS_PENDING)
    budget_line_id = Column(Integer, ForeignKey("expense_report_lines.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    employee = relationship("Employee", back_populates="time_entries")
    project = relationship("Project", back_populates="time_entries")
    budget_line = relationship("BudgetLine")
