"""Audit trail for invoice status changes."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    # Null when the change was made by the overdue sweep rather than a person.
    acting_employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True, index=True)
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(Integer, nullable=False, index=True)
    action = Column(String(100), nullable=False)
    detail = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    acting_employee = relationship("Employee")
