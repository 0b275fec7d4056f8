"""Invoice line model: one billed budget line on an invoice."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base


class InvoiceLine(Base):
    __tablename__ = "invoice_lines"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    # Weak reference back to the budget line, kept for traceability.
    budget_line_id = Column(Integer, ForeignKey("expense_report_lines.id"), nullable=True, index=True)
    description = Column(String(255), nullable=True)
    billed_hours = Column(Numeric(10, 2), nullable=False)
    billed_labor_amount = Column(Numeric(12, 2), nullable=False)

    invoice = relationship("Invoice", back_populates="lines")
