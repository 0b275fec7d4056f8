from sqlalchemy import Column, Integer, String

from backend.app.db.base_class import Base


class InvoiceNumberSequence(Base):
    __tablename__ = "invoice_number_sequences"

    name = Column(String(50), primary_key=True)
    next_value = Column(Integer, nullable=False, default=1)
