from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base

ACCESS_LEVEL_ADMIN = 1
ACCESS_LEVEL_MANAGER = 2
ACCESS_LEVEL_TIME_ENTRY = 3


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    job_title = Column(String(100), nullable=True)
    access_level = Column(Integer, nullable=False, default=ACCESS_LEVEL_TIME_ENTRY)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    time_entries = relationship("TimeEntry", back_populates="employee")

    @property
    def display_name(self) -> str:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else self.email

    @property
    def can_manage(self) -> bool:
        return self.access_level is not None and self.access_level <= ACCESS_LEVEL_MANAGER
