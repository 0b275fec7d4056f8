"""CRUD operations for projects."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.estimate import Estimate
from backend.app.models.expense_report import ExpenseReport
from backend.app.models.invoice import Invoice
from backend.app.models.project import Project
from backend.app.models.time_entry import TimeEntry
from backend.app.schemas.project import ProjectCreate, ProjectUpdate


class CRUDProject:
    def create(self, db: Session, *, obj_in: ProjectCreate) -> Project:
        obj = Project(**obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, project_id: int) -> Optional[Project]:
        return db.query(Project).filter(Project.id == project_id).first()

    def get_multi(self, db: Session, *, customer_id: Optional[int] = None) -> List[Project]:
        query = db.query(Project)
        if customer_id is not None:
            query = query.filter(Project.customer_id == customer_id)
        return query.order_by(Project.created_at.desc(), Project.id.desc()).all()

    def update(self, db: Session, *, db_obj: Project, obj_in: ProjectUpdate) -> Project:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def in_use(self, db: Session, *, project_id: int) -> bool:
        """True while estimates, expense reports, time entries or invoices belong to the project."""
        for model in (Estimate, ExpenseReport, TimeEntry, Invoice):
            if db.query(model.id).filter(model.project_id == project_id).first():
                return True
        return False

    def delete(self, db: Session, *, db_obj: Project) -> Project:
        db.delete(db_obj)
        db.commit()
        return db_obj


project_crud = CRUDProject()
