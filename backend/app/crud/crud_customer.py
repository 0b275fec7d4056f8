"""CRUD operations for customers."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.customer import Customer
from backend.app.models.invoice import Invoice
from backend.app.models.project import Project
from backend.app.schemas.customer import CustomerCreate, CustomerUpdate


class CRUDCustomer:
    def create(self, db: Session, *, obj_in: CustomerCreate) -> Customer:
        obj = Customer(**obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, customer_id: int) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.id == customer_id).first()

    def get_multi(self, db: Session) -> List[Customer]:
        return db.query(Customer).order_by(Customer.id.asc()).all()

    def update(self, db: Session, *, db_obj: Customer, obj_in: CustomerUpdate) -> Customer:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def in_use(self, db: Session, *, customer_id: int) -> bool:
        """True while projects or invoices still point at the customer."""
        if db.query(Project.id).filter(Project.customer_id == customer_id).first():
            return True
        return db.query(Invoice.id).filter(Invoice.customer_id == customer_id).first() is not None

    def delete(self, db: Session, *, db_obj: Customer) -> Customer:
        db.delete(db_obj)
        db.commit()
        return db_obj


customer_crud = CRUDCustomer()
