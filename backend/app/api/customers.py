"""Customer endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.crud.crud_customer import customer_crud
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_employee, get_current_manager
from backend.app.models.employee import Employee
from backend.app.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("/", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerCreate,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    return customer_crud.create(db, obj_in=payload)


@router.get("/", response_model=List[CustomerRead])
async def list_customers(db: Session = Depends(get_db), current_employee: Employee = Depends(get_current_employee)):
    return customer_crud.get_multi(db)


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(customer_id: int, db: Session = Depends(get_db), current_employee: Employee = Depends(get_current_employee)):
    customer = customer_crud.get(db, customer_id=customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer


@router.patch("/{customer_id}", response_model=CustomerRead)
async def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    customer = customer_crud.get(db, customer_id=customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer_crud.update(db, db_obj=customer, obj_in=payload)


@router.delete("/{customer_id}")
async def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    customer = customer_crud.get(db, customer_id=customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    if customer_crud.in_use(db, customer_id=customer_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Customer has projects or invoices and cannot be deleted")
    customer_crud.delete(db, db_obj=customer)
    return {"status": "deleted", "id": customer_id}
