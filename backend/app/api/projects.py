"""Project endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.crud.crud_customer import customer_crud
from backend.app.crud.crud_project import project_crud
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_employee, get_current_manager
from backend.app.models.employee import Employee
from backend.app.schemas.expense_report import PendingTimeEntry
from backend.app.schemas.project import ProjectCreate, ProjectRead, ProjectTask, ProjectUpdate
from backend.app.services.billing_actions import get_pending_time_entries_action
from backend.app.services.time_entries import list_project_tasks
from backend.app.api.results import unwrap

router = APIRouter(prefix="/projects", tags=["projects"])


def _ensure_customer(db: Session, customer_id: int | None) -> None:
    if customer_id is not None and not customer_crud.get(db, customer_id=customer_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    _ensure_customer(db, payload.customer_id)
    return project_crud.create(db, obj_in=payload)


@router.get("/", response_model=List[ProjectRead])
async def list_projects(
    customer_id: int | None = None,
    db: Session = Depends(get_db),
    current_employee: Employee = Depends(get_current_employee),
):
    return project_crud.get_multi(db, customer_id=customer_id)


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(project_id: int, db: Session = Depends(get_db), current_employee: Employee = Depends(get_current_employee)):
    project = project_crud.get(db, project_id=project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    project = project_crud.get(db, project_id=project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    _ensure_customer(db, payload.customer_id)
    return project_crud.update(db, db_obj=project, obj_in=payload)


@router.get("/{project_id}/pending-time-entries", response_model=List[PendingTimeEntry])
async def list_pending_time_entries(
    project_id: int,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    return unwrap(get_pending_time_entries_action(db, project_id))


@router.get("/{project_id}/tasks", response_model=List[ProjectTask])
async def list_project_tasks_endpoint(
    project_id: int,
    db: Session = Depends(get_db),
    current_employee: Employee = Depends(get_current_employee),
):
    return [ProjectTask(task_name=name) for name in list_project_tasks(db, project_id)]


@router.delete("/{project_id}")
async def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    project = project_crud.get(db, project_id=project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    if project_crud.in_use(db, project_id=project_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Project has estimates, budgets, time or invoices and cannot be deleted")
    project_crud.delete(db, db_obj=project)
    return {"status": "deleted", "id": project_id}
