"""Estimate endpoints."""

import math

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.api.results import to_http_error
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_employee, get_current_manager
from backend.app.models.employee import Employee
from backend.app.models.estimate import Estimate
from backend.app.schemas.estimate import EstimateApprovalRead, EstimateCreate, EstimatePage, EstimateRead, EstimateUpdate
from backend.app.services.errors import BillingError
from backend.app.services.estimates import approve_estimate, create_estimate, list_estimates, update_estimate

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.get("/", response_model=EstimatePage)
async def get_estimates(
    page: int = 1,
    limit: int = 50,
    project_id: int | None = None,
    sort: str = "id",
    direction: str = "desc",
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    rows, total = list_estimates(db, page=page, limit=limit, project_id=project_id, sort=sort, direction=direction)
    return EstimatePage(data=rows, total_count=total, total_pages=math.ceil(total / max(1, limit)))


@router.post("/", response_model=EstimateRead, status_code=status.HTTP_201_CREATED)
async def create_estimate_endpoint(
    payload: EstimateCreate,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    try:
        return create_estimate(db, payload)
    except BillingError as exc:
        raise to_http_error(exc)


@router.get("/{estimate_id}", response_model=EstimateRead)
async def get_estimate(estimate_id: int, db: Session = Depends(get_db), current_employee: Employee = Depends(get_current_employee)):
    estimate = db.query(Estimate).filter(Estimate.id == estimate_id).first()
    if not estimate:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Estimate not found")
    return estimate


@router.put("/{estimate_id}", response_model=EstimateRead)
async def update_estimate_endpoint(
    estimate_id: int,
    payload: EstimateUpdate,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    try:
        return update_estimate(db, estimate_id, payload)
    except BillingError as exc:
        raise to_http_error(exc)


@router.post("/{estimate_id}/approve", response_model=EstimateApprovalRead)
async def approve_estimate_endpoint(
    estimate_id: int,
    db: Session = Depends(get_db),
    current_manager: Employee = Depends(get_current_manager),
):
    try:
        report = approve_estimate(db, estimate_id)
    except BillingError as exc:
        raise to_http_error(exc)
    return EstimateApprovalRead(estimate_id=estimate_id, expense_report_id=report.id)
