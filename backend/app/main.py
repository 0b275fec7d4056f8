# Wyatt back-office billing API.

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from backend.app.core.logging import configure_logging, get_logger
from backend.app.core.settings import get_settings
from backend.app.api import register
from backend.app.api import login
from backend.app.api import employees
from backend.app.api import customers
from backend.app.api import projects
from backend.app.api import estimates
from backend.app.api import expense_reports
from backend.app.api import time_entries
from backend.app.api import invoices
from backend.app.api import dashboard
from backend.app.core.dev_seed import ensure_default_dev_admin
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine

settings = get_settings()
configure_logging(settings.log_level)
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name, version=settings.api_version)

origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(employees.router)
app.include_router(customers.router)
app.include_router(projects.router)
app.include_router(estimates.router)
app.include_router(expense_reports.router)
app.include_router(time_entries.router)
app.include_router(invoices.router)
app.include_router(dashboard.router)


@app.get("/")
def read_root():
    return {"app": "Wyatt billing backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_dev_admin(db)
    finally:
        db.close()
    logger.info("startup_complete", environment=settings.environment)
