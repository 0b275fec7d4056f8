import pytest
from fastapi.testclient import TestClient

from backend.app.core.security import create_access_token
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.employee import Employee


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str = "secret") -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


def test_first_employee_is_admin_and_later_ones_log_time_only():
    client = TestClient(app)
    first = client.post("/auth/register", json={"email": "owner@example.com", "password": "secret"})
    second = client.post("/auth/register", json={"email": "crew@example.com", "password": "secret"})
    assert first.status_code == 200
    assert first.json()["access_level"] == 1
    assert second.json()["access_level"] == 3


def test_duplicate_email_is_rejected():
    client = TestClient(app)
    client.post("/auth/register", json={"email": "dup@example.com", "password": "secret"})
    response = client.post("/auth/register", json={"email": "dup@example.com", "password": "other"})
    assert response.status_code == 400


def test_login_and_me():
    client = TestClient(app)
    token = register_and_login(client, "me@example.com")
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "me@example.com"


def test_wrong_password_returns_400():
    client = TestClient(app)
    client.post("/auth/register", json={"email": "wrongpw@example.com", "password": "secret"})
    response = client.post("/auth/login", json={"email": "wrongpw@example.com", "password": "bad"})
    assert response.status_code == 400


def test_missing_or_invalid_token_returns_401():
    client = TestClient(app)
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer invalid"}).status_code == 401


def test_inactive_employee_cannot_log_in():
    client = TestClient(app)
    client.post("/auth/register", json={"email": "gone@example.com", "password": "secret"})
    db = SessionLocal()
    employee = db.query(Employee).filter(Employee.email == "gone@example.com").first()
    employee.is_active = False
    db.commit()
    db.close()
    response = client.post("/auth/login", json={"email": "gone@example.com", "password": "secret"})
    assert response.status_code == 400


def test_only_admin_changes_access_level():
    client = TestClient(app)
    admin_token = register_and_login(client, "admin@example.com")
    crew_token = register_and_login(client, "crew@example.com")
    crew_id = client.get("/auth/me", headers={"Authorization": f"Bearer {crew_token}"}).json()["id"]

    denied = client.patch(
        f"/employees/{crew_id}", json={"access_level": 1}, headers={"Authorization": f"Bearer {crew_token}"}
    )
    assert denied.status_code == 403

    promoted = client.patch(
        f"/employees/{crew_id}", json={"access_level": 2}, headers={"Authorization": f"Bearer {admin_token}"}
    )
    assert promoted.status_code == 200
    assert promoted.json()["access_level"] == 2

    stale = client.get("/employees/", headers={"Authorization": f"Bearer {crew_token}"})
    assert stale.status_code == 401

    relogin = client.post("/auth/login", json={"email": "crew@example.com", "password": "secret"}).json()
    assert relogin["access_level"] == 2
    listing = client.get("/employees/", headers={"Authorization": f"Bearer {relogin['access_token']}"})
    assert listing.status_code == 200
    assert [row["email"] for row in listing.json()] == ["admin@example.com", "crew@example.com"]


def test_login_reports_access_level():
    client = TestClient(app)
    client.post("/auth/register", json={"email": "owner@example.com", "password": "secret"})
    response = client.post("/auth/login", json={"email": "owner@example.com", "password": "secret"})
    assert response.status_code == 200
    assert response.json()["access_level"] == 1
    assert response.json()["token_type"] == "bearer"


def test_demoted_manager_token_is_rejected():
    client = TestClient(app)
    admin_token = register_and_login(client, "admin@example.com")
    admin_id = client.get("/auth/me", headers={"Authorization": f"Bearer {admin_token}"}).json()["id"]
    db = SessionLocal()
    employee = db.query(Employee).filter(Employee.id == admin_id).first()
    employee.access_level = 3
    db.commit()
    db.close()

    response = client.get("/employees/", headers={"Authorization": f"Bearer {admin_token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Access level changed, please log in again"


def test_token_without_level_claim_is_still_accepted():
    client = TestClient(app)
    client.post("/auth/register", json={"email": "plain@example.com", "password": "secret"})
    db = SessionLocal()
    employee_id = db.query(Employee).filter(Employee.email == "plain@example.com").first().id
    db.close()
    token = create_access_token(employee_id)
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
