from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def auth_headers(client: TestClient, email: str) -> dict:
    client.post("/auth/register", json={"email": email, "password": "secret"})
    response = client.post("/auth/login", json={"email": email, "password": "secret"})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def setup_budget(client: TestClient, admin: dict) -> dict:
    customer = client.post("/customers/", json={"name": "Acme Homes", "jurisdiction": "QC"}, headers=admin).json()
    project = client.post("/projects/", json={"name": "Maple St", "customer_id": customer["id"]}, headers=admin).json()
    estimate = client.post(
        "/estimates/",
        json={
            "name": "Renovation",
            "project_id": project["id"],
            "items": [
                {"category": "Carpentry", "subcategory": "Framing", "labor_cost": "2000"},
                {"category": "Drywall", "labor_cost": "800"},
            ],
        },
        headers=admin,
    ).json()
    approval = client.post(f"/estimates/{estimate['id']}/approve", headers=admin)
    assert approval.status_code == 200
    report_id = approval.json()["expense_report_id"]
    report = client.get(f"/expense-reports/{report_id}", headers=admin).json()
    return {"customer": customer, "project": project, "report": report}


def test_progress_billing_end_to_end():
    client = TestClient(app)
    admin = auth_headers(client, "admin@example.com")
    crew = auth_headers(client, "crew@example.com")
    ctx = setup_budget(client, admin)
    project_id = ctx["project"]["id"]
    report_id = ctx["report"]["report"]["id"]
    framing_id, drywall_id = [line["id"] for line in ctx["report"]["lines"]]

    first = client.post("/time-entries/", json={"project_id": project_id, "date": "2030-01-02", "hours": "5"}, headers=crew).json()
    second = client.post("/time-entries/", json={"project_id": project_id, "date": "2030-01-03", "hours": "3"}, headers=crew).json()

    pending = client.get(f"/projects/{project_id}/pending-time-entries", headers=admin).json()
    assert [row["id"] for row in pending] == [first["id"], second["id"]]
    assert pending[0]["employee_name"] == "crew@example.com"

    for entry in (first, second):
        response = client.post(
            "/expense-reports/assignments",
            json={"time_entry_id": entry["id"], "budget_line_id": framing_id},
            headers=admin,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Approved"
    assert client.get(f"/projects/{project_id}/pending-time-entries", headers=admin).json() == []

    proposal = client.get(f"/expense-reports/{report_id}/billing-proposal", headers=admin).json()
    framing = next(line for line in proposal["lines"] if line["budget_line_id"] == framing_id)
    assert Decimal(framing["unbilled_hours"]) == Decimal("8")
    assert Decimal(framing["amount_to_bill"]) == Decimal("520")
    assert Decimal(proposal["subtotal"]) == Decimal("520")

    generated = client.post(
        "/invoices/generate",
        json={
            "project_id": project_id,
            "expense_report_id": report_id,
            "customer_id": ctx["customer"]["id"],
            "items": [
                {"budget_line_id": framing_id, "description": "Framing", "billed_hours": "8", "billed_labor_amount": "520"},
                {"budget_line_id": drywall_id, "description": "Drywall", "billed_hours": "0", "billed_labor_amount": "0"},
            ],
            "subtotal": "520",
        },
        headers=admin,
    )
    assert generated.status_code == 201
    invoice_id = generated.json()["invoice_id"]
    assert generated.json()["invoice_number"] == "INV-000001"

    detail = client.get(f"/invoices/{invoice_id}", headers=admin).json()
    assert detail["status"] == "Draft"
    assert Decimal(detail["tax_amount"]) == Decimal("77.87")
    assert Decimal(detail["total_amount"]) == Decimal("597.87")
    assert len(detail["lines"]) == 1

    report = client.get(f"/expense-reports/{report_id}", headers=admin).json()
    framing_line = next(line for line in report["lines"] if line["id"] == framing_id)
    assert Decimal(framing_line["actual_hours"]) == Decimal("8")
    assert Decimal(framing_line["billed_hours"]) == Decimal("8")
    assert Decimal(framing_line["billed_amount"]) == Decimal("520")

    after = client.get(f"/expense-reports/{report_id}/billing-proposal", headers=admin).json()
    assert Decimal(after["subtotal"]) == Decimal("0")

    assert client.put(f"/invoices/{invoice_id}/status", json={"status": "Sent"}, headers=crew).status_code == 403
    assert client.put(f"/invoices/{invoice_id}/status", json={"status": "Paid"}, headers=admin).status_code == 400
    sent = client.put(f"/invoices/{invoice_id}/status", json={"status": "Sent"}, headers=admin)
    assert sent.status_code == 200
    assert sent.json()["status"] == "Sent"

    listing = client.get("/invoices/?q=Maple", headers=crew).json()
    assert listing["total_count"] == 1
    assert listing["data"][0]["status"] == "Sent"


def test_proposal_overrides_follow_edit_rules():
    client = TestClient(app)
    admin = auth_headers(client, "admin@example.com")
    ctx = setup_budget(client, admin)
    project_id = ctx["project"]["id"]
    report_id = ctx["report"]["report"]["id"]
    framing_id = ctx["report"]["lines"][0]["id"]
    entry = client.post("/time-entries/", json={"project_id": project_id, "date": "2030-01-02", "hours": "10"}, headers=admin).json()
    client.post("/expense-reports/assignments", json={"time_entry_id": entry["id"], "budget_line_id": framing_id}, headers=admin)

    response = client.post(
        f"/expense-reports/{report_id}/billing-proposal",
        json={"overrides": [{"budget_line_id": framing_id, "hours_to_bill": "6"}]},
        headers=admin,
    )
    assert response.status_code == 200
    framing = response.json()["lines"][0]
    assert Decimal(framing["hours_to_bill"]) == Decimal("6")
    assert Decimal(framing["amount_to_bill"]) == Decimal("390")

    response = client.post(
        f"/expense-reports/{report_id}/billing-proposal",
        json={"overrides": [{"budget_line_id": framing_id, "amount_to_bill": "400"}]},
        headers=admin,
    )
    framing = response.json()["lines"][0]
    assert Decimal(framing["hours_to_bill"]) == Decimal("10")
    assert Decimal(framing["amount_to_bill"]) == Decimal("400")


def test_generation_without_billable_lines_is_400():
    client = TestClient(app)
    admin = auth_headers(client, "admin@example.com")
    ctx = setup_budget(client, admin)
    response = client.post(
        "/invoices/generate",
        json={
            "project_id": ctx["project"]["id"],
            "expense_report_id": ctx["report"]["report"]["id"],
            "customer_id": ctx["customer"]["id"],
            "items": [{"budget_line_id": ctx["report"]["lines"][0]["id"], "billed_labor_amount": "0"}],
        },
        headers=admin,
    )
    assert response.status_code == 400
    assert client.get("/invoices/", headers=admin).json()["total_count"] == 0


def test_missing_report_is_404_and_crew_is_403():
    client = TestClient(app)
    admin = auth_headers(client, "admin@example.com")
    crew = auth_headers(client, "crew@example.com")
    assert client.get("/expense-reports/999", headers=admin).status_code == 404
    assert client.get("/expense-reports/999", headers=crew).status_code == 403


def test_overdue_sweep_endpoint():
    client = TestClient(app)
    admin = auth_headers(client, "admin@example.com")
    ctx = setup_budget(client, admin)
    invoice_id = client.post(
        "/invoices/generate",
        json={
            "project_id": ctx["project"]["id"],
            "expense_report_id": ctx["report"]["report"]["id"],
            "customer_id": ctx["customer"]["id"],
            "items": [{"budget_line_id": ctx["report"]["lines"][0]["id"], "billed_hours": "1", "billed_labor_amount": "65"}],
        },
        headers=admin,
    ).json()["invoice_id"]
    client.put(f"/invoices/{invoice_id}/status", json={"status": "Sent"}, headers=admin)

    response = client.post("/invoices/overdue-sweep?as_of=2999-01-01", headers=admin)
    assert response.status_code == 200
    assert response.json() == {"updated_invoice_ids": [invoice_id]}
    assert client.get(f"/invoices/{invoice_id}", headers=admin).json()["status"] == "Overdue"
