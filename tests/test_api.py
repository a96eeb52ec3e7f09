"""Tests for the API endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from aupay.calculators.fte import FteConstants


def test_health(client: TestClient) -> None:
    """GET /health returns ok status."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_financial_years(client: TestClient) -> None:
    data = client.get("/financial-years").json()
    assert data["resident"][0] == "2019-20"
    assert data["resident"][-1] == "2025-26"
    assert data["help"] == ["2023-24", "2024-25"]


class TestTaxEndpoints:
    def test_tax(self, client: TestClient) -> None:
        response = client.post("/tax", json={"income": 100000, "financial_year": "2024-25"})
        assert response.status_code == 200
        data = response.json()
        assert data["total_tax"] == 20788.0
        assert data["effective_rate"] == 20.79
        assert data["applied_financial_year"] == "2024-25"
        assert len(data["breakdown"]) == 3

    def test_tax_reports_fallback_year(self, client: TestClient) -> None:
        data = client.post("/tax", json={"income": 100000, "financial_year": "2030-31"}).json()
        assert data["financial_year"] == "2030-31"
        assert data["applied_financial_year"] == "2025-26"

    def test_tax_negative_income(self, client: TestClient) -> None:
        response = client.post("/tax", json={"income": -1})
        assert response.status_code == 422

    def test_tax_bad_year_key(self, client: TestClient) -> None:
        response = client.post("/tax", json={"income": 1000, "financial_year": "2024"})
        assert response.status_code == 400
        assert "Invalid financial year" in response.json()["error"]

    def test_tax_for_period(self, client: TestClient) -> None:
        response = client.post("/tax/period", json={
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
            "annual_salary": 150000,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["total_tax"] == pytest.approx(28181.73, abs=0.01)
        assert [s["financial_year"] for s in data["segments"]] == ["2023-24", "2024-25"]
        assert [s["days"] for s in data["segments"]] == [182, 184]
        assert sum(s["tax"] for s in data["segments"]) == pytest.approx(data["total_tax"])

    def test_tax_for_period_end_before_start(self, client: TestClient) -> None:
        response = client.post("/tax/period", json={
            "start_date": "2024-12-31",
            "end_date": "2024-01-01",
            "annual_salary": 150000,
        })
        assert response.status_code == 400
        assert "error" in response.json()


class TestHelpEndpoint:
    def test_help(self, client: TestClient) -> None:
        data = client.post(
            "/help", json={"taxable_income": 100000, "financial_year": "2024-25"}
        ).json()
        assert data["repayment_income"] == 100000.0
        assert data["repayment_rate"] == 0.06
        assert data["annual_repayment"] == 6000.0

    def test_help_with_super_guarantee(self, client: TestClient) -> None:
        """$80,000 plus 11.5% SG = $89,200 repayment income, in the 5% tier."""
        data = client.post("/help", json={
            "taxable_income": 80000,
            "include_super_guarantee": True,
            "financial_year": "2024-25",
        }).json()
        assert data["repayment_income"] == 89200.0
        assert data["annual_repayment"] == pytest.approx(4460.0)


class TestFteEndpoint:
    def test_fte_with_working_days(self, client: TestClient) -> None:
        response = client.post("/fte", json={
            "rate": 1000,
            "start_date": "2024-07-01",
            "end_date": "2024-12-31",
            "working_days": 110,
            "state": "NSW",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["annualised_contractor_cost"] == 220000.0
        assert data["multiplier"] == 1.206
        assert data["payg"] is None

    def test_fte_counts_working_days(self, client: TestClient) -> None:
        response = client.post("/fte", json={
            "rate": 1000,
            "start_date": "2024-12-23",
            "end_date": "2024-12-31",
            "state": "NSW",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["effective_days"] == 5
        assert data["gross_contractor_ex_gst"] == 5000.0

    def test_fte_with_tax_estimate(self, app: FastAPI, client: TestClient) -> None:
        app.state.fte_constants = FteConstants(
            sg_rate="0.10", workers_comp_rate="0", leave_loading_rate="0", payroll_tax_rates={}
        )
        data = client.post("/fte", json={
            "rate": 1000,
            "start_date": "2024-07-01",
            "end_date": "2025-06-30",
            "working_days": 220,
            "state": "QLD",
            "include_tax_estimate": True,
        }).json()
        assert data["base_salary"] == 200000.0
        assert data["payg"] == 56138.0
        assert data["medicare"] == 4000.0
        assert data["net_take_home"] == 139862.0

    def test_fte_no_chargeable_days(self, client: TestClient) -> None:
        response = client.post("/fte", json={
            "rate": 1000,
            "start_date": "2024-07-01",
            "end_date": "2024-07-31",
            "working_days": 10,
            "holiday_days": 10,
            "state": "NSW",
        })
        assert response.status_code == 400
        assert "chargeable" in response.json()["error"]

    def test_fte_unknown_state(self, client: TestClient) -> None:
        response = client.post("/fte", json={
            "rate": 1000,
            "start_date": "2024-07-01",
            "end_date": "2024-07-31",
            "working_days": 10,
            "state": "NZ",
        })
        assert response.status_code == 422

    def test_fte_constants(self, client: TestClient) -> None:
        data = client.get("/fte/constants").json()
        assert data["sg_rate"] == 0.115
        assert data["payroll_tax_rates"]["NSW"] == 0.0545
        assert data["chargeable_days"] == 220


class TestPayEndpoint:
    def test_pay_with_working_days(self, client: TestClient) -> None:
        data = client.post("/pay", json={
            "daily_rate": 800,
            "working_days": 20,
            "tax_rate": 0.30,
            "super_rate": 0.115,
            "hecs_rate": 0.02,
        }).json()
        assert data["income_ex_gst"] == 16000.0
        assert data["gst_amount"] == 1600.0
        assert data["income_inc_gst"] == 17600.0
        assert data["net_amount"] == 9040.0

    def test_pay_counts_working_days(self, client: TestClient) -> None:
        data = client.post("/pay", json={
            "daily_rate": 800,
            "gst_rate": 0,
            "tax_rate": 0.30,
            "start_date": "2024-12-23",
            "end_date": "2024-12-31",
            "state": "VIC",
        }).json()
        assert data["working_days"] == 5
        assert data["income_ex_gst"] == 4000.0
        assert data["gst_amount"] == 0.0

    def test_pay_without_days_or_range(self, client: TestClient) -> None:
        response = client.post("/pay", json={"daily_rate": 800, "tax_rate": 0.30})
        assert response.status_code == 400


def test_working_days(client: TestClient) -> None:
    response = client.get(
        "/working-days",
        params={"start_date": "2024-11-04", "end_date": "2024-11-08", "state": "VIC"},
    )
    assert response.status_code == 200
    assert response.json()["working_days"] == 4
