from __future__ import annotations

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from flask import Flask

from src.payroll_system.payroll_system.core.enums import InsertOutcome
from src.payroll_system.payroll_system.core.exceptions import UpstreamUnavailable
from src.payroll_system.payroll_system.employees.model import Employee
from src.payroll_system.payroll_system.payroll.controller import register
from src.payroll_system.payroll_system.payroll.model import DepartmentSummary, PayrollReportRow, Period, PeriodSummary
from src.payroll_system.payroll_system.payroll.service import PayrollGenerator, PayrollQueryService


class FakeEmployees:
    def __init__(self, down=False):
        self.down = down

    def list_active(self):
        if self.down:
            raise UpstreamUnavailable("Database unavailable: connection refused")
        return [
            Employee(employee_id=1, full_name="Asha Rao", base_salary=Decimal("30000")),
            Employee(employee_id=2, full_name="Vikram Shah", base_salary=Decimal("20000")),
        ]


class FakeAttendance:
    def count_by_status(self, employee_id, period):
        return {"Present": 20, "Late": 1} if employee_id == 1 else {}

    def list_distinct_periods(self):
        return [Period(month=1, year=2026), Period(month=12, year=2025)]


class FakeLedger:
    def __init__(self):
        self.records = {}

    def exists(self, employee_id, month, year):
        return (employee_id, month, year) in self.records

    def insert(self, record):
        if record.key in self.records:
            return InsertOutcome.CONFLICT
        self.records[record.key] = record
        return InsertOutcome.CREATED

    def list_records(self, *, month=None, year=None):
        return [
            PayrollReportRow(record=r, full_name=f"Employee {r.employee_id}", designation="Engineer", department_name="Engineering")
            for r in self.records.values()
            if (month is None or r.month == month) and (year is None or r.year == year)
        ]

    def _selected(self, month, year):
        return [r for r in self.records.values() if (month is None or r.month == month) and (year is None or r.year == year)]

    def period_summaries(self, *, month=None, year=None):
        self.summary_filters = (month, year)
        selected = self._selected(month, year)
        return [
            PeriodSummary(
                month=month or 1,
                year=year or 2026,
                employee_count=len(selected),
                total_base_salary=sum((r.base_salary for r in selected), Decimal("0")),
                total_deduction=sum((r.total_deduction for r in selected), Decimal("0")),
                total_net_salary=sum((r.net_salary for r in selected), Decimal("0")),
            )
        ]

    def department_summaries(self, *, month=None, year=None):
        self.summary_filters = (month, year)
        selected = self._selected(month, year)
        return [
            DepartmentSummary(
                department_id=1,
                department_name="Engineering",
                month=month or 1,
                year=year or 2026,
                employee_count=len(selected),
                total_base_salary=sum((r.base_salary for r in selected), Decimal("0")),
                total_deduction=sum((r.total_deduction for r in selected), Decimal("0")),
                total_net_salary=sum((r.net_salary for r in selected), Decimal("0")),
            )
        ]


@pytest.fixture
def ledger():
    return FakeLedger()


def _client(ledger, *, employees=None):
    app = Flask(__name__)
    container = SimpleNamespace(
        payroll_generator=PayrollGenerator(employees or FakeEmployees(), FakeAttendance(), ledger),
        payroll_query_service=PayrollQueryService(ledger),
    )
    register(app, container)
    return app.test_client()


def test_generate_returns_counts(ledger):
    client = _client(ledger)

    resp = client.post("/api/payroll/generate", json={"month": "1", "year": 2026})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["generated_count"] == 2
    assert ledger.records[(1, 1, 2026)].late_deduction == Decimal("200")

    again = client.post("/api/payroll/generate", json={"month": 1, "year": 2026}).get_json()
    assert again["data"]["generated_count"] == 0
    assert again["data"]["skipped_count"] == 2


@pytest.mark.parametrize(
    "payload",
    [
        {"month": 13, "year": 2026},
        {"month": 0, "year": 2026},
        {"month": "--5", "year": 2026},
        {"month": "²", "year": 2026},
        {"year": 2026},
        {},
    ],
)
def test_generate_rejects_invalid_period(ledger, payload):
    resp = _client(ledger).post("/api/payroll/generate", json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert ledger.records == {}


def test_generate_accepts_form_data(ledger):
    resp = _client(ledger).post("/api/payroll/generate", data={"month": "1", "year": "2026"})

    assert resp.status_code == 200


def test_generate_reports_upstream_failure(ledger):
    resp = _client(ledger, employees=FakeEmployees(down=True)).post(
        "/api/payroll/generate", json={"month": 1, "year": 2026}
    )

    assert resp.status_code == 503
    assert "unavailable" in resp.get_json()["error"]


def test_backfill(ledger):
    resp = _client(ledger).post("/api/payroll/backfill")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["data"]["periods"] == 2
    assert body["data"]["generated_count"] == 4
    assert [r["month"] for r in body["data"]["results"]] == [1, 12]


def test_list_filters_by_period(ledger):
    client = _client(ledger)
    client.post("/api/payroll/backfill")

    body = client.get("/api/payroll?month=12&year=2025").get_json()

    assert body["success"] is True
    assert {row["employee_id"] for row in body["data"]} == {1, 2}
    assert all(row["month"] == 12 for row in body["data"])
    assert client.get("/api/payroll?month=13").status_code == 400


def test_summary(ledger):
    client = _client(ledger)
    client.post("/api/payroll/generate", json={"month": 1, "year": 2026})

    body = client.get("/api/payroll/summary?year=2026").get_json()

    assert body["data"][0]["employee_count"] == 2
    assert body["data"][0]["total_net_salary"] == "49800.00"
    assert client.get("/api/payroll/summary?year=abc").status_code == 400


@pytest.mark.parametrize("body", [[1, 2026], "1/2026", 7])
def test_generate_rejects_json_that_is_not_an_object(ledger, body):
    resp = _client(ledger).post("/api/payroll/generate", json=body)

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "error": "Request body must be a JSON object"}
    assert ledger.records == {}


@pytest.mark.parametrize("query", ["month=--5", "month=%C2%B2", "year=2026.0"])
def test_list_rejects_malformed_filters(ledger, query):
    resp = _client(ledger).get(f"/api/payroll?{query}")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_list_includes_designation_and_department(ledger):
    client = _client(ledger)
    client.post("/api/payroll/generate", json={"month": 1, "year": 2026})

    row = client.get("/api/payroll?month=1&year=2026").get_json()["data"][0]

    assert row["designation"] == "Engineer"
    assert row["department_name"] == "Engineering"


def test_summary_filters_by_month(ledger):
    client = _client(ledger)
    client.post("/api/payroll/backfill")

    body = client.get("/api/payroll/summary?month=12&year=2025").get_json()

    assert ledger.summary_filters == (12, 2025)
    assert body["data"][0]["month"] == 12
    assert body["data"][0]["employee_count"] == 2
    assert client.get("/api/payroll/summary?month=0").status_code == 400


def test_department_summary(ledger):
    client = _client(ledger)
    client.post("/api/payroll/generate", json={"month": 1, "year": 2026})

    resp = client.get("/api/payroll/department-summary?month=1&year=2026")

    body = resp.get_json()
    assert resp.status_code == 200
    assert ledger.summary_filters == (1, 2026)
    assert body["data"][0]["department_name"] == "Engineering"
    assert body["data"][0]["total_net_salary"] == "49800.00"
    assert client.get("/api/payroll/department-summary?year=abc").status_code == 400


def test_backfill_reports_invalid_periods_without_failing(ledger):
    class AttendanceWithZeroDate(FakeAttendance):
        def list_distinct_periods(self):
            return [*super().list_distinct_periods(), Period(month=0, year=0)]

    app = Flask(__name__)
    container = SimpleNamespace(
        payroll_generator=PayrollGenerator(FakeEmployees(), AttendanceWithZeroDate(), ledger),
        payroll_query_service=PayrollQueryService(ledger),
    )
    register(app, container)

    resp = app.test_client().post("/api/payroll/backfill")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["data"]["periods"] == 2
    assert body["data"]["invalid_periods"] == [{"month": 0, "year": 0}]
