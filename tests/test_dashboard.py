"""Tests for the financial dashboard and transactions."""

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from propdash.models.enums import PropertyStatus, TransactionType
from propdash.models.property import Property
from propdash.models.transaction import Transaction
from propdash.schemas.finance import FinancialSummary
from propdash.services.finance import (
    calculate_financial_summary,
    dashboard_insights,
    monthly_chart_series,
)

REFERENCE = date(2024, 3, 20)


def _transaction(kind: TransactionType, amount: str, day: date) -> Transaction:
    return Transaction(type=kind, amount=Decimal(amount), transaction_date=day)


@pytest.fixture
def portfolio() -> list[Property]:
    return [
        Property(display_name="A", status=PropertyStatus.RENTED, purchase_price=Decimal("100000")),
        Property(display_name="B", status=PropertyStatus.RENTED, purchase_price=Decimal("150000")),
        Property(display_name="C", status=PropertyStatus.VACANT, purchase_price=Decimal("150000")),
        Property(display_name="D", status=PropertyStatus.MAINTENANCE, purchase_price=Decimal("0")),
    ]


@pytest.fixture
def transactions() -> list[Transaction]:
    return [
        _transaction(TransactionType.INCOME, "3000", date(2024, 3, 5)),
        _transaction(TransactionType.INCOME, "2000", date(2024, 3, 6)),
        _transaction(TransactionType.EXPENSE, "1000", date(2024, 3, 15)),
        _transaction(TransactionType.INCOME, "2500", date(2024, 2, 5)),
        _transaction(TransactionType.EXPENSE, "4000", date(2024, 1, 9)),
        _transaction(TransactionType.INCOME, "9999", date(2023, 3, 5)),
    ]


class TestFinancialSummary:
    """Unit tests for the monthly summary."""

    def test_summary(self, portfolio, transactions) -> None:
        summary = calculate_financial_summary(portfolio, transactions, REFERENCE)

        assert summary.total_income == Decimal("5000")
        assert summary.total_expenses == Decimal("1000")
        assert summary.net_income == Decimal("4000")
        assert summary.total_properties == 4
        assert summary.rented_properties == 2
        assert summary.occupancy_rate == Decimal("50")
        assert summary.monthly_roi == Decimal("1")

    def test_empty_portfolio(self) -> None:
        summary = calculate_financial_summary([], [], REFERENCE)
        assert summary.occupancy_rate == Decimal("0")
        assert summary.monthly_roi == Decimal("0")


class TestChartSeries:
    """Unit tests for monthly chart data."""

    def test_six_months_oldest_first(self, transactions) -> None:
        series = monthly_chart_series(transactions, REFERENCE)

        assert [p.month for p in series.points] == [
            "2023-10",
            "2023-11",
            "2023-12",
            "2024-01",
            "2024-02",
            "2024-03",
        ]
        january = series.points[3]
        assert january.net == Decimal("-4000")
        assert january.loss == Decimal("4000")
        assert january.profit == Decimal("0")
        march = series.points[5]
        assert march.profit == Decimal("4000")
        assert series.total_income == Decimal("7500")
        assert series.total_expenses == Decimal("5000")

    def test_window_crossing_year(self) -> None:
        series = monthly_chart_series([], date(2024, 2, 1), months=3)
        assert [p.month for p in series.points] == ["2023-12", "2024-01", "2024-02"]


class TestDashboardInsights:
    def test_good_month(self) -> None:
        summary = FinancialSummary(
            total_income=Decimal("5000"),
            total_expenses=Decimal("1000"),
            net_income=Decimal("4000"),
            occupancy_rate=Decimal("90"),
            total_properties=10,
            rented_properties=9,
            monthly_roi=Decimal("1.5"),
        )
        assert dashboard_insights(summary) == [
            "Monthly ROI of 1.50% is above the market average",
            "Great occupancy: 90.0% of properties rented",
            "Positive cash flow this month",
        ]

    def test_weak_month(self) -> None:
        summary = FinancialSummary(
            total_income=Decimal("0"),
            total_expenses=Decimal("300"),
            net_income=Decimal("-300"),
            occupancy_rate=Decimal("25"),
            total_properties=4,
            rented_properties=1,
            monthly_roi=Decimal("-0.1"),
        )
        messages = dashboard_insights(summary)
        assert messages[1] == "Room to improve occupancy: 25.0% of properties rented"
        assert messages[2] == "Watch the cash flow this month"


class TestDashboardEndpoints:
    """Tests for transaction and dashboard API endpoints."""

    def _seed(self, client: TestClient) -> None:
        property_id = client.post(
            "/api/properties/",
            json={"display_name": "Flat", "status": "rented", "purchase_price": "200000"},
        ).json()["id"]
        client.post("/api/properties/", json={"display_name": "Empty", "status": "vacant"})
        client.post(
            "/api/transactions/",
            json={
                "type": "income",
                "amount": "2000",
                "transaction_date": "2024-03-05",
                "property_id": property_id,
            },
        )
        client.post(
            "/api/transactions/",
            json={"type": "expense", "amount": "500", "transaction_date": "2024-03-12"},
        )

    def test_create_transaction(self, client: TestClient) -> None:
        response = client.post(
            "/api/transactions/",
            json={"type": "income", "amount": "1500.50", "transaction_date": "2024-03-01"},
        )
        assert response.status_code == 201
        assert Decimal(response.json()["amount"]) == Decimal("1500.50")

    def test_transaction_amount_must_be_positive(self, client: TestClient) -> None:
        response = client.post(
            "/api/transactions/",
            json={"type": "expense", "amount": "-5", "transaction_date": "2024-03-01"},
        )
        assert response.status_code == 422

    def test_transaction_unknown_property(self, client: TestClient) -> None:
        response = client.post(
            "/api/transactions/",
            json={
                "type": "income",
                "amount": "10",
                "transaction_date": "2024-03-01",
                "property_id": 99999,
            },
        )
        assert response.status_code == 404

    def test_list_and_delete_transactions(self, client: TestClient) -> None:
        self._seed(client)

        march = client.get(
            "/api/transactions/", params={"start": "2024-03-10", "end": "2024-03-31"}
        ).json()
        assert len(march) == 1
        assert march[0]["type"] == "expense"

        assert client.delete(f"/api/transactions/{march[0]['id']}").status_code == 204
        assert client.delete(f"/api/transactions/{march[0]['id']}").status_code == 404
        assert len(client.get("/api/transactions/").json()) == 1

    def test_summary(self, client: TestClient) -> None:
        self._seed(client)

        response = client.get("/api/dashboard/summary", params={"reference_date": "2024-03-31"})

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["net_income"]) == Decimal("1500")
        assert Decimal(data["occupancy_rate"]) == Decimal("50")
        assert data["rented_properties"] == 1
        assert Decimal(data["monthly_roi"]) == Decimal("0.75")

    def test_chart(self, client: TestClient) -> None:
        self._seed(client)

        data = client.get(
            "/api/dashboard/chart", params={"reference_date": "2024-03-31", "months": 2}
        ).json()

        assert [p["month"] for p in data["points"]] == ["2024-02", "2024-03"]
        assert Decimal(data["points"][1]["net"]) == Decimal("1500")

    def test_insights(self, client: TestClient) -> None:
        self._seed(client)

        messages = client.get(
            "/api/dashboard/insights", params={"reference_date": "2024-03-31"}
        ).json()

        assert messages[2] == "Positive cash flow this month"
