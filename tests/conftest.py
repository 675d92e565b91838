"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from cashflow_gateway.api.main import create_app
from cashflow_gateway.api.dependencies import get_backend_client
from cashflow_gateway.api.v1.dashboard import get_today
from cashflow_gateway.domain.models import (
    Business,
    BusinessSnapshot,
    Category,
    Scenario,
    Transaction,
)

TODAY = date(2026, 10, 19)


class FakeBackendClient:
    """Stands in for BackendClient; returns a fixed snapshot or raises a fixed error"""

    def __init__(self, snapshot: BusinessSnapshot | None = None, error: Exception | None = None):
        self.snapshot = snapshot
        self.error = error
        self.requested: list[int] = []

    async def get_snapshot(self, business_id: int) -> BusinessSnapshot:
        self.requested.append(business_id)
        if self.error is not None:
            raise self.error
        return self.snapshot


@pytest.fixture
def categories() -> list[Category]:
    """Income and expense categories of business 1"""
    return [
        Category(id=10, business_id=1, name="Sales", kind="income"),
        Category(id=11, business_id=1, name="Rent", kind="expense"),
        Category(id=12, business_id=1, name="Supplies", kind="expense"),
    ]


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """History averaging 1000 income and 600 expense, plus one orphaned transaction"""
    return [
        Transaction(100, 1, 10, Decimal("900"), date(2026, 10, 1), "September sales"),
        Transaction(101, 1, 10, Decimal("1100"), date(2026, 10, 10), "October sales"),
        Transaction(102, 1, 11, Decimal("700"), date(2026, 10, 5), "Rent"),
        Transaction(103, 1, 12, Decimal("500"), date(2026, 10, 13), "Flour"),
        Transaction(104, 1, 99, Decimal("10000"), date(2026, 10, 13), "Unknown category"),
    ]


@pytest.fixture
def scenarios() -> list[Scenario]:
    return [
        Scenario(20, 1, "Optimistic", Decimal("1.2"), Decimal("0.9"), 0),
        Scenario(21, 1, "Pessimistic", Decimal("0.8"), Decimal("1.1"), 30),
    ]


@pytest.fixture
def snapshot(categories, sample_transactions, scenarios) -> BusinessSnapshot:
    return BusinessSnapshot(
        business=Business(id=1, enterprise_name="Panaderia Sol", initial_balance=Decimal("5000")),
        categories=categories,
        transactions=sample_transactions,
        scenarios=scenarios,
    )


@pytest.fixture
def backend(snapshot: BusinessSnapshot) -> FakeBackendClient:
    return FakeBackendClient(snapshot=snapshot)


@pytest.fixture
def client(backend: FakeBackendClient) -> TestClient:
    """Create FastAPI test client with a fake backend and a fixed date"""
    app = create_app()
    app.dependency_overrides[get_backend_client] = lambda: backend
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)
