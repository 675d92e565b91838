"""Unit tests for the backend REST client"""

import asyncio
import httpx
import pytest
from datetime import date
from decimal import Decimal
from cashflow_gateway.infrastructure.clients.backend import BackendClient
from cashflow_gateway.domain.exceptions import (
    BackendAPIError,
    BusinessNotFoundError,
    InvalidRecordError,
)

ROUTES = {
    "/api/businesses/1": {
        "success": True,
        "data": {"id": 1, "enterprise_name": "Panaderia Sol", "user_id": 7, "business_type": "retail", "initial_balance": 5000.5},
    },
    "/api/categories/business/1": {
        "success": True,
        "data": [
            {"id": 10, "business_id": 1, "name": "Sales", "type": "income"},
            {"id": 11, "business_id": 1, "name": "Rent", "type": "expense", "is_active": False},
        ],
    },
    "/api/transaction/business/1": {
        "success": True,
        "data": [
            {"id": 100, "business_id": 1, "category_id": 10, "amount": 99.99, "date": "2026-08-09T00:00:00.000Z"},
            {"id": 101, "business_id": 1, "category_id": 11, "amount": "10", "date": "2026-08-10", "description": "Rent"},
        ],
    },
    "/api/scenario/business/1": {
        "success": True,
        "data": [
            {"id": 20, "business_id": 1, "name": "Optimistic", "income_multiplier": 1.2, "expense_multiplier": 0.9, "payment_delay_days": 15},
        ],
    },
}


def _client(routes: dict, seen: list | None = None, **kwargs) -> BackendClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.url.path not in routes:
            return httpx.Response(404, json={"success": False, "message": "not found"})
        payload = routes[request.url.path]
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, json=payload)

    return BackendClient(
        base_url="http://backend.test/api",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


async def test_get_snapshot_parses_all_records():
    """Test snapshot fetch maps backend fields onto domain records"""
    snapshot = await _client(ROUTES, token="").get_snapshot(1)

    assert snapshot.business.enterprise_name == "Panaderia Sol"
    assert snapshot.business.initial_balance == Decimal("5000.5")
    assert [c.kind for c in snapshot.categories] == ["income"]  # inactive category dropped
    assert snapshot.transactions[0].amount == Decimal("99.99")
    assert snapshot.transactions[0].date == date(2026, 8, 9)
    assert snapshot.transactions[1].description == "Rent"
    assert snapshot.scenarios[0].income_multiplier == Decimal("1.2")
    assert snapshot.scenarios[0].payment_delay_days == 15


async def test_bearer_token_is_sent():
    seen: list[httpx.Request] = []

    await _client(ROUTES, seen=seen, token="secret").get_categories(1)

    assert seen[0].headers["Authorization"] == "Bearer secret"


async def test_no_token_no_authorization_header():
    seen: list[httpx.Request] = []

    await _client(ROUTES, seen=seen, token="").get_scenarios(1)

    assert "Authorization" not in seen[0].headers


async def test_business_not_found():
    with pytest.raises(BusinessNotFoundError):
        await _client(ROUTES, token="").get_business(2)


async def test_server_error_raises_backend_error():
    routes = dict(ROUTES)
    routes["/api/transaction/business/1"] = httpx.Response(500, json={"success": False})

    with pytest.raises(BackendAPIError, match="500"):
        await _client(routes, token="").get_snapshot(1)


async def test_unsuccessful_envelope_raises_backend_error():
    routes = dict(ROUTES)
    routes["/api/scenario/business/1"] = {"success": False, "message": "token expired"}

    with pytest.raises(BackendAPIError, match="token expired"):
        await _client(routes, token="").get_scenarios(1)


async def test_malformed_record_raises_invalid_record():
    routes = dict(ROUTES)
    routes["/api/transaction/business/1"] = {
        "success": True,
        "data": [{"id": 1, "business_id": 1, "category_id": 10, "amount": -5, "date": "2026-01-01"}],
    }

    with pytest.raises(InvalidRecordError):
        await _client(routes, token="").get_transactions(1)


async def test_unknown_category_type_raises_invalid_record():
    routes = dict(ROUTES)
    routes["/api/categories/business/1"] = {
        "success": True,
        "data": [{"id": 1, "business_id": 1, "name": "Transfers", "type": "transfer"}],
    }

    with pytest.raises(InvalidRecordError):
        await _client(routes, token="").get_categories(1)


async def test_timeout_raises_backend_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = BackendClient(base_url="http://backend.test/api", timeout=1.0, token="", transport=httpx.MockTransport(handler))

    with pytest.raises(BackendAPIError, match="timeout"):
        await client.get_business(1)


async def test_empty_list_route_404_reads_as_no_records():
    """Test a 404 on a list route means no records, not an unknown business"""
    routes = dict(ROUTES)
    routes["/api/transaction/business/1"] = httpx.Response(
        404, json={"success": False, "message": "No transactions found"}
    )

    snapshot = await _client(routes, token="").get_snapshot(1)

    assert snapshot.business.id == 1
    assert snapshot.transactions == []
    assert len(snapshot.scenarios) == 1


async def test_snapshot_failure_cancels_other_requests():
    """Test a fast failure cancels the slower sibling requests before returning"""
    cancelled: list[str] = []
    completed: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api/transaction/business/1":
            return httpx.Response(500, json={"success": False})
        try:
            await asyncio.sleep(0.05)
        except asyncio.CancelledError:
            cancelled.append(path)
            raise
        completed.append(path)
        return httpx.Response(200, json=ROUTES[path])

    client = BackendClient(base_url="http://backend.test/api", timeout=1.0, token="", transport=httpx.MockTransport(handler))

    with pytest.raises(BackendAPIError, match="500"):
        await client.get_snapshot(1)

    pending = [t for t in asyncio.all_tasks() if t is not asyncio.current_task() and not t.done()]
    assert pending == []
    assert sorted(cancelled) == [
        "/api/businesses/1",
        "/api/categories/business/1",
        "/api/scenario/business/1",
    ]

    await asyncio.sleep(0.1)
    assert completed == []
