"""Backend REST API client for fetching a business's records"""

import asyncio
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

import httpx

from cashflow_gateway.config import settings
from cashflow_gateway.domain.exceptions import (
    BackendAPIError,
    BusinessNotFoundError,
    InvalidRecordError,
)
from cashflow_gateway.domain.models import (
    CATEGORY_KINDS,
    Business,
    BusinessSnapshot,
    Category,
    Scenario,
    Transaction,
)
from cashflow_gateway.utils.date_utils import parse_iso_date


def _decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"not a number: {value!r}") from e


def _is_active(record: Dict[str, Any]) -> bool:
    return record.get("is_active", True) is not False


def parse_business(data: Dict[str, Any]) -> Business:
    return Business(
        id=int(data["id"]),
        enterprise_name=data["enterprise_name"],
        initial_balance=_decimal(data.get("initial_balance") or 0),
        business_type=data.get("business_type"),
    )


def parse_category(data: Dict[str, Any]) -> Category:
    kind = data["type"]
    if kind not in CATEGORY_KINDS:
        raise ValueError(f"unknown category type: {kind!r}")
    return Category(
        id=int(data["id"]),
        business_id=int(data["business_id"]),
        name=data["name"],
        kind=kind,
    )


def parse_transaction(data: Dict[str, Any]) -> Transaction:
    amount = _decimal(data["amount"])
    if amount < 0:
        raise ValueError(f"negative amount: {amount}")
    return Transaction(
        id=int(data["id"]),
        business_id=int(data["business_id"]),
        category_id=int(data["category_id"]),
        amount=amount,
        date=parse_iso_date(data["date"]),
        description=data.get("description"),
    )


def parse_scenario(data: Dict[str, Any]) -> Scenario:
    income_multiplier = _decimal(data["income_multiplier"])
    expense_multiplier = _decimal(data["expense_multiplier"])
    if income_multiplier < 0 or expense_multiplier < 0:
        raise ValueError("multipliers must be non-negative")
    return Scenario(
        id=int(data["id"]),
        business_id=int(data["business_id"]),
        name=data["name"],
        income_multiplier=income_multiplier,
        expense_multiplier=expense_multiplier,
        payment_delay_days=int(data.get("payment_delay_days") or 0),
    )


class BackendClient:
    """Read-only client for the business records REST API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.backend_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.token = token if token is not None else settings.backend_api_token
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=headers,
            transport=self.transport,
        )

    async def _get_data(self, client: httpx.AsyncClient, path: str) -> Any:
        """
        GET a route and unwrap its {success, data} envelope.

        Returns:
            The envelope's data, or None when the backend answers 404

        Raises:
            BackendAPIError: On timeout, HTTP errors, or an unsuccessful envelope
        """
        try:
            response = await client.get(path)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as e:
            raise BackendAPIError(f"Backend API timeout after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise BackendAPIError(f"Backend API error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise BackendAPIError(f"Backend API unreachable: {e}") from e
        except ValueError as e:
            raise BackendAPIError(f"Backend API returned invalid JSON: {e}") from e

        if not isinstance(body, dict) or not body.get("success") or "data" not in body:
            message = body.get("message") if isinstance(body, dict) else None
            raise BackendAPIError(f"Backend API rejected {path}: {message or 'no data'}")
        return body["data"]

    async def _get_records(self, client: httpx.AsyncClient, path: str, parse) -> List[Any]:
        data = await self._get_data(client, path)
        # The backend answers 404 on list routes when a business has no records yet
        if data is None:
            return []
        if not isinstance(data, list):
            raise InvalidRecordError(f"Expected a list from {path}")
        try:
            return [parse(item) for item in data if _is_active(item)]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidRecordError(f"Invalid record from {path}: {e}") from e

    async def get_business(self, business_id: int) -> Business:
        async with self._client() as client:
            return await self._fetch_business(client, business_id)

    async def _fetch_business(self, client: httpx.AsyncClient, business_id: int) -> Business:
        # Single-record read; the web client only lists businesses per user
        data = await self._get_data(client, f"/businesses/{business_id}")
        # Some deployments wrap single records in a one-element list
        if isinstance(data, list):
            data = data[0] if data else None
        if data is None:
            raise BusinessNotFoundError(f"Business {business_id} not found")
        try:
            return parse_business(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidRecordError(f"Invalid business record: {e}") from e

    async def get_categories(self, business_id: int) -> List[Category]:
        async with self._client() as client:
            return await self._get_records(client, f"/categories/business/{business_id}", parse_category)

    async def get_transactions(self, business_id: int) -> List[Transaction]:
        async with self._client() as client:
            return await self._get_records(client, f"/transaction/business/{business_id}", parse_transaction)

    async def get_scenarios(self, business_id: int) -> List[Scenario]:
        async with self._client() as client:
            return await self._get_records(client, f"/scenario/business/{business_id}", parse_scenario)

    async def get_snapshot(self, business_id: int) -> BusinessSnapshot:
        """
        Fetch the business and all its records concurrently over one connection pool.

        If any request fails, the others are cancelled and awaited before the
        pool is closed.

        Raises:
            BusinessNotFoundError: If the business does not exist
            BackendAPIError: On any backend failure
        """
        async with self._client() as client:
            tasks = [
                asyncio.ensure_future(self._fetch_business(client, business_id)),
                asyncio.ensure_future(self._get_records(client, f"/categories/business/{business_id}", parse_category)),
                asyncio.ensure_future(self._get_records(client, f"/transaction/business/{business_id}", parse_transaction)),
                asyncio.ensure_future(self._get_records(client, f"/scenario/business/{business_id}", parse_scenario)),
            ]
            try:
                business, categories, transactions, scenarios = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        return BusinessSnapshot(
            business=business,
            categories=categories,
            transactions=transactions,
            scenarios=scenarios,
        )
