"""GET /v1/businesses/{business_id}/projection and /averages - cash flow projection endpoints"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cashflow_gateway.api.v1.schemas import (
    AveragesResponse,
    AveragesSchema,
    MonthlyProjectionSchema,
    ProjectionResponse,
    ProjectionSummarySchema,
    ScenarioSchema,
)
from cashflow_gateway.api.v1.snapshot import load_snapshot
from cashflow_gateway.api.dependencies import get_backend_client, get_request_id
from cashflow_gateway.config import settings
from cashflow_gateway.infrastructure.clients.backend import BackendClient
from cashflow_gateway.domain.aggregation import compute_historical_averages
from cashflow_gateway.domain.exceptions import ScenarioNotFoundError
from cashflow_gateway.domain.models import HistoricalAverages, Scenario
from cashflow_gateway.domain.projection import project_cashflow, summarize_projection
from cashflow_gateway.infrastructure.observability.metrics import record_projection
from cashflow_gateway.infrastructure.observability.logging import log_projection

router = APIRouter()


def _averages_schema(averages: HistoricalAverages) -> AveragesSchema:
    return AveragesSchema(
        avg_income=float(averages.avg_income),
        avg_expense=float(averages.avg_expense),
        income_count=averages.income_count,
        expense_count=averages.expense_count,
    )


def _select_scenario(scenarios: list[Scenario], scenario_id: Optional[int]) -> Optional[Scenario]:
    if scenario_id is None:
        return None
    for scenario in scenarios:
        if scenario.id == scenario_id:
            return scenario
    raise ScenarioNotFoundError(f"Scenario {scenario_id} not found")


@router.get("/businesses/{business_id}/averages", response_model=AveragesResponse)
async def get_averages(
    business_id: int,
    request: Request,
    backend_client: BackendClient = Depends(get_backend_client),
):
    """Average income and expense per transaction for a business"""
    snapshot = await load_snapshot(backend_client, business_id, get_request_id(request))
    averages = compute_historical_averages(snapshot.transactions, snapshot.categories)
    return AveragesResponse(business_id=business_id, averages=_averages_schema(averages))


@router.get("/businesses/{business_id}/projection", response_model=ProjectionResponse)
async def get_projection(
    business_id: int,
    request: Request,
    scenario_id: Optional[int] = Query(None, description="Scenario to apply; omit for no projection"),
    months: int = Query(
        settings.default_horizon_months,
        ge=1,
        le=settings.max_horizon_months,
        description="Projection horizon in months",
    ),
    backend_client: BackendClient = Depends(get_backend_client),
):
    """
    Project monthly cash flow for a business under one of its scenarios.

    Flow:
    1. Fetch business, categories, transactions and scenarios from the backend
    2. Average historical income and expense per transaction
    3. Apply the scenario multipliers month by month from the initial balance
    """
    start_time = time.time()
    request_id = get_request_id(request)

    snapshot = await load_snapshot(backend_client, business_id, request_id)

    try:
        scenario = _select_scenario(snapshot.scenarios, scenario_id)
    except ScenarioNotFoundError as e:
        logging.warning(f"Scenario lookup failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    starting_balance = snapshot.business.initial_balance
    averages = compute_historical_averages(snapshot.transactions, snapshot.categories)
    projections = project_cashflow(averages, scenario, starting_balance, months)
    summary = summarize_projection(projections, starting_balance)

    duration_ms = (time.time() - start_time) * 1000
    record_projection(scenario is not None, months)
    log_projection(request_id, business_id, scenario_id, months, summary.final_balance, duration_ms)

    return ProjectionResponse(
        business_id=business_id,
        starting_balance=float(starting_balance),
        months=months,
        scenario=(
            ScenarioSchema(
                scenario_id=scenario.id,
                name=scenario.name,
                income_multiplier=float(scenario.income_multiplier),
                expense_multiplier=float(scenario.expense_multiplier),
                payment_delay_days=scenario.payment_delay_days,
            )
            if scenario
            else None
        ),
        averages=_averages_schema(averages),
        projections=[
            MonthlyProjectionSchema(
                month=p.month,
                income=p.income,
                expense=p.expense,
                net=p.net,
                balance=p.balance,
            )
            for p in projections
        ],
        summary=ProjectionSummarySchema(
            total_income=summary.total_income,
            total_expense=summary.total_expense,
            final_balance=summary.final_balance,
        ),
    )
