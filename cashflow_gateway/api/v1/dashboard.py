"""GET /v1/businesses/{business_id}/dashboard - historical summary for a business"""

from datetime import date
from fastapi import APIRouter, Depends, Request

from cashflow_gateway.api.v1.schemas import (
    CategoryTotalSchema,
    DailyFlowSchema,
    DashboardMetricsSchema,
    DashboardResponse,
)
from cashflow_gateway.api.v1.snapshot import load_snapshot
from cashflow_gateway.api.dependencies import get_backend_client, get_request_id, get_settings
from cashflow_gateway.config import Settings
from cashflow_gateway.infrastructure.clients.backend import BackendClient
from cashflow_gateway.domain.aggregation import (
    compute_category_breakdown,
    compute_daily_timeline,
    compute_dashboard_metrics,
)
from cashflow_gateway.infrastructure.observability.metrics import dashboard_counter

router = APIRouter()


def get_today() -> date:
    """Reference date for the timeline window"""
    return date.today()


@router.get("/businesses/{business_id}/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    business_id: int,
    request: Request,
    backend_client: BackendClient = Depends(get_backend_client),
    app_settings: Settings = Depends(get_settings),
    today: date = Depends(get_today),
):
    """
    Summarize a business's history.

    Returns:
        Totals and current balance, top categories by amount, and a
        sampled daily income/expense timeline ending today
    """
    snapshot = await load_snapshot(backend_client, business_id, get_request_id(request))

    metrics = compute_dashboard_metrics(
        snapshot.transactions,
        snapshot.categories,
        snapshot.business.initial_balance,
    )
    categories = compute_category_breakdown(
        snapshot.transactions,
        snapshot.categories,
        limit=app_settings.category_breakdown_limit,
    )
    timeline = compute_daily_timeline(
        snapshot.transactions,
        snapshot.categories,
        end_date=today,
        days=app_settings.timeline_days,
        step=app_settings.timeline_step,
    )
    dashboard_counter.inc()

    return DashboardResponse(
        business_id=business_id,
        enterprise_name=snapshot.business.enterprise_name,
        metrics=DashboardMetricsSchema(
            total_income=float(metrics.total_income),
            total_expense=float(metrics.total_expense),
            net_profit=float(metrics.net_profit),
            current_balance=float(metrics.current_balance),
            transaction_count=metrics.transaction_count,
            income_count=metrics.income_count,
            expense_count=metrics.expense_count,
        ),
        categories=[
            CategoryTotalSchema(name=c.name, kind=c.kind, amount=float(c.amount))
            for c in categories
        ],
        timeline=[
            DailyFlowSchema(day=f.day, income=float(f.income), expense=float(f.expense))
            for f in timeline
        ],
    )
