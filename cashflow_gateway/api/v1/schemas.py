"""Pydantic schemas for API response validation"""

from pydantic import BaseModel
from datetime import date
from typing import List, Optional


class AveragesSchema(BaseModel):
    """Historical per-transaction averages"""

    avg_income: float
    avg_expense: float
    income_count: int
    expense_count: int


class AveragesResponse(BaseModel):
    """Response for GET /v1/businesses/{business_id}/averages"""

    business_id: int
    averages: AveragesSchema


class ScenarioSchema(BaseModel):
    """Scenario applied to a projection"""

    scenario_id: int
    name: str
    income_multiplier: float
    expense_multiplier: float
    payment_delay_days: int


class MonthlyProjectionSchema(BaseModel):
    """Single month in a projection"""

    month: int
    income: int
    expense: int
    net: int
    balance: int


class ProjectionSummarySchema(BaseModel):
    """Totals over the projection horizon"""

    total_income: int
    total_expense: int
    final_balance: int


class ProjectionResponse(BaseModel):
    """Response for GET /v1/businesses/{business_id}/projection"""

    business_id: int
    starting_balance: float
    months: int
    scenario: Optional[ScenarioSchema] = None
    averages: AveragesSchema
    projections: List[MonthlyProjectionSchema]
    summary: ProjectionSummarySchema


class DashboardMetricsSchema(BaseModel):
    """Headline dashboard figures"""

    total_income: float
    total_expense: float
    net_profit: float
    current_balance: float
    transaction_count: int
    income_count: int
    expense_count: int


class CategoryTotalSchema(BaseModel):
    """Amount accumulated under one category"""

    name: str
    kind: str
    amount: float


class DailyFlowSchema(BaseModel):
    """Income and expense on one day"""

    day: date
    income: float
    expense: float


class DashboardResponse(BaseModel):
    """Response for GET /v1/businesses/{business_id}/dashboard"""

    business_id: int
    enterprise_name: str
    metrics: DashboardMetricsSchema
    categories: List[CategoryTotalSchema]
    timeline: List[DailyFlowSchema]
