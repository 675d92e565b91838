"""Scenario-based cash flow projection"""

from decimal import ROUND_FLOOR, Decimal
from typing import List, Optional

from cashflow_gateway.domain.models import (
    HistoricalAverages,
    MonthlyProjection,
    ProjectionSummary,
    Scenario,
)

# Horizons offered to users when picking a projection length
ALLOWED_HORIZONS = (3, 6, 12, 24)

HALF = Decimal("0.5")


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves towards positive infinity (2.5 -> 3, -2.5 -> -2)"""
    return int((value + HALF).to_integral_value(rounding=ROUND_FLOOR))


def project_cashflow(
    averages: HistoricalAverages,
    scenario: Optional[Scenario],
    starting_balance: Decimal,
    months: int,
) -> List[MonthlyProjection]:
    """
    Project monthly income, expense and running balance under a scenario.

    Each month applies the scenario multipliers to the historical averages.
    Income and expense are rounded first and net is taken from the rounded
    values; the running balance accumulates those nets and is rounded on
    output only.

    Args:
        averages: Historical per-transaction averages
        scenario: Scenario whose multipliers are applied (None: no projection)
        starting_balance: Balance before month 1
        months: Horizon in months

    Returns:
        One MonthlyProjection per month, month 1 first. Empty when no
        scenario is selected or the horizon is not positive.

    Example:
        avg income 1000, avg expense 600, multipliers 1.2 / 0.9, start 5000
        → (1200, 540, 660, 5660), (1200, 540, 660, 6320), ...
    """
    if scenario is None or months <= 0:
        return []

    income = round_half_up(averages.avg_income * scenario.income_multiplier)
    expense = round_half_up(averages.avg_expense * scenario.expense_multiplier)
    net = income - expense

    running = starting_balance
    projections = []
    for month in range(1, months + 1):
        running += net
        projections.append(
            MonthlyProjection(
                month=month,
                income=income,
                expense=expense,
                net=net,
                balance=round_half_up(running),
            )
        )

    return projections


def summarize_projection(
    projections: List[MonthlyProjection],
    starting_balance: Decimal,
) -> ProjectionSummary:
    """Total projected income/expense and the balance after the last month"""
    final_balance = projections[-1].balance if projections else round_half_up(starting_balance)

    return ProjectionSummary(
        total_income=sum(p.income for p in projections),
        total_expense=sum(p.expense for p in projections),
        final_balance=final_balance,
    )
