"""Historical aggregation over a business's transactions"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from cashflow_gateway.domain.models import (
    EXPENSE,
    INCOME,
    Category,
    CategoryTotal,
    DailyFlow,
    DashboardMetrics,
    HistoricalAverages,
    Transaction,
)
from cashflow_gateway.utils.date_utils import trailing_window

ZERO = Decimal("0")


def index_categories(categories: Iterable[Category]) -> Dict[int, Category]:
    """Map category id to category"""
    return {category.id: category for category in categories}


def partition_by_kind(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
) -> tuple[List[Transaction], List[Transaction]]:
    """
    Split transactions into (income, expense) by their category's kind.

    Transactions whose category cannot be resolved land in neither list.
    """
    by_id = index_categories(categories)
    income: List[Transaction] = []
    expense: List[Transaction] = []

    for txn in transactions:
        category = by_id.get(txn.category_id)
        if category is None:
            continue
        if category.kind == INCOME:
            income.append(txn)
        elif category.kind == EXPENSE:
            expense.append(txn)

    return income, expense


def _total(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), ZERO)


def compute_historical_averages(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
) -> HistoricalAverages:
    """
    Average income and expense amount per transaction.

    An empty bucket averages to 0: the denominator is max(count, 1), so no
    input ever raises or yields NaN.
    """
    income, expense = partition_by_kind(transactions, categories)

    return HistoricalAverages(
        avg_income=_total(income) / max(len(income), 1),
        avg_expense=_total(expense) / max(len(expense), 1),
        income_count=len(income),
        expense_count=len(expense),
    )


def compute_dashboard_metrics(
    transactions: List[Transaction],
    categories: Iterable[Category],
    initial_balance: Decimal,
) -> DashboardMetrics:
    """Totals, net profit and current balance for the dashboard header"""
    income, expense = partition_by_kind(transactions, categories)
    total_income = _total(income)
    total_expense = _total(expense)
    net_profit = total_income - total_expense

    return DashboardMetrics(
        total_income=total_income,
        total_expense=total_expense,
        net_profit=net_profit,
        current_balance=initial_balance + net_profit,
        transaction_count=len(transactions),
        income_count=len(income),
        expense_count=len(expense),
    )


def compute_category_breakdown(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    limit: Optional[int] = 6,
) -> List[CategoryTotal]:
    """
    Sum amounts per category name, largest first.

    Categories sharing a name are merged; the kind of the last one seen wins.
    Ties are ordered by name so the output is stable.
    """
    by_id = index_categories(categories)
    totals: Dict[str, CategoryTotal] = {}

    for txn in transactions:
        category = by_id.get(txn.category_id)
        if category is None:
            continue
        entry = totals.get(category.name)
        if entry is None:
            totals[category.name] = CategoryTotal(category.name, category.kind, txn.amount)
        else:
            entry.amount += txn.amount
            entry.kind = category.kind

    ordered = sorted(totals.values(), key=lambda c: (-c.amount, c.name))
    return ordered if limit is None else ordered[:limit]


def compute_daily_timeline(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    *,
    end_date: date,
    days: int = 30,
    step: int = 3,
) -> List[DailyFlow]:
    """
    Daily income/expense over the window of `days` ending at `end_date`.

    Days without transactions are zero-filled. Only every `step`-th day is
    kept, counting from the oldest day in the window.
    """
    by_id = index_categories(categories)
    window = {day: DailyFlow(day=day, income=ZERO, expense=ZERO) for day in trailing_window(end_date, days)}

    for txn in transactions:
        flow = window.get(txn.date)
        if flow is None:
            continue
        category = by_id.get(txn.category_id)
        if category is None:
            continue
        if category.kind == INCOME:
            flow.income += txn.amount
        elif category.kind == EXPENSE:
            flow.expense += txn.amount

    flows = [window[day] for day in sorted(window)]
    return flows[:: max(step, 1)]
