"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

INCOME = "income"
EXPENSE = "expense"
CATEGORY_KINDS = (INCOME, EXPENSE)


@dataclass
class Business:
    """Tenant ledger that owns transactions, categories and scenarios"""

    id: int
    enterprise_name: str
    initial_balance: Decimal
    business_type: Optional[str] = None


@dataclass
class Category:
    """Label marking a transaction as income or expense"""

    id: int
    business_id: int
    name: str
    kind: str  # "income" or "expense"


@dataclass
class Transaction:
    """Recorded cash movement; the amount is never negative, its category gives the direction"""

    id: int
    business_id: int
    category_id: int
    amount: Decimal
    date: date
    description: Optional[str] = None


@dataclass
class Scenario:
    """Named pair of multipliers applied to historical averages"""

    id: int
    business_id: int
    name: str
    income_multiplier: Decimal
    expense_multiplier: Decimal
    payment_delay_days: int = 0  # informational, not used in projections


@dataclass
class BusinessSnapshot:
    """All records of one business, fetched together before computing"""

    business: Business
    categories: List[Category] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)
    scenarios: List[Scenario] = field(default_factory=list)


@dataclass
class HistoricalAverages:
    """Average income and expense per transaction"""

    avg_income: Decimal
    avg_expense: Decimal
    income_count: int = 0
    expense_count: int = 0


@dataclass
class MonthlyProjection:
    """Projected cash flow for one future month"""

    month: int
    income: int
    expense: int
    net: int
    balance: int


@dataclass
class ProjectionSummary:
    """Totals over a whole projection"""

    total_income: int
    total_expense: int
    final_balance: int


@dataclass
class DashboardMetrics:
    """Headline figures for a business"""

    total_income: Decimal
    total_expense: Decimal
    net_profit: Decimal
    current_balance: Decimal
    transaction_count: int
    income_count: int
    expense_count: int


@dataclass
class CategoryTotal:
    """Amount accumulated under one category name"""

    name: str
    kind: str
    amount: Decimal


@dataclass
class DailyFlow:
    """Income and expense recorded on a single day"""

    day: date
    income: Decimal
    expense: Decimal
