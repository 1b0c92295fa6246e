"""Monthly analytics: income, spend, carried-forward balance and budget
comparisons for one calendar month.

``aggregate_month`` is a pure function of the records handed to it;
``monthly_analytics`` fetches those records from the store first. Nothing
is cached, so two calls with no writes in between return the same result.
"""

import calendar
import logging
from collections import namedtuple
from datetime import date

from flask import current_app

from . import store
from .errors import InvalidRequest
from .schemas import BudgetComparison, CategoryTotal, MonthlyAnalytics, MonthlyTrends

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
PALETTE = (
    "#8884d8", "#83a6ed", "#8dd1e1", "#82ca9d", "#a4de6c",
    "#d0ed57", "#ffc658", "#ff8042", "#ff6361", "#bc5090",
)

MonthWindow = namedtuple("MonthWindow", "month year start end prev_month prev_year")


def month_window(month, year):
    """First and last day of ``month``/``year`` plus the preceding period."""
    if not 1 <= month <= 12:
        raise InvalidRequest("Month must be between 1 and 12")
    if not date.min.year <= year <= date.max.year:
        raise InvalidRequest(f"Year {year} is out of range")
    last_day = calendar.monthrange(year, month)[1]
    if month == 1:
        prev_month, prev_year = 12, year - 1
    else:
        prev_month, prev_year = month - 1, year
    return MonthWindow(month, year, date(year, month, 1), date(year, month, last_day), prev_month, prev_year)


class CategoryResolver:
    """Map category ids to display name and color.

    Unknown or missing ids never fail: they resolve to "Uncategorized" with a
    palette color picked by the item's position in its list.
    """

    def __init__(self, categories):
        self._by_id = {c.id: {"name": c.name, "color": c.color} for c in categories}

    def resolve(self, category_id, index=0):
        info = self._by_id.get(category_id) if category_id is not None else None
        if info is None:
            return {"name": UNCATEGORIZED, "color": PALETTE[index % len(PALETTE)]}
        return info

    def name(self, category_id):
        return self.resolve(category_id)["name"]


def _total(transactions, kind):
    return sum(t.amount for t in transactions if t.type == kind)


def carry_forward_balance(prev_transactions):
    """Net of the previous month; negative when that month overspent."""
    return _total(prev_transactions, "income") - _total(prev_transactions, "expense")


def aggregate_month(month, year, transactions, prev_transactions, budgets, categories, global_budget):
    prev_balance = carry_forward_balance(prev_transactions)
    total_expenses = _total(transactions, "expense")
    current_income = _total(transactions, "income")
    allocated = sum(b.amount for b in budgets)

    # Only a surplus raises the income baseline; a deficit still lowers the balance
    total_income = global_budget + max(0, prev_balance)
    current_balance = global_budget - allocated + prev_balance
    net_savings = total_income - total_expenses

    logger.debug(
        "Analytics %s/%s: income=%s expenses=%s prev_balance=%s global=%s allocated=%s balance=%s",
        month, year, total_income, total_expenses, prev_balance, global_budget, allocated, current_balance,
    )

    resolver = CategoryResolver(categories)
    expenses = [t for t in transactions if t.type == "expense"]

    by_name = {}
    for t in expenses:
        name = resolver.name(t.category_id)
        by_name[name] = by_name.get(name, 0) + t.amount

    comparison = []
    for b in budgets:
        spent = sum(t.amount for t in expenses if t.category_id == b.category_id)
        comparison.append(BudgetComparison(
            category=resolver.name(b.category_id),
            category_id=b.category_id,
            budgeted=b.amount,
            spent=spent,
            percentage=(spent / b.amount) * 100 if b.amount > 0 else 0,
        ))

    return MonthlyAnalytics(
        month=month,
        year=year,
        total_income=total_income,
        current_month_income=current_income,
        total_expenses=total_expenses,
        net_savings=net_savings,
        current_balance=current_balance,
        prev_month_balance=prev_balance,
        global_budget=global_budget,
        total_allocated_budget=allocated,
        transaction_count=len(transactions),
        expenses_by_category=[CategoryTotal(category=n, amount=a) for n, a in by_name.items()],
        budget_comparison=comparison,
    )


def global_budget_for(month, year):
    record = store.get_global_budget(month, year)
    if record is not None:
        return record.amount
    return current_app.config["DEFAULT_GLOBAL_BUDGET"]


def monthly_analytics(month, year):
    window = month_window(month, year)
    transactions = store.find_transactions(window.start, window.end)
    budgets = store.find_budgets(month, year)
    prev = month_window(window.prev_month, window.prev_year)
    prev_transactions = store.find_transactions(prev.start, prev.end)
    return aggregate_month(
        month,
        year,
        transactions,
        prev_transactions,
        budgets,
        store.find_categories(),
        global_budget_for(month, year),
    )


def _percent_change(current, previous):
    if previous == 0:
        return 0
    return (current - previous) / previous * 100


def compare_months(current, previous):
    """Month-over-month changes between two MonthlyAnalytics results."""
    top = sorted(current.expenses_by_category, key=lambda c: c.amount, reverse=True)[:3]
    return MonthlyTrends(
        current=current,
        previous=previous,
        income_change=_percent_change(current.total_income, previous.total_income),
        expense_change=_percent_change(current.total_expenses, previous.total_expenses),
        savings_change=(current.net_savings - previous.net_savings) / (previous.net_savings or 1) * 100,
        savings_rate=current.net_savings / current.total_income * 100 if current.total_income > 0 else 0,
        top_categories=top,
    )


def monthly_trends(month, year):
    window = month_window(month, year)
    return compare_months(
        monthly_analytics(month, year),
        monthly_analytics(window.prev_month, window.prev_year),
    )
