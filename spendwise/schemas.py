from datetime import datetime, timezone
from typing import List, Literal, Optional

from flask import request
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .errors import InvalidRequest

# Year 1 is excluded: its previous-month window would fall in year 0
MIN_YEAR = 2
MAX_YEAR = 9999


# ----------------------------
# REQUEST SCHEMAS
# ----------------------------

class TransactionIn(BaseModel):
    amount: float = Field(..., allow_inf_nan=False)
    date: datetime
    description: str = Field(..., min_length=1)
    category: Optional[int] = None
    type: Literal["income", "expense"]

    @field_validator("date")
    @classmethod
    def naive_utc(cls, value):
        # Stored naive; month bucketing compares against naive day bounds
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1)
    color: Optional[str] = None
    icon: Optional[str] = None


class BudgetIn(BaseModel):
    category: int
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR)


class GlobalBudgetIn(BaseModel):
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR)


def parse_body(schema):
    """Validate the JSON body against ``schema`` or raise InvalidRequest."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise InvalidRequest(f"Missing or invalid fields: {', '.join(fields)}") from exc


def parse_period(args):
    """Read the required ``month`` and ``year`` query parameters."""
    month = args.get("month", type=int)
    year = args.get("year", type=int)
    if month is None or year is None:
        raise InvalidRequest("Month and year parameters are required")
    if not 1 <= month <= 12:
        raise InvalidRequest("Month must be between 1 and 12")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidRequest(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")
    return month, year


# ----------------------------
# ANALYTICS OUTPUT
# ----------------------------

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self):
        return self.model_dump(by_alias=True)


class CategoryTotal(_CamelModel):
    category: str
    amount: float


class BudgetComparison(_CamelModel):
    category: str
    category_id: Optional[int]
    budgeted: float
    spent: float
    percentage: float


class MonthlyAnalytics(_CamelModel):
    month: int
    year: int
    total_income: float
    current_month_income: float
    total_expenses: float
    net_savings: float
    current_balance: float
    prev_month_balance: float
    global_budget: float
    total_allocated_budget: float
    transaction_count: int
    expenses_by_category: List[CategoryTotal]
    budget_comparison: List[BudgetComparison]


class MonthlyTrends(_CamelModel):
    current: MonthlyAnalytics
    previous: MonthlyAnalytics
    income_change: float
    expense_change: float
    savings_change: float
    savings_rate: float
    top_categories: List[CategoryTotal]
