from .transaction import Transaction, TRANSACTION_TYPES
from .category import Category, DEFAULT_COLOR
from .budget import Budget
from .global_budget import GlobalBudget

__all__ = ["Transaction", "TRANSACTION_TYPES", "Category", "DEFAULT_COLOR", "Budget", "GlobalBudget"]
