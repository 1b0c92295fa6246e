"""Queries and writes against the record store.

Everything the analytics engine reads goes through the ``find_*`` helpers
here, and every write that has to respect a uniqueness constraint lives
here as well so the blueprints stay thin.
"""

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy.exc import IntegrityError

from .errors import Conflict, NotFound
from .extensions import db
from .models import Budget, Category, GlobalBudget, Transaction

logger = logging.getLogger(__name__)


def find_transactions(start=None, end=None):
    """Transactions dated within ``start``..``end`` (both whole days, inclusive)."""
    query = Transaction.query
    if start is not None:
        query = query.filter(Transaction.date >= datetime.combine(start, time.min))
    if end is not None and end < date.max:
        query = query.filter(Transaction.date < datetime.combine(end + timedelta(days=1), time.min))
    return query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()


def find_budgets(month=None, year=None):
    query = Budget.query
    if month is not None and year is not None:
        query = query.filter_by(month=month, year=year)
    return query.order_by(Budget.id).all()


def find_categories():
    return Category.query.order_by(Category.name).all()


def get_global_budget(month, year):
    return GlobalBudget.query.filter_by(month=month, year=year).first()


def get_or_404(model, record_id, label):
    record = db.session.get(model, record_id)
    if record is None:
        raise NotFound(f"{label} not found")
    return record


def _upsert(find, make, amount):
    """Overwrite ``amount`` on the record ``find`` returns, or add ``make()``.

    A concurrent insert for the same period surfaces as an IntegrityError on
    commit; the winner's record is then re-read and updated instead.
    Returns ``(record, created)``.
    """
    record = find()
    created = record is None
    if created:
        record = make()
        db.session.add(record)
    else:
        record.amount = amount
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        record = find()
        if record is None:
            raise Conflict("A record for this period was written concurrently") from exc
        record.amount = amount
        created = False
        db.session.commit()
    return record, created


def _find_budget(category_id, month, year):
    return Budget.query.filter_by(category_id=category_id, month=month, year=year).first()


# ----------------------------
# BUDGETS
# ----------------------------

def save_budget(category_id, amount, month, year):
    """Create a budget, or overwrite the amount of the one already held by
    ``(category_id, month, year)``. Returns ``(budget, created)``.
    """
    get_or_404(Category, category_id, "Category")
    budget, created = _upsert(
        lambda: _find_budget(category_id, month, year),
        lambda: Budget(category_id=category_id, amount=amount, month=month, year=year),
        amount,
    )
    logger.info("Budget %s for category %s %s/%s", "created" if created else "updated", category_id, month, year)
    return budget, created


def update_budget(budget_id, category_id, amount, month, year):
    """Replace a budget; moving it onto another budget's period is a conflict."""
    budget = get_or_404(Budget, budget_id, "Budget")
    duplicate = Budget.query.filter(
        Budget.id != budget_id,
        Budget.category_id == category_id,
        Budget.month == month,
        Budget.year == year,
    ).first()
    if duplicate:
        raise Conflict("A budget for this category already exists for the selected month and year")

    budget.category_id = category_id
    budget.amount = amount
    budget.month = month
    budget.year = year
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict("A budget for this category already exists for the selected month and year") from exc
    return budget


def delete_budget(budget_id):
    budget = get_or_404(Budget, budget_id, "Budget")
    db.session.delete(budget)
    db.session.commit()


# ----------------------------
# CATEGORIES
# ----------------------------

def _name_taken(name, exclude_id=None):
    query = Category.query.filter(db.func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def _commit_category():
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict("Category with this name already exists") from exc


def create_category(name, color, icon):
    if _name_taken(name):
        raise Conflict("Category with this name already exists")
    category = Category(name=name, color=color, icon=icon)
    db.session.add(category)
    _commit_category()
    return category


def update_category(category_id, name, color, icon):
    category = get_or_404(Category, category_id, "Category")
    if _name_taken(name, exclude_id=category_id):
        raise Conflict("Category with this name already exists")
    category.name = name
    category.color = color
    category.icon = icon
    _commit_category()
    return category


def delete_category(category_id):
    # Transactions and budgets keep their reference and resolve as Uncategorized
    category = get_or_404(Category, category_id, "Category")
    db.session.delete(category)
    db.session.commit()


# ----------------------------
# GLOBAL BUDGET
# ----------------------------

def save_global_budget(amount, month, year):
    budget, _ = _upsert(
        lambda: get_global_budget(month, year),
        lambda: GlobalBudget(amount=amount, month=month, year=year),
        amount,
    )
    return budget


# ----------------------------
# TRANSACTIONS
# ----------------------------

def create_transaction(amount, date, description, category_id, type):
    txn = Transaction(amount=amount, date=date, description=description, category_id=category_id, type=type)
    db.session.add(txn)
    db.session.commit()
    return txn


def replace_transaction(txn_id, amount, date, description, category_id, type):
    txn = get_or_404(Transaction, txn_id, "Transaction")
    txn.amount = amount
    txn.date = date
    txn.description = description
    txn.category_id = category_id
    txn.type = type
    db.session.commit()
    return txn


def delete_transaction(txn_id):
    txn = get_or_404(Transaction, txn_id, "Transaction")
    db.session.delete(txn)
    db.session.commit()
