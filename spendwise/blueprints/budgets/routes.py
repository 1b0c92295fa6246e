from flask import Blueprint, jsonify, request

from ... import store
from ...analytics import CategoryResolver
from ...schemas import BudgetIn, parse_body

budgets_bp = Blueprint("budgets", __name__, url_prefix="/budgets")


def budget_view(budget, resolver, index=0):
    info = resolver.resolve(budget.category_id, index)
    return {
        "id": budget.id,
        "categoryId": budget.category_id,
        "category": info["name"],
        "color": info["color"],
        "amount": budget.amount,
        "month": budget.month,
        "year": budget.year,
    }


@budgets_bp.route("", methods=["GET"])
def list_budgets():
    month = request.args.get("month", type=int)
    year = request.args.get("year", type=int)
    budgets = store.find_budgets(month, year)
    resolver = CategoryResolver(store.find_categories())
    return jsonify({"budgets": [budget_view(b, resolver, i) for i, b in enumerate(budgets)]})


@budgets_bp.route("", methods=["POST"])
def save_budget():
    data = parse_body(BudgetIn)
    budget, created = store.save_budget(data.category, data.amount, data.month, data.year)
    resolver = CategoryResolver(store.find_categories())
    return jsonify(budget_view(budget, resolver)), 201 if created else 200


@budgets_bp.route("/<int:budget_id>", methods=["PUT"])
def update_budget(budget_id):
    data = parse_body(BudgetIn)
    budget = store.update_budget(budget_id, data.category, data.amount, data.month, data.year)
    resolver = CategoryResolver(store.find_categories())
    body = budget_view(budget, resolver)
    body["message"] = "Budget updated successfully"
    return jsonify(body)


@budgets_bp.route("/<int:budget_id>", methods=["DELETE"])
def delete_budget(budget_id):
    store.delete_budget(budget_id)
    return jsonify({"message": "Budget deleted successfully"})
