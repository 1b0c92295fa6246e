from flask import Blueprint, jsonify, request

from ... import store
from ...schemas import GlobalBudgetIn, parse_body, parse_period

settings_bp = Blueprint("settings", __name__, url_prefix="/settings")


@settings_bp.route("/global-budget", methods=["GET"])
def get_global_budget():
    month, year = parse_period(request.args)
    budget = store.get_global_budget(month, year)
    return jsonify(budget.to_dict() if budget else {})


@settings_bp.route("/global-budget", methods=["POST"])
def save_global_budget():
    data = parse_body(GlobalBudgetIn)
    budget = store.save_global_budget(data.amount, data.month, data.year)
    return jsonify(budget.to_dict())
