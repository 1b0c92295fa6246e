from flask import Blueprint, jsonify, request

from ...analytics import monthly_analytics, monthly_trends
from ...schemas import parse_period

analytics_bp = Blueprint("analytics", __name__, url_prefix="/analytics")


@analytics_bp.route("", methods=["GET"])
def index():
    month, year = parse_period(request.args)
    return jsonify(monthly_analytics(month, year).to_json())


@analytics_bp.route("/trends", methods=["GET"])
def trends():
    month, year = parse_period(request.args)
    return jsonify(monthly_trends(month, year).to_json())
