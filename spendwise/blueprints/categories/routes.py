from flask import Blueprint, jsonify

from ... import store
from ...models import DEFAULT_COLOR
from ...schemas import CategoryIn, parse_body

categories_bp = Blueprint("categories", __name__, url_prefix="/categories")


@categories_bp.route("", methods=["GET"])
def list_categories():
    return jsonify([c.to_dict() for c in store.find_categories()])


@categories_bp.route("", methods=["POST"])
def create_category():
    data = parse_body(CategoryIn)
    category = store.create_category(data.name.strip(), data.color or DEFAULT_COLOR, data.icon)
    return jsonify(category.to_dict()), 201


@categories_bp.route("/<int:category_id>", methods=["PUT"])
def update_category(category_id):
    data = parse_body(CategoryIn)
    category = store.update_category(category_id, data.name.strip(), data.color or DEFAULT_COLOR, data.icon)
    return jsonify(category.to_dict())


@categories_bp.route("/<int:category_id>", methods=["DELETE"])
def delete_category(category_id):
    store.delete_category(category_id)
    return jsonify({"message": "Category deleted"})
