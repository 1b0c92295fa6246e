from flask import Blueprint, jsonify

from ... import store
from ...schemas import TransactionIn, parse_body

transactions_bp = Blueprint("transactions", __name__, url_prefix="/transactions")


@transactions_bp.route("", methods=["GET"])
def list_transactions():
    return jsonify([t.to_dict() for t in store.find_transactions()])


@transactions_bp.route("", methods=["POST"])
def create_transaction():
    data = parse_body(TransactionIn)
    txn = store.create_transaction(data.amount, data.date, data.description, data.category, data.type)
    return jsonify(txn.to_dict()), 201


@transactions_bp.route("/<int:txn_id>", methods=["PUT"])
def update_transaction(txn_id):
    data = parse_body(TransactionIn)
    txn = store.replace_transaction(txn_id, data.amount, data.date, data.description, data.category, data.type)
    return jsonify(txn.to_dict())


@transactions_bp.route("/<int:txn_id>", methods=["DELETE"])
def delete_transaction(txn_id):
    store.delete_transaction(txn_id)
    return jsonify({"message": "Transaction deleted"})
