"""Error types surfaced by the API and the handlers that render them."""

import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .extensions import db

logger = logging.getLogger(__name__)


class SpendwiseError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidRequest(SpendwiseError):
    """Missing or malformed input; raised before the store is touched."""

    status_code = 400


class NotFound(SpendwiseError):
    status_code = 404


class Conflict(SpendwiseError):
    """Uniqueness violation on a write path that does not upsert."""

    status_code = 409


def register_error_handlers(app):
    @app.errorhandler(SpendwiseError)
    def handle_spendwise_error(error):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        logger.exception("Store failure")
        return jsonify({"error": "The data store is unavailable"}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"error": error.description}), error.code
