import logging
from datetime import date

from flask import Flask, redirect, url_for
from .extensions import db, migrate
from .config import Config, engine_options
from .errors import register_error_handlers

from .blueprints.analytics.routes import analytics_bp
from .blueprints.budgets.routes import budgets_bp
from .blueprints.categories.routes import categories_bp
from .blueprints.settings.routes import settings_bp
from .blueprints.transactions.routes import transactions_bp


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
        if "SQLALCHEMY_DATABASE_URI" in overrides and "SQLALCHEMY_ENGINE_OPTIONS" not in overrides:
            app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options(
                app.config["SQLALCHEMY_DATABASE_URI"], app.config["STORE_CONNECT_TIMEOUT"]
            )

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger(__name__).setLevel(app.config["LOG_LEVEL"])
    app.json.sort_keys = False

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Ensure tables exist for a smooth first run
    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()

    register_error_handlers(app)

    # Register blueprints
    app.register_blueprint(analytics_bp)
    app.register_blueprint(budgets_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(transactions_bp)

    @app.route("/")
    def root():
        today = date.today()
        return redirect(url_for("analytics.index", month=today.month, year=today.year))

    return app
