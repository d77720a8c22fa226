from flask import Flask, redirect, url_for
from .extensions import db, migrate, login_manager
from .config import Config
from .categories import format_baht
from .errors import register_error_handlers

from .blueprints.auth.routes import auth_bp
from .blueprints.dashboard.routes import dashboard_bp
from .blueprints.records.routes import records_bp
from .blueprints.budgets.routes import budgets_bp
from .blueprints.debts.routes import debts_bp
from .blueprints.reports.routes import reports_bp
from .blueprints.api.routes import api_bp


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # Ensure tables exist for a smooth first run
    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(records_bp)
    app.register_blueprint(budgets_bp)
    app.register_blueprint(debts_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(api_bp)

    register_error_handlers(app)
    app.add_template_filter(format_baht, "baht")

    @app.route("/")
    def root():
        return redirect(url_for("dashboard.index"))

    return app
