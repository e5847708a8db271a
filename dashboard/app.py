"""
Flask Application Factory
===========================

Creates the Flask app, registers the API blueprints and configures
CORS so a separately served charting front end can read the tables.
"""

from __future__ import annotations

from flask import Flask, jsonify
from flask_cors import CORS

from stormimpact.logging_config import setup_logger

logger = setup_logger("dashboard.app")


def create_app(debug: bool = False) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config["DEBUG"] = debug

    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # ---- Register API blueprints ----
    from dashboard.routes.api_settings import bp as settings_bp
    from dashboard.routes.api_summary import bp as summary_bp

    app.register_blueprint(settings_bp)
    app.register_blueprint(summary_bp)

    @app.route("/api/status", methods=["GET"])
    def status():
        return jsonify({"status": "ok"})

    logger.info("Flask app created (debug=%s)", debug)
    return app
