"""Settings API — read and update the pipeline configuration."""
from __future__ import annotations

from flask import Blueprint, jsonify, request

from stormimpact.config_manager import load_config, save_config, validate_config
from stormimpact.logging_config import setup_logger

logger = setup_logger("dashboard.settings")
bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@bp.route("/config", methods=["GET"])
def get_config():
    return jsonify(load_config())


@bp.route("/config", methods=["PUT"])
def update_config():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body is required"}), 400
    error = validate_config(data)
    if error:
        return jsonify({"error": error}), 400
    config = load_config()
    config.update(data)
    save_config(config)
    logger.info("Updated pipeline config: %s", sorted(data))
    return jsonify({"status": "ok", "config": config})
