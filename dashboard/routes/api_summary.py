"""Summary API — per-category impact tables and event-type lookup."""
from __future__ import annotations

from flask import Blueprint, jsonify, request

from dashboard.services.summary_store import load_summary, to_records
from stormimpact.build.aggregate import melt_economic, melt_health
from stormimpact.build.build_summary import rank_by_economic, rank_by_health
from stormimpact.clean.classify import classify_event
from stormimpact.logging_config import setup_logger

logger = setup_logger("dashboard.summary")
bp = Blueprint("summary", __name__, url_prefix="/api/summary")

_NOT_BUILT = {"error": "Summary not built yet. Run the pipeline first."}

_RANKERS = {
    "health": rank_by_health,
    "economic": rank_by_economic,
}


@bp.route("", methods=["GET"])
def get_summary():
    summary = load_summary()
    if summary is None:
        return jsonify(_NOT_BUILT), 404
    return jsonify(to_records(summary))


@bp.route("/health", methods=["GET"])
def get_health_long():
    summary = load_summary()
    if summary is None:
        return jsonify(_NOT_BUILT), 404
    return jsonify(to_records(melt_health(summary)))


@bp.route("/economic", methods=["GET"])
def get_economic_long():
    summary = load_summary()
    if summary is None:
        return jsonify(_NOT_BUILT), 404
    return jsonify(to_records(melt_economic(summary)))


@bp.route("/ranked/<kind>", methods=["GET"])
def get_ranked(kind: str):
    """Categories ordered by total impact.

    Query: ?top=N (optional, N >= 1)
    """
    ranker = _RANKERS.get(kind)
    if ranker is None:
        return jsonify({"error": f"Unknown ranking: {kind}"}), 400

    top = request.args.get("top", type=int)
    if "top" in request.args and (top is None or top < 1):
        return jsonify({"error": "top must be a positive integer"}), 400

    summary = load_summary()
    if summary is None:
        return jsonify(_NOT_BUILT), 404
    return jsonify(to_records(ranker(summary, top)))


@bp.route("/classify", methods=["POST"])
def classify():
    """Classify one raw event type.

    Body: { "event_type": "TSTM WIND" }
    """
    data = request.get_json(silent=True) or {}
    event_type = data.get("event_type")
    if not isinstance(event_type, str):
        return jsonify({"error": "event_type is required"}), 400
    category = classify_event(event_type)
    logger.debug("Classified %r as %s", event_type, category.value)
    return jsonify({"event_type": event_type, "category": category.value})
