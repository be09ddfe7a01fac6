"""
Main routes (index, health).
"""

from flask import Blueprint, current_app, jsonify

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    """List the API endpoints."""
    return jsonify({
        "name": "photo_print_web",
        "endpoints": [
            "/health",
            "/api/rates",
            "/api/price",
            "/api/frames",
            "/api/compose",
            "/api/orders",
        ],
    })


@main_bp.route("/health", methods=["GET"])
def health():
    """Health check: the app is up and has a rate table loaded."""
    resolver = current_app.config.get("PRICE_RESOLVER")
    return jsonify({
        "status": "ok",
        "rateTable": resolver.name if resolver else None,
    })
