"""
PhotoPrintWeb - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration and sets up logging
2. Loads the configured rate table (fail-fast on an unknown name)
3. Creates the frame store, frame library, compositor and order service
4. Registers route blueprints
5. Sets up JSON error handlers

All services are stateless apart from the frame store, which does its own
locking, so they are created once and shared by every request thread.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from logging_config import setup_logging, get_logger
from core.exceptions import RateTableNotFoundError
from modules.compositor import ImageCompositor
from modules.frames import FrameLibrary
from modules.pricing import PriceResolver
from modules.rate_tables import get_rate_table
from routes import register_blueprints
from services.frame_repository import FrameRepository, InMemoryStore, JsonFileStore
from services.order_service import OrderService


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _get_base_path() -> Path:
    """Directory containing app.py (where .env is looked up)."""
    return Path(__file__).parent


def _create_frame_store(store_path: Optional[str]):
    """JSON file store, or an in-memory one when no path is configured."""
    if not store_path:
        logger.warning("FRAME_STORE_PATH not set; custom frames will not survive a restart")
        return InMemoryStore()
    return JsonFileStore(store_path)


def create_app(
    config_object: str = "config.Config",
    overrides: Optional[Dict[str, Any]] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path of the config class
        overrides: Config values applied after the config class (tests)

    Returns:
        Configured Flask application

    Raises:
        RateTableNotFoundError: If RATE_TABLE names no known table
    """
    # Use override=True so .env file always takes precedence over shell environment
    env_file = _get_base_path() / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting PhotoPrintWeb in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # PRICING (FAIL-FAST)
    # =========================================================================

    table_name = app.config["RATE_TABLE"]
    try:
        rate_table = get_rate_table(table_name)
    except RateTableNotFoundError as e:
        logger.error(f"FATAL: Cannot start application - {e}")
        raise

    resolver = PriceResolver(rate_table, name=table_name)
    app.config["PRICE_RESOLVER"] = resolver
    logger.info(f"Rate table '{table_name}' loaded ({len(resolver.categories())} categories)")

    # =========================================================================
    # SERVICES INITIALIZATION
    # =========================================================================

    frame_store = _create_frame_store(app.config.get("FRAME_STORE_PATH"))
    frame_repository = FrameRepository(frame_store, key=app.config["CUSTOM_FRAMES_KEY"])
    frame_library = FrameLibrary(frame_repository, app.config["FRAMES_DIR"])
    app.config["FRAME_LIBRARY"] = frame_library

    compositor = ImageCompositor(
        output_width=app.config["COMPOSE_OUTPUT_WIDTH"],
        max_output_pixels=app.config["MAX_OUTPUT_PIXELS"],
    )

    app.config["ORDER_SERVICE"] = OrderService(resolver, compositor, frame_library)
    logger.info("Order service initialized")

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        max_mb = app.config.get("MAX_CONTENT_LENGTH", 16 * 1024 * 1024) / (1024 * 1024)
        return jsonify({
            "ok": False,
            "error": f"File too large. Maximum upload size is {max_mb:.0f} MB.",
            "kind": "file_too_large",
        }), 413

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"ok": False, "error": "Not found.", "kind": "not_found"}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"ok": False, "error": e.description, "kind": e.name}), e.code

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return jsonify({
            "ok": False,
            "error": "An unexpected error occurred. Please try again.",
            "kind": "server_error",
        }), 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
