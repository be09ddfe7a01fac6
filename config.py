"""
Configuration for PhotoPrintWeb.

All values can be overridden from the environment or a .env file.
The active rate table must name one of the tables in modules.rate_tables;
the app refuses to start otherwise.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB uploads
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Pricing
    # ==========================================================================
    # RATE_TABLE selects which price list is quoted:
    #   "tiered" - current list ("<15", "15-40", ..., "1000+")
    #   "range"  - older list ("10-15", "16-40", ..., "1000+")
    # ==========================================================================
    RATE_TABLE = os.environ.get("RATE_TABLE", "tiered")
    MAX_QUANTITY = int(os.environ.get("MAX_QUANTITY", "100000"))

    # ==========================================================================
    # Compositing
    # ==========================================================================
    # Output canvas width in pixels. Height follows the frame aspect ratio.
    COMPOSE_OUTPUT_WIDTH = int(os.environ.get("COMPOSE_OUTPUT_WIDTH", "2000"))
    PREVIEW_OUTPUT_WIDTH = int(os.environ.get("PREVIEW_OUTPUT_WIDTH", "800"))
    # Upper bounds for requested widths and for the canvas a frame shape implies
    MAX_OUTPUT_WIDTH = int(os.environ.get("MAX_OUTPUT_WIDTH", "4000"))
    MAX_OUTPUT_PIXELS = int(os.environ.get("MAX_OUTPUT_PIXELS", "24000000"))

    # ==========================================================================
    # Frames
    # ==========================================================================
    # Built-in frame images live in FRAMES_DIR; user uploads are persisted as
    # JSON under CUSTOM_FRAMES_KEY in FRAME_STORE_PATH.
    FRAMES_DIR = os.environ.get("FRAMES_DIR", str(BASE_DIR / "static" / "frames"))
    FRAME_STORE_PATH = os.environ.get(
        "FRAME_STORE_PATH", str(BASE_DIR / "instance" / "frames.json")
    )
    CUSTOM_FRAMES_KEY = "customFrames_v1"

    # Customer field limits
    MAX_NAME_LENGTH = 200
    MAX_PHONE_LENGTH = 40
    MAX_NOTES_LENGTH = 1000


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    PREVIEW_OUTPUT_WIDTH = 80
    COMPOSE_OUTPUT_WIDTH = 100
