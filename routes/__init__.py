"""
Flask route blueprints for PhotoPrintWeb.

All endpoints speak JSON (except the PNG image responses):
- main: Index and health check
- pricing: Rate table and price quotes
- frames: Built-in and custom frames
- compose: Framed photo preview
- orders: Order payload assembly

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .pricing import pricing_bp
from .frames import frames_bp
from .compose import compose_bp
from .orders import orders_bp

__all__ = [
    "main_bp",
    "pricing_bp",
    "frames_bp",
    "compose_bp",
    "orders_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(pricing_bp)
    app.register_blueprint(frames_bp)
    app.register_blueprint(compose_bp)
    app.register_blueprint(orders_bp)
