"""
Pricing routes.

- /api/rates - Categories and sizes of the active rate table
- /api/price - Unit price and total for a category/size/quantity
"""

from flask import Blueprint, current_app, jsonify, request

from logging_config import get_logger
from routes.forms import error_response, parse_quantity


# Module logger
logger = get_logger(__name__)

pricing_bp = Blueprint("pricing", __name__)


@pricing_bp.route("/api/rates", methods=["GET"])
def rates():
    """Categories -> sizes, with each size's brackets in table order."""
    resolver = current_app.config["PRICE_RESOLVER"]

    categories = {}
    for category, sizes in resolver.catalogue().items():
        categories[category] = {
            size: [
                {"bracket": bracket.descriptor, "unitPrice": bracket.price}
                for bracket in resolver.brackets(category, size)
            ]
            for size in sizes
        }

    return jsonify({"table": resolver.name, "categories": categories})


@pricing_bp.route("/api/price", methods=["GET"])
def price():
    """
    Quote a price.

    Unknown categories/sizes and quantities outside every bracket are not
    errors: they are priced 0 with ``found: false``.
    """
    resolver = current_app.config["PRICE_RESOLVER"]

    category = request.args.get("category", "")
    size = request.args.get("size", "")
    quantity, error = parse_quantity(
        request.args.get("quantity", ""), current_app.config["MAX_QUANTITY"]
    )
    if error:
        return error_response(error, 400, "invalid_quantity")

    breakdown = resolver.quote(category, size, quantity)
    logger.debug(f"Quote {category}/{size} x{quantity}: {breakdown.to_dict()}")

    return jsonify({**breakdown.to_dict(), "found": breakdown.found})
