"""
Order route.

Prices and composites an order and returns the payload for the order-intake
service. The caller forwards it.
"""

from flask import Blueprint, current_app, jsonify, request

from core.exceptions import FrameNotFoundError, PhotoPrintWebError
from logging_config import get_logger
from models.order import CustomerInfo
from routes.forms import (
    app_error_response,
    crop_from_request,
    error_response,
    parse_quantity,
    sanitize_text,
    uploaded_photo,
)


# Module logger
logger = get_logger(__name__)

orders_bp = Blueprint("orders", __name__)


@orders_bp.route("/api/orders", methods=["POST"])
def create_order():
    """
    Build an order payload.

    Form fields:
        photo, frame_id, crop_x, crop_y, crop_width, crop_height
        category, size, quantity
        name, phone, notes
    """
    config = current_app.config
    order_service = config["ORDER_SERVICE"]

    quantity, error = parse_quantity(request.form.get("quantity", ""), config["MAX_QUANTITY"])
    if error:
        return error_response(error, 400, "invalid_quantity")

    customer = CustomerInfo(
        name=sanitize_text(request.form.get("name"), config["MAX_NAME_LENGTH"]),
        phone=sanitize_text(request.form.get("phone"), config["MAX_PHONE_LENGTH"]),
        notes=sanitize_text(request.form.get("notes"), config["MAX_NOTES_LENGTH"]),
    )

    try:
        order = order_service.build_order(
            photo=uploaded_photo(),
            crop_region=crop_from_request(),
            frame_id=request.form.get("frame_id", ""),
            category=request.form.get("category", ""),
            size=request.form.get("size", ""),
            quantity=quantity,
            customer=customer,
            output_width=config["COMPOSE_OUTPUT_WIDTH"],
        )
    except FrameNotFoundError as e:
        return app_error_response(e, 404)
    except PhotoPrintWebError as e:
        logger.info(f"Order rejected: {e}")
        return app_error_response(e)

    return jsonify({"ok": True, "order": order.to_payload()}), 201
