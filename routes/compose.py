"""
Compose route.

Renders the framed photo as a PNG, for the preview and the download button.
"""

from flask import Blueprint, Response, current_app, request

from core.exceptions import FrameNotFoundError, PhotoPrintWebError
from logging_config import get_logger
from routes.forms import app_error_response, crop_from_request, error_response, uploaded_photo


# Module logger
logger = get_logger(__name__)

compose_bp = Blueprint("compose", __name__)


@compose_bp.route("/api/compose", methods=["POST"])
def compose():
    """
    Composite the uploaded photo with a frame.

    Form fields:
        photo: Image file
        frame_id: Frame to draw on top
        crop_x, crop_y, crop_width, crop_height: Crop in photo pixels
        width: Output width (default PREVIEW_OUTPUT_WIDTH, at most MAX_OUTPUT_WIDTH)
        download: "1" to send as an attachment
    """
    order_service = current_app.config["ORDER_SERVICE"]

    raw_width = request.form.get("width", "").strip()
    if raw_width:
        try:
            width = int(raw_width)
        except ValueError:
            return error_response(f"Width must be a whole number, got {raw_width!r}", 400, "invalid_argument")
    else:
        width = current_app.config["PREVIEW_OUTPUT_WIDTH"]

    max_width = current_app.config["MAX_OUTPUT_WIDTH"]
    if width > max_width:
        return error_response(f"Width must be at most {max_width} pixels, got {width}", 400, "invalid_argument")

    try:
        image = order_service.render(
            uploaded_photo(),
            crop_from_request(),
            request.form.get("frame_id", ""),
            output_width=width,
        )
    except FrameNotFoundError as e:
        return app_error_response(e, 404)
    except PhotoPrintWebError as e:
        logger.info(f"Compose rejected: {e}")
        return app_error_response(e)

    response = Response(image, mimetype="image/png")
    if request.form.get("download") == "1":
        response.headers["Content-Disposition"] = "attachment; filename=photo-preview.png"
    return response
