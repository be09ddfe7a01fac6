"""
Request parsing helpers shared by the route blueprints.

Customer text is cleaned here, at the HTTP boundary; the core treats it as
opaque.
"""

from typing import Optional, Tuple

import bleach
from flask import jsonify, request

from core.exceptions import CompositionError, FailureKind, PhotoPrintWebError
from models.crop import CropRegion

ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "webp"}

# Composition failures -> HTTP status
FAILURE_STATUS = {
    FailureKind.PRECONDITION_NOT_MET: 400,
    FailureKind.INVALID_ARGUMENT: 400,
    FailureKind.DECODE_ERROR: 422,
}


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """Strip whitespace and HTML, then truncate."""
    if not text:
        return ""

    text = bleach.clean(text.strip(), tags=[], strip=True)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def allowed_image(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_IMAGE_EXTENSIONS


def error_response(message: str, status: int, kind: str = "error"):
    return jsonify({"ok": False, "error": message, "kind": kind}), status


def app_error_response(error: PhotoPrintWebError, status: int = 400):
    """JSON error for an application exception."""
    if isinstance(error, CompositionError):
        return error_response(error.message, FAILURE_STATUS[error.kind], error.kind.value)
    return error_response(error.message, status, type(error).__name__)


def parse_quantity(raw, max_quantity: int) -> Tuple[Optional[int], Optional[str]]:
    """
    Parse a quantity field.

    Zero and negative values are passed through; the price resolver handles
    them. Only non-integers and values above max_quantity are refused.

    Returns:
        Tuple of (quantity, error_message)
    """
    try:
        quantity = int(str(raw).strip())
    except (TypeError, ValueError):
        return None, f"Quantity must be a whole number, got {raw!r}"

    if quantity > max_quantity:
        return None, f"Quantity too large. Maximum is {max_quantity}."

    return quantity, None


def crop_from_request() -> Optional[CropRegion]:
    """
    Crop region from form fields ``crop_x``/``crop_y``/``crop_width``/``crop_height``.

    Returns None when no crop fields were sent.

    Raises:
        InvalidCropRegionError: If crop fields are present but unusable
    """
    return CropRegion.from_dict({
        "x": request.form.get("crop_x"),
        "y": request.form.get("crop_y"),
        "width": request.form.get("crop_width"),
        "height": request.form.get("crop_height"),
    })


def uploaded_photo() -> Optional[bytes]:
    """Bytes of the ``photo`` file field, or None when nothing was uploaded."""
    photo = request.files.get("photo")
    if not photo or photo.filename == "":
        return None
    return photo.read()
