"""
Frame routes.

- GET    /api/frames       - Built-in and custom frames
- POST   /api/frames       - Upload a custom frame (multipart field "frame")
- GET    /api/frames/<id>  - Frame image
- DELETE /api/frames/<id>  - Remove a custom frame
"""

from flask import Blueprint, Response, current_app, jsonify, request
from werkzeug.utils import secure_filename

from core.exceptions import FrameNotFoundError, FrameStoreError, PhotoPrintWebError
from logging_config import get_logger
from modules.compositor import image_mime_type
from routes.forms import allowed_image, app_error_response, error_response


# Module logger
logger = get_logger(__name__)

frames_bp = Blueprint("frames", __name__)

MAX_FILENAME_LENGTH = 255


@frames_bp.route("/api/frames", methods=["GET"])
def list_frames():
    library = current_app.config["FRAME_LIBRARY"]
    try:
        frames = library.list_frames()
    except FrameStoreError as e:
        logger.error(f"Cannot list frames: {e}")
        return app_error_response(e, 500)

    return jsonify({"frames": [frame.to_summary() for frame in frames]})


@frames_bp.route("/api/frames", methods=["POST"])
def upload_frame():
    """
    Add a custom frame.

    PNG with a transparent window works best. The file must decode as a
    PNG, JPEG or WebP image; the aspect ratio is read from its pixels.
    """
    frame_file = request.files.get("frame")

    if not frame_file or frame_file.filename == "":
        return error_response("Please choose a frame image to upload.", 400, "missing_file")

    if not allowed_image(frame_file.filename):
        return error_response("Unsupported file type. Please upload a PNG or JPEG image.", 400, "invalid_file")

    if len(frame_file.filename) > MAX_FILENAME_LENGTH:
        return error_response(f"Filename too long. Maximum {MAX_FILENAME_LENGTH} characters.", 400, "invalid_file")

    filename = secure_filename(frame_file.filename)
    data = frame_file.read()

    # The declared content type is ignored; the bytes must decode as an image
    if image_mime_type(data) is None:
        logger.warning(f"Rejected frame upload {filename!r}: not a PNG, JPEG or WebP image")
        return error_response("The frame file is not a readable PNG, JPEG or WebP image.", 400, "invalid_file")

    library = current_app.config["FRAME_LIBRARY"]
    try:
        frame = library.add_upload(filename, data)
    except FrameStoreError as e:
        logger.error(f"Frame upload failed: {e}")
        return app_error_response(e, 500)

    return jsonify({"ok": True, "frame": frame.to_summary()}), 201


@frames_bp.route("/api/frames/<frame_id>", methods=["GET"])
def frame_image(frame_id: str):
    library = current_app.config["FRAME_LIBRARY"]
    try:
        frame = library.get(frame_id)
        data = library.load_bytes(frame)
    except FrameNotFoundError as e:
        return app_error_response(e, 404)
    except PhotoPrintWebError as e:
        return app_error_response(e, 500)

    response = Response(data, mimetype=library.mime_type(frame))
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


@frames_bp.route("/api/frames/<frame_id>", methods=["DELETE"])
def delete_frame(frame_id: str):
    library = current_app.config["FRAME_LIBRARY"]
    if library.is_built_in(frame_id):
        return error_response("Built-in frames cannot be removed.", 400, "built_in_frame")

    try:
        removed = library.remove(frame_id)
    except FrameStoreError as e:
        logger.error(f"Frame removal failed: {e}")
        return app_error_response(e, 500)

    if not removed:
        return error_response(f"Frame not found: {frame_id}", 404, "FrameNotFoundError")

    return "", 204
