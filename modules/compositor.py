"""
Photo + frame compositing.

The compositor cuts the customer's crop out of the photo, scales it to fill a
canvas whose shape follows the frame, and draws the frame on top:

    1. canvas filled with opaque white
    2. cropped photo, scaled to fill the canvas
    3. frame, scaled to fill the canvas, alpha preserved

Layers are always drawn in that order, so the frame masks the photo edges
and any transparent parts of the photo come out white rather than black.

Resampling is bilinear for both the photo and the frame. Output is an opaque
RGB PNG; Pillow's PNG encoder writes no timestamps, so the same inputs give
byte-identical output.
"""

from __future__ import annotations

import base64
import binascii
import io
import math
from typing import Optional, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from core.exceptions import (
    ImageDecodeError,
    InvalidOutputSizeError,
    PreconditionNotMetError,
)
from logging_config import get_logger
from models.crop import CropRegion
from models.frame import DEFAULT_ASPECT_RATIO

logger = get_logger(__name__)

ImagePayload = Union[bytes, bytearray, str]

BACKGROUND_COLOR = (255, 255, 255, 255)
PNG_MIME_TYPE = "image/png"
OCTET_STREAM_MIME_TYPE = "application/octet-stream"

# Pillow format name -> MIME type for images we accept and serve back
IMAGE_MIME_TYPES = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
}

# Largest canvas compose() will allocate (about 96 MB as RGBA)
MAX_OUTPUT_PIXELS = 24_000_000


# =============================================================================
# PAYLOAD HELPERS
# =============================================================================

def decode_image_payload(payload: ImagePayload, source: str = "image") -> bytes:
    """
    Turn raw bytes, a base64 string or a ``data:`` URI into raw bytes.

    Raises:
        ImageDecodeError: If a string payload is not valid base64
    """
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)

    text = payload.strip()
    if text.startswith("data:"):
        header, _, text = text.partition(",")
        if ";base64" not in header:
            raise ImageDecodeError(source, "data URI is not base64 encoded")

    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(source, f"invalid base64 payload ({exc})") from exc


def to_data_uri(image_bytes: bytes, mime_type: str = PNG_MIME_TYPE) -> str:
    """Encode bytes as ``data:<mime>;base64,...``."""
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def open_image(data: bytes, source: str = "image") -> Image.Image:
    """
    Decode image bytes, honouring EXIF orientation.

    Crop coordinates come from a browser cropper, which shows photos
    upright, so the pixels are rotated the same way before cropping.

    Raises:
        ImageDecodeError: If the bytes are not a readable image
    """
    if not data:
        raise ImageDecodeError(source, "no image data")

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
        return ImageOps.exif_transpose(image)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(source, str(exc)) from exc


def image_size(data: bytes) -> Optional[Tuple[int, int]]:
    """Pixel (width, height) of encoded image bytes, or None if undecodable."""
    try:
        image = open_image(data)
    except ImageDecodeError:
        return None
    return image.size


def image_mime_type(data: bytes) -> Optional[str]:
    """
    MIME type of encoded image bytes, judged from the decoded format.

    Returns None when the bytes do not decode, or decode to a format outside
    IMAGE_MIME_TYPES.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
            return IMAGE_MIME_TYPES.get(image.format)
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError, Image.DecompressionBombError):
        return None


def aspect_ratio_of(data: bytes) -> float:
    """Width / height of encoded image bytes; 1.0 when they cannot be decoded."""
    size = image_size(data)
    if not size or not size[1]:
        return DEFAULT_ASPECT_RATIO
    return size[0] / size[1]


def output_height(output_width: int, aspect_ratio: float) -> int:
    """Canvas height for a width and aspect ratio, rounded half up, at least 1."""
    return max(1, int(math.floor(output_width / aspect_ratio + 0.5)))


# =============================================================================
# COMPOSITOR
# =============================================================================

class ImageCompositor:
    """Renders cropped photo + frame onto a fixed-width canvas."""

    RESAMPLE = Image.BILINEAR

    def __init__(self, output_width: int = 2000, max_output_pixels: int = MAX_OUTPUT_PIXELS) -> None:
        self.output_width = output_width
        self.max_output_pixels = max_output_pixels

    def compose(
        self,
        source: Optional[bytes],
        crop_region: Optional[CropRegion],
        frame: Optional[bytes],
        output_width: Optional[int] = None,
        frame_aspect: Optional[float] = None,
    ) -> bytes:
        """
        Composite the cropped photo and the frame into a PNG.

        Args:
            source: Encoded photo bytes
            crop_region: Rectangle of the photo to keep, in photo pixels
            frame: Encoded frame bytes (normally a PNG with transparency)
            output_width: Canvas width in pixels (default: self.output_width)
            frame_aspect: Frame width/height; derived from the frame image
                when not given

        Returns:
            PNG bytes

        Raises:
            PreconditionNotMetError: No crop region, photo or frame, or the
                crop lies entirely outside the photo
            InvalidOutputSizeError: output_width <= 0, or the canvas would be
                larger than max_output_pixels
            ImageDecodeError: Photo or frame cannot be decoded
        """
        if crop_region is None:
            raise PreconditionNotMetError("crop region")
        if source is None:
            raise PreconditionNotMetError("photo")
        if frame is None:
            raise PreconditionNotMetError("frame")

        width = self.output_width if output_width is None else output_width
        if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
            raise InvalidOutputSizeError(width)

        photo = open_image(source, "photo")
        frame_image = open_image(frame, "frame")

        aspect = self._resolve_aspect(frame_image, frame_aspect)
        height = output_height(width, aspect)
        if width * height > self.max_output_pixels:
            raise InvalidOutputSizeError(width, height, self.max_output_pixels)

        region = crop_region.clamp(*photo.size)
        if region is None:
            raise PreconditionNotMetError("crop region within the photo")
        if region != crop_region:
            logger.debug(f"Crop {crop_region.box} clamped to {region.box} for photo {photo.size}")

        logger.debug(f"Composing {width}x{height} canvas (aspect {aspect:.4f})")

        canvas = Image.new("RGBA", (width, height), BACKGROUND_COLOR)

        photo_layer = photo.convert("RGBA").resize(
            (width, height), self.RESAMPLE, box=region.box
        )
        canvas.alpha_composite(photo_layer)

        frame_layer = frame_image.convert("RGBA").resize((width, height), self.RESAMPLE)
        canvas.alpha_composite(frame_layer)

        buffer = io.BytesIO()
        canvas.convert("RGB").save(buffer, format="PNG")
        return buffer.getvalue()

    def compose_data_uri(self, *args, **kwargs) -> str:
        """Same as compose(), returned as a ``data:image/png;base64`` URI."""
        return to_data_uri(self.compose(*args, **kwargs))

    @staticmethod
    def _resolve_aspect(frame_image: Image.Image, frame_aspect: Optional[float]) -> float:
        if frame_aspect and frame_aspect > 0:
            return float(frame_aspect)

        frame_width, frame_height = frame_image.size
        if frame_width > 0 and frame_height > 0:
            return frame_width / frame_height

        return DEFAULT_ASPECT_RATIO
