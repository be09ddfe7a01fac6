"""
Frame catalogue.

Built-in frames are looked up as PNG files in FRAMES_DIR; when a file is not
there the frame is drawn with Pillow instead, so a fresh checkout works
without image assets. Custom frames are uploaded by users, kept in the frame
store as data URIs, and listed after the built-ins (newest upload first).
"""

from __future__ import annotations

import io
import uuid
from pathlib import Path
from typing import List, Optional

from PIL import Image, ImageDraw

from core.exceptions import FrameNotFoundError, FrameStoreError
from logging_config import get_logger
from models.frame import FrameAsset
from modules.compositor import (
    IMAGE_MIME_TYPES,
    OCTET_STREAM_MIME_TYPE,
    PNG_MIME_TYPE,
    aspect_ratio_of,
    decode_image_payload,
    image_mime_type,
    to_data_uri,
)

logger = get_logger(__name__)

BUILT_IN_FRAMES = (
    FrameAsset("frame-classic", "Classic White", "frame1.png", 4 / 5, built_in=True),
    FrameAsset("frame-polaroid", "Polaroid", "frame2.png", 1.0, built_in=True),
    FrameAsset("frame-instagram", "Instagram Mockup", "frame3.png", 1.08, built_in=True),
)

CUSTOM_FRAME_PREFIX = "custom-"

# Drawn built-ins: (left, top, right, bottom) border as a fraction of height
_DRAWN_BORDERS = {
    "frame-classic": (0.06, 0.06, 0.06, 0.06),
    "frame-polaroid": (0.05, 0.05, 0.05, 0.20),
    "frame-instagram": (0.0, 0.10, 0.0, 0.14),
}
_DRAWN_HEIGHT = 1000
_FRAME_WHITE = (255, 255, 255, 255)
_OUTLINE_GREY = (219, 219, 219, 255)


def frame_from_upload(filename: str, data: bytes) -> FrameAsset:
    """
    Build a custom frame from uploaded image bytes.

    The stored MIME type is taken from the decoded image format, never from
    the client; bytes that are not a PNG, JPEG or WebP image are stored as
    application/octet-stream. The aspect ratio comes from the decoded pixel
    size, falling back to 1.0 when the image cannot be decoded.
    """
    mime_type = image_mime_type(data) or OCTET_STREAM_MIME_TYPE
    return FrameAsset(
        identifier=f"{CUSTOM_FRAME_PREFIX}{uuid.uuid4()}",
        display_name=filename,
        image_source=to_data_uri(data, mime_type),
        aspect_ratio=aspect_ratio_of(data),
    )


def draw_built_in_frame(frame: FrameAsset) -> bytes:
    """
    Render a built-in frame as a PNG: white border, transparent window.

    The Instagram mockup also gets a header bar with an avatar circle and
    grey rules above and below the window.
    """
    height = _DRAWN_HEIGHT
    width = max(1, round(height * frame.aspect_ratio))
    left, top, right, bottom = (int(f * height) for f in _DRAWN_BORDERS[frame.identifier])

    image = Image.new("RGBA", (width, height), _FRAME_WHITE)
    window = (left, top, width - right, height - bottom)
    image.paste((0, 0, 0, 0), window)

    if frame.identifier == "frame-instagram":
        draw = ImageDraw.Draw(image)
        radius = top // 3
        center = (radius + top // 4, top // 2)
        draw.ellipse(
            (center[0] - radius, center[1] - radius, center[0] + radius, center[1] + radius),
            outline=_OUTLINE_GREY,
            width=3,
        )
        draw.line((0, top - 1, width, top - 1), fill=_OUTLINE_GREY, width=2)
        draw.line((0, height - bottom, width, height - bottom), fill=_OUTLINE_GREY, width=2)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class FrameLibrary:
    """
    Built-in frames plus whatever the frame repository holds.

    Args:
        repository: FrameRepository for custom frames
        frames_dir: Directory holding the built-in frame images
    """

    def __init__(self, repository, frames_dir) -> None:
        self.repository = repository
        self.frames_dir = Path(frames_dir)

    def list_frames(self) -> List[FrameAsset]:
        return list(BUILT_IN_FRAMES) + self.repository.list()

    def get(self, identifier: str) -> FrameAsset:
        """
        Raises:
            FrameNotFoundError: If no frame has that id
        """
        frame = self._find_built_in(identifier) or self.repository.get(identifier)
        if frame is None:
            raise FrameNotFoundError(identifier)
        return frame

    def add_upload(self, filename: str, data: bytes) -> FrameAsset:
        frame = frame_from_upload(filename, data)
        self.repository.save(frame)
        logger.info(f"Custom frame added: {frame.identifier} ({filename}, aspect {frame.aspect_ratio:.3f})")
        return frame

    def remove(self, identifier: str) -> bool:
        """
        Remove a custom frame.

        Returns:
            True if removed, False if no custom frame had that id

        Raises:
            FrameStoreError: If the id names a built-in frame
        """
        if self.is_built_in(identifier):
            raise FrameStoreError(f"Built-in frame cannot be removed: {identifier}")
        return self.repository.remove(identifier)

    def is_built_in(self, identifier: str) -> bool:
        return self._find_built_in(identifier) is not None

    def mime_type(self, frame: FrameAsset) -> str:
        """
        Content type to serve a frame with.

        Only image types from IMAGE_MIME_TYPES are ever returned, whatever
        the stored data URI claims.
        """
        if not frame.is_data_uri:
            return PNG_MIME_TYPE
        declared = frame.image_source[5:].split(";", 1)[0].strip().lower()
        if declared in IMAGE_MIME_TYPES.values():
            return declared
        return OCTET_STREAM_MIME_TYPE

    def load_bytes(self, frame: FrameAsset) -> bytes:
        """
        Encoded image bytes for a frame.

        Raises:
            FrameNotFoundError: If a non-built-in frame points at a missing file
            ImageDecodeError: If a custom frame's data URI is corrupt
        """
        if frame.is_data_uri:
            return decode_image_payload(frame.image_source, "frame")

        path = self.frames_dir / frame.image_source
        if path.is_file():
            return path.read_bytes()

        if frame.identifier in _DRAWN_BORDERS:
            logger.debug(f"No file for {frame.identifier} in {self.frames_dir}; drawing it")
            return draw_built_in_frame(frame)

        raise FrameNotFoundError(frame.identifier, str(path))

    @staticmethod
    def _find_built_in(identifier: str) -> Optional[FrameAsset]:
        for frame in BUILT_IN_FRAMES:
            if frame.identifier == identifier:
                return frame
        return None
