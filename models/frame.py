"""
Frame asset model.

A frame is an overlay image (usually a PNG with a transparent window) drawn
on top of the cropped photo. Built-in frames ship with the app; custom
frames are uploaded by users and kept in the frame store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


DEFAULT_ASPECT_RATIO = 1.0


@dataclass(frozen=True)
class FrameAsset:
    """
    An overlay image the customer can pick.

    Stored as a plain dict in the frame store; the dict keys match what the
    browser-side customizer used (``id``, ``name``, ``src``, ``aspect``) so
    existing stored frames load unchanged.
    """

    identifier: str
    """Stable id: fixed for built-ins, ``custom-<uuid>`` for uploads."""

    display_name: str
    """Name shown in the frame picker."""

    image_source: str
    """Path relative to FRAMES_DIR (built-ins) or a data: URI (uploads)."""

    aspect_ratio: float = DEFAULT_ASPECT_RATIO
    """Frame width / height; sizes the output canvas."""

    built_in: bool = False
    """Built-in frames cannot be removed."""

    @property
    def is_data_uri(self) -> bool:
        return self.image_source.startswith("data:")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the frame store."""
        return {
            "id": self.identifier,
            "name": self.display_name,
            "src": self.image_source,
            "aspect": self.aspect_ratio,
        }

    def to_summary(self) -> Dict[str, Any]:
        """Listing view without the (possibly large) image payload."""
        return {
            "id": self.identifier,
            "name": self.display_name,
            "aspect": self.aspect_ratio,
            "builtIn": self.built_in,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], built_in: bool = False) -> "FrameAsset":
        """Create from a frame store dictionary."""
        try:
            aspect = float(data.get("aspect") or DEFAULT_ASPECT_RATIO)
        except (TypeError, ValueError):
            aspect = DEFAULT_ASPECT_RATIO
        if aspect <= 0:
            aspect = DEFAULT_ASPECT_RATIO

        return cls(
            identifier=data.get("id", ""),
            display_name=data.get("name", ""),
            image_source=data.get("src", ""),
            aspect_ratio=aspect,
            built_in=built_in,
        )
