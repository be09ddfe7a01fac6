"""
Crop region model.

A crop region is the rectangle of the source photo the customer picked in the
cropper, in source-image pixel coordinates. It is recomputed on every crop
change and discarded once the order is built.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from core.exceptions import InvalidCropRegionError


@dataclass(frozen=True)
class CropRegion:
    """
    Pixel rectangle in source-image coordinates.

    Width and height must be positive. The rectangle may extend past the
    image; ``clamp()`` trims it to the image bounds.
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidCropRegionError(
                    f"Crop {name} must be a finite number, got {value!r}",
                    self._raw(),
                )
        if self.width <= 0 or self.height <= 0:
            raise InvalidCropRegionError(
                f"Crop size must be positive, got {self.width}x{self.height}",
                self._raw(),
            )

    def _raw(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @property
    def box(self) -> Tuple[float, float, float, float]:
        """(left, upper, right, lower) as Pillow expects it."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def clamp(self, image_width: int, image_height: int) -> Optional["CropRegion"]:
        """
        Intersect this region with an image of the given size.

        Returns:
            The clamped region, or None when nothing of the region lies
            inside the image.
        """
        left = max(0.0, float(self.x))
        upper = max(0.0, float(self.y))
        right = min(float(image_width), float(self.x + self.width))
        lower = min(float(image_height), float(self.y + self.height))

        if right <= left or lower <= upper:
            return None

        return CropRegion(x=left, y=upper, width=right - left, height=lower - upper)

    def to_dict(self) -> Dict[str, Any]:
        return self._raw()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["CropRegion"]:
        """
        Build from the cropper's ``{x, y, width, height}`` mapping.

        Values may arrive as strings (form fields). Returns None when no crop
        data was sent at all, so compose can report the missing precondition.

        Raises:
            InvalidCropRegionError: If some fields are present but unusable
        """
        if not data:
            return None

        fields = ("x", "y", "width", "height")
        if all(data.get(name) in (None, "") for name in fields):
            return None

        values = {}
        for name in fields:
            raw = data.get(name)
            try:
                values[name] = float(raw)
            except (TypeError, ValueError):
                raise InvalidCropRegionError(
                    f"Crop {name} must be a number, got {raw!r}",
                    dict(data),
                ) from None

        return cls(**values)
