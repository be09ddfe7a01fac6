"""
Data models for PhotoPrintWeb.

This module contains dataclasses for:
- CropRegion: Rectangle of the source photo to print
- FrameAsset: Overlay image drawn on top of the photo
- PhotoOrder: Order being assembled (customer, price, image)
- FrozenPhotoOrder: Immutable snapshot turned into the submission payload

CropRegion, FrameAsset and FrozenPhotoOrder are frozen (immutable).
"""

from .crop import CropRegion
from .frame import FrameAsset, DEFAULT_ASPECT_RATIO
from .order import CustomerInfo, PriceBreakdown, PhotoOrder, FrozenPhotoOrder

__all__ = [
    # Compositing inputs
    "CropRegion",
    "FrameAsset",
    "DEFAULT_ASPECT_RATIO",
    # Order models
    "CustomerInfo",
    "PriceBreakdown",
    "PhotoOrder",
    "FrozenPhotoOrder",
]
