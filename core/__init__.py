"""
Core module for PhotoPrintWeb.

Contains the custom exception hierarchy shared by pricing, compositing,
frame storage and the HTTP layer.
"""

from .exceptions import (
    PhotoPrintWebError,
    RateTableNotFoundError,
    InvalidCropRegionError,
    FailureKind,
    CompositionError,
    ImageDecodeError,
    PreconditionNotMetError,
    InvalidOutputSizeError,
    FrameNotFoundError,
    FrameStoreError,
)

__all__ = [
    "PhotoPrintWebError",
    "RateTableNotFoundError",
    "InvalidCropRegionError",
    "FailureKind",
    "CompositionError",
    "ImageDecodeError",
    "PreconditionNotMetError",
    "InvalidOutputSizeError",
    "FrameNotFoundError",
    "FrameStoreError",
]
