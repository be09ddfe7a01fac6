"""
Custom exceptions for PhotoPrintWeb.

Exception Hierarchy:
    PhotoPrintWebError (base)
    ├── RateTableNotFoundError    - Configured rate table does not exist (startup failure)
    ├── InvalidCropRegionError    - Crop rectangle with non-positive size
    ├── CompositionError          - Compositing failed (runtime, graceful)
    │   ├── ImageDecodeError         - Photo or frame bytes are not a readable image
    │   ├── PreconditionNotMetError  - Crop region or frame missing
    │   └── InvalidOutputSizeError   - Output width <= 0
    ├── FrameNotFoundError        - Unknown frame id or missing frame image
    └── FrameStoreError           - Frame store read/write failed, or frame not removable

Usage:
    RateTableNotFoundError makes the app fail fast at startup.
    Everything else is recoverable: the caller re-uploads, re-crops or retries.
    Price lookups never raise; an unknown category/size is simply priced 0.
"""

from enum import Enum
from typing import Optional, Dict, Any


class PhotoPrintWebError(Exception):
    """
    Base exception for all PhotoPrintWeb errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# STARTUP ERRORS - Application will not start if these occur
# =============================================================================

class RateTableNotFoundError(PhotoPrintWebError):
    """
    The configured RATE_TABLE does not name a known rate table.

    Quoting against the wrong price list is worse than not starting, so
    this is FATAL.
    """

    def __init__(self, table_name: str, available: Optional[list] = None):
        message = f"Unknown rate table: {table_name}"
        details = {
            "table_name": table_name,
            "available": available or [],
            "resolution": "Set RATE_TABLE in .env to one of the available tables"
        }
        super().__init__(message, details)
        self.table_name = table_name


# =============================================================================
# RUNTIME ERRORS - Application continues, but operation fails gracefully
# =============================================================================

class InvalidCropRegionError(PhotoPrintWebError):
    """Crop rectangle has a non-positive width/height or non-numeric fields."""

    def __init__(self, message: str, region: Optional[Dict[str, Any]] = None):
        details = {
            "region": region,
            "resolution": "Re-crop the photo",
        }
        super().__init__(message, details)


class FailureKind(Enum):
    """Why a composition failed."""

    DECODE_ERROR = "decode_error"
    """Photo or frame bytes could not be decoded."""

    PRECONDITION_NOT_MET = "precondition_not_met"
    """Compose was called before a crop region or frame was established."""

    INVALID_ARGUMENT = "invalid_argument"
    """An argument is out of range (e.g. output width <= 0)."""


class CompositionError(PhotoPrintWebError):
    """
    Base class for compositing failures.

    Every subclass carries a ``kind`` so HTTP handlers can map it to a
    status code without isinstance chains. No partial output is ever
    returned alongside one of these.
    """

    kind = FailureKind.INVALID_ARGUMENT

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        error_details["kind"] = self.kind.value
        super().__init__(message, error_details)


class ImageDecodeError(CompositionError):
    """
    Image bytes are unreadable or corrupt.

    ``source`` names which input failed ("photo" or "frame").
    """

    kind = FailureKind.DECODE_ERROR

    def __init__(self, source: str, reason: str = ""):
        message = f"Could not decode {source} image"
        if reason:
            message = f"{message}: {reason}"
        details = {
            "source": source,
            "resolution": f"Upload the {source} again as a PNG or JPEG file",
        }
        super().__init__(message, details)
        self.source = source


class PreconditionNotMetError(CompositionError):
    """Compose was called before a crop region or frame was established."""

    kind = FailureKind.PRECONDITION_NOT_MET

    def __init__(self, missing: str):
        message = f"Cannot compose image: {missing} is missing"
        details = {
            "missing": missing,
            "resolution": "Upload a photo, choose a frame and crop before composing",
        }
        super().__init__(message, details)
        self.missing = missing


class InvalidOutputSizeError(CompositionError):
    """
    Requested output size is unusable.

    Either the width is not a positive integer, or the canvas it implies
    (width x aspect-derived height) is larger than the pixel limit.
    """

    kind = FailureKind.INVALID_ARGUMENT

    def __init__(self, output_width: Any, output_height: Optional[int] = None, max_pixels: Optional[int] = None):
        if output_height is None:
            message = f"Output width must be positive, got {output_width}"
        else:
            message = f"Output canvas {output_width}x{output_height} exceeds the {max_pixels} pixel limit"
        details = {"output_width": output_width}
        if output_height is not None:
            details["output_height"] = output_height
            details["max_pixels"] = max_pixels
        super().__init__(message, details)
        self.output_width = output_width
        self.output_height = output_height


class FrameNotFoundError(PhotoPrintWebError):
    """
    No frame with the given identifier, or its image file is missing.

    Built-in frame images are looked up in FRAMES_DIR.
    """

    def __init__(self, identifier: str, path: Optional[str] = None):
        message = f"Frame not found: {identifier}"
        details: Dict[str, Any] = {"identifier": identifier}
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.identifier = identifier


class FrameStoreError(PhotoPrintWebError):
    """Reading or writing the custom frame store failed."""

    def __init__(self, message: str, key: Optional[str] = None):
        details = {}
        if key:
            details["key"] = key
        super().__init__(message, details)
        self.key = key
