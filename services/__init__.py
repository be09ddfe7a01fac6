"""
Services layer for PhotoPrintWeb.

- FrameRepository: Custom frame persistence over a key-value store
- JsonFileStore / InMemoryStore: Key-value stores the repository runs on
- OrderService: Prices and composites an order into its submission payload

Services hold no per-request state and are shared by all request threads.
"""

from .frame_repository import FrameRepository, JsonFileStore, InMemoryStore
from .order_service import OrderService

__all__ = [
    "FrameRepository",
    "JsonFileStore",
    "InMemoryStore",
    "OrderService",
]
