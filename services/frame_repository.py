"""
Custom frame persistence.

User-uploaded frames are kept in a key-value store under a single key
("customFrames_v1") as a list of frame dicts, newest first. The repository
is the only thing that knows that layout; routes and the frame library
talk to it through list/get/save/remove.

Thread Safety:
    - JsonFileStore serializes file access with a threading.Lock
    - FrameRepository holds its own lock around read-modify-write so two
      concurrent uploads cannot drop each other's frame
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.exceptions import FrameStoreError
from logging_config import get_logger
from models.frame import FrameAsset

# Module logger
logger = get_logger(__name__)

DEFAULT_FRAMES_KEY = "customFrames_v1"


class InMemoryStore:
    """Dict-backed key-value store. Contents are lost on restart."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value


class JsonFileStore:
    """
    Key-value store persisted as one JSON object on disk.

    Writes go to a temporary file that then replaces the store, so a crash
    mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise FrameStoreError(f"Cannot read frame store {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise FrameStoreError(f"Frame store {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise FrameStoreError(f"Cannot write frame store {self.path}: {e}") from e


class FrameRepository:
    """
    Custom frames stored under one key of a key-value store.

    Args:
        store: Object with get(key, default) and set(key, value)
        key: Store key holding the frame list
    """

    def __init__(self, store, key: str = DEFAULT_FRAMES_KEY):
        self._store = store
        self._key = key
        self._lock = threading.Lock()

    def list(self) -> List[FrameAsset]:
        """All custom frames, newest first."""
        return [FrameAsset.from_dict(item) for item in self._raw_frames()]

    def get(self, identifier: str) -> Optional[FrameAsset]:
        for frame in self.list():
            if frame.identifier == identifier:
                return frame
        return None

    def save(self, frame: FrameAsset) -> FrameAsset:
        """
        Store a frame at the front of the list.

        Saving an id that already exists replaces the old entry.

        Raises:
            FrameStoreError: If the store cannot be written
        """
        with self._lock:
            frames = [
                item for item in self._raw_frames()
                if item.get("id") != frame.identifier
            ]
            frames.insert(0, frame.to_dict())
            self._store.set(self._key, frames)

        logger.debug(f"Saved frame {frame.identifier} ({len(frames)} custom frames)")
        return frame

    def remove(self, identifier: str) -> bool:
        """
        Returns:
            True if a frame was removed, False if none had that id
        """
        with self._lock:
            frames = self._raw_frames()
            remaining = [item for item in frames if item.get("id") != identifier]
            if len(remaining) == len(frames):
                return False
            self._store.set(self._key, remaining)

        logger.info(f"Removed custom frame {identifier}")
        return True

    def _raw_frames(self) -> List[Dict[str, Any]]:
        raw = self._store.get(self._key, [])
        if not isinstance(raw, list):
            raise FrameStoreError(f"Frame store key {self._key} does not hold a list", self._key)
        return [item for item in raw if isinstance(item, dict)]
