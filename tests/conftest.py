"""
Shared fixtures.

Images are generated in memory with Pillow; built-in frame files are written
to a temporary FRAMES_DIR per test.
"""

import io

import pytest
from PIL import Image

from app import create_app
from modules.compositor import ImageCompositor
from modules.frames import FrameLibrary
from modules.pricing import PriceResolver
from modules.rate_tables import TIERED_RATE_TABLE
from services.frame_repository import FrameRepository, InMemoryStore
from services.order_service import OrderService

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


def encode_image(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image():
    """Factory: solid-colour image bytes of the given size, colour and mode."""

    def _make(size=(100, 100), color=RED, mode="RGB", fmt="PNG") -> bytes:
        return encode_image(Image.new(mode, size, color), fmt)

    return _make


@pytest.fixture
def transparent_frame(make_image):
    """Fully transparent 100x100 frame: the photo shows through everywhere."""
    return make_image((100, 100), (0, 0, 0, 0), mode="RGBA")


@pytest.fixture
def frames_dir(tmp_path, make_image):
    """Directory with the three built-in frame files (transparent PNGs)."""
    directory = tmp_path / "frames"
    directory.mkdir()
    (directory / "frame1.png").write_bytes(make_image((40, 50), (0, 0, 0, 0), mode="RGBA"))
    (directory / "frame2.png").write_bytes(make_image((50, 50), (0, 0, 0, 0), mode="RGBA"))
    (directory / "frame3.png").write_bytes(make_image((54, 50), (0, 0, 0, 0), mode="RGBA"))
    return directory


@pytest.fixture
def frame_repository():
    return FrameRepository(InMemoryStore())


@pytest.fixture
def frame_library(frame_repository, frames_dir):
    return FrameLibrary(frame_repository, frames_dir)


@pytest.fixture
def order_service(frame_library):
    return OrderService(
        PriceResolver(TIERED_RATE_TABLE, name="tiered"),
        ImageCompositor(output_width=100),
        frame_library,
    )


@pytest.fixture
def app(tmp_path, frames_dir):
    """Flask app on the testing config with a temporary frame store."""
    return create_app(
        "config.TestingConfig",
        overrides={
            "FRAMES_DIR": str(frames_dir),
            "FRAME_STORE_PATH": str(tmp_path / "store" / "frames.json"),
            "RATE_TABLE": "tiered",
        },
    )


@pytest.fixture
def client(app):
    return app.test_client()
