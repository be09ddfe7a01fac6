"""
Unit tests for the frame catalogue.
"""

import io

import pytest
from PIL import Image

from core.exceptions import FrameNotFoundError, FrameStoreError, ImageDecodeError
from models.frame import FrameAsset
from modules.frames import (
    BUILT_IN_FRAMES,
    CUSTOM_FRAME_PREFIX,
    draw_built_in_frame,
    frame_from_upload,
)


class TestFrameFromUpload:

    def test_aspect_from_pixels(self, make_image):
        frame = frame_from_upload("wide.png", make_image((200, 100), (0, 0, 0, 0), mode="RGBA"))
        assert frame.aspect_ratio == 2.0
        assert frame.display_name == "wide.png"
        assert frame.built_in is False

    def test_undecodable_upload_defaults_to_square(self):
        frame = frame_from_upload("broken.png", b"not a png")
        assert frame.aspect_ratio == 1.0
        assert frame.image_source.startswith("data:application/octet-stream;base64,")

    def test_mime_type_from_decoded_format(self, make_image):
        frame = frame_from_upload("photo.png", make_image(fmt="JPEG"))
        assert frame.image_source.startswith("data:image/jpeg;base64,")

    def test_identifier_and_source(self, make_image):
        frame = frame_from_upload("a.png", make_image())
        assert frame.identifier.startswith(CUSTOM_FRAME_PREFIX)
        assert frame.image_source.startswith("data:image/png;base64,")

    def test_identifiers_are_unique(self, make_image):
        data = make_image()
        assert frame_from_upload("a.png", data).identifier != frame_from_upload("a.png", data).identifier


class TestFrameLibrary:

    def test_built_ins_listed_first(self, frame_library, make_image):
        uploaded = frame_library.add_upload("mine.png", make_image())

        frames = frame_library.list_frames()
        assert [f.identifier for f in frames[:3]] == ["frame-classic", "frame-polaroid", "frame-instagram"]
        assert frames[3].identifier == uploaded.identifier

    def test_built_in_aspects(self):
        aspects = {f.identifier: f.aspect_ratio for f in BUILT_IN_FRAMES}
        assert aspects == {"frame-classic": 0.8, "frame-polaroid": 1.0, "frame-instagram": 1.08}

    def test_get_built_in_and_custom(self, frame_library, make_image):
        uploaded = frame_library.add_upload("mine.png", make_image())
        assert frame_library.get("frame-polaroid").display_name == "Polaroid"
        assert frame_library.get(uploaded.identifier) == uploaded

    def test_get_unknown(self, frame_library):
        with pytest.raises(FrameNotFoundError):
            frame_library.get("custom-missing")

    def test_load_built_in_bytes(self, frame_library, frames_dir):
        frame = frame_library.get("frame-classic")
        assert frame_library.load_bytes(frame) == (frames_dir / "frame1.png").read_bytes()

    def test_missing_built_in_file_is_drawn(self, frame_library, frames_dir):
        (frames_dir / "frame3.png").unlink()

        image = Image.open(io.BytesIO(frame_library.load_bytes(frame_library.get("frame-instagram"))))

        assert image.size == (1080, 1000)
        assert image.getpixel((540, 500))[3] == 0
        assert image.getpixel((540, 20)) == (255, 255, 255, 255)

    @pytest.mark.parametrize("frame", BUILT_IN_FRAMES, ids=lambda f: f.identifier)
    def test_drawn_frames_match_aspect(self, frame):
        image = Image.open(io.BytesIO(draw_built_in_frame(frame)))
        assert image.size[0] / image.size[1] == pytest.approx(frame.aspect_ratio, abs=0.001)
        # Transparent window in the middle, opaque border at the bottom edge
        assert image.getpixel((image.size[0] // 2, image.size[1] // 2))[3] == 0
        assert image.getpixel((image.size[0] // 2, image.size[1] - 1))[3] == 255

    def test_missing_file_for_other_frames(self, frame_library):
        frame = FrameAsset("custom-file", "file.png", "file.png")
        with pytest.raises(FrameNotFoundError) as exc_info:
            frame_library.load_bytes(frame)
        assert exc_info.value.details["path"].endswith("file.png")

    def test_load_custom_bytes(self, frame_library, make_image):
        data = make_image((30, 60))
        frame = frame_library.add_upload("tall.png", data)
        assert frame_library.load_bytes(frame) == data

    def test_corrupt_custom_source(self, frame_library):
        frame = FrameAsset("custom-x", "x.png", "data:image/png;base64,@@@")
        with pytest.raises(ImageDecodeError):
            frame_library.load_bytes(frame)

    def test_remove_custom(self, frame_library, make_image):
        frame = frame_library.add_upload("mine.png", make_image())
        assert frame_library.remove(frame.identifier) is True
        assert frame_library.remove(frame.identifier) is False

    @pytest.mark.parametrize("source,expected", [
        ("data:image/webp;base64,AA==", "image/webp"),
        ("data:text/html;base64,AA==", "application/octet-stream"),
        ("data:image/svg+xml;base64,AA==", "application/octet-stream"),
        ("frame9.png", "image/png"),
    ])
    def test_served_mime_type(self, frame_library, source, expected):
        assert frame_library.mime_type(FrameAsset("custom-x", "x", source)) == expected

    def test_built_in_cannot_be_removed(self, frame_library):
        assert frame_library.is_built_in("frame-classic")
        with pytest.raises(FrameStoreError):
            frame_library.remove("frame-classic")
