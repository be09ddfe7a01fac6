"""
Unit tests for the data models.
"""

import json

import pytest

from core.exceptions import InvalidCropRegionError
from models import (
    CropRegion,
    CustomerInfo,
    FrameAsset,
    PhotoOrder,
    PriceBreakdown,
)


# Tests for CropRegion

class TestCropRegion:

    def test_box(self):
        assert CropRegion(10, 20, 30, 40).box == (10, 20, 40, 60)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-5, 10)])
    def test_non_positive_size_rejected(self, width, height):
        with pytest.raises(InvalidCropRegionError):
            CropRegion(0, 0, width, height)

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidCropRegionError):
            CropRegion(0, 0, float("inf"), 10)

    def test_from_dict_with_strings(self):
        region = CropRegion.from_dict({"x": "12", "y": "0", "width": "100.5", "height": "80"})
        assert region == CropRegion(12.0, 0.0, 100.5, 80.0)

    def test_from_dict_empty_means_no_crop(self):
        assert CropRegion.from_dict(None) is None
        assert CropRegion.from_dict({}) is None
        assert CropRegion.from_dict({"x": "", "y": None, "width": "", "height": None}) is None

    def test_from_dict_partial_is_invalid(self):
        with pytest.raises(InvalidCropRegionError):
            CropRegion.from_dict({"x": 0, "y": 0, "width": "wide", "height": 10})

    def test_clamp_inside_is_unchanged(self):
        region = CropRegion(10, 10, 20, 20)
        assert region.clamp(100, 100) == region

    def test_clamp_trims_to_image(self):
        assert CropRegion(-10, 90, 50, 50).clamp(100, 100) == CropRegion(0, 90, 40, 10)

    def test_clamp_outside_is_none(self):
        assert CropRegion(100, 0, 10, 10).clamp(100, 100) is None


# Tests for FrameAsset

class TestFrameAsset:

    def test_store_round_trip_keys(self):
        frame = FrameAsset("custom-1", "Gold.png", "data:image/png;base64,AA==", 1.5)
        assert frame.to_dict() == {
            "id": "custom-1",
            "name": "Gold.png",
            "src": "data:image/png;base64,AA==",
            "aspect": 1.5,
        }
        assert FrameAsset.from_dict(frame.to_dict()) == frame

    @pytest.mark.parametrize("aspect", [None, 0, -2, "wide"])
    def test_bad_aspect_defaults_to_one(self, aspect):
        frame = FrameAsset.from_dict({"id": "custom-2", "name": "x", "src": "", "aspect": aspect})
        assert frame.aspect_ratio == 1.0

    def test_summary_has_no_image(self):
        summary = FrameAsset("frame-polaroid", "Polaroid", "frame2.png", built_in=True).to_summary()
        assert summary == {"id": "frame-polaroid", "name": "Polaroid", "aspect": 1.0, "builtIn": True}


# Tests for orders

class TestPhotoOrder:

    @pytest.fixture
    def order(self):
        return PhotoOrder(
            order_id="0d1f9a52-0000-4000-8000-000000000000",
            category="Ép Plastic",
            size="10x15",
            quantity=20,
            frame_id="frame-classic",
            customer=CustomerInfo(name="Lan", phone="0901234567", notes="Gift wrap"),
            created_at="2026-10-18T08:00:00+00:00",
        )

    def test_freeze_requires_price(self, order):
        order.image_data_uri = "data:image/png;base64,AA=="
        with pytest.raises(ValueError):
            order.freeze()

    def test_freeze_requires_image(self, order):
        order.price = PriceBreakdown(9000, 20)
        with pytest.raises(ValueError):
            order.freeze()

    def test_payload(self, order):
        order.price = PriceBreakdown(9000, 20)
        order.image_data_uri = "data:image/png;base64,AA=="

        payload = order.freeze().to_payload()

        assert payload == {
            "id": "0d1f9a52-0000-4000-8000-000000000000",
            "name": "Lan",
            "phone": "0901234567",
            "notes": "Gift wrap",
            "category": "Ép Plastic",
            "size": "10x15",
            "frameId": "frame-classic",
            "price": {"unitPrice": 9000, "quantity": 20, "total": 180000},
            "image": "data:image/png;base64,AA==",
            "createdAt": "2026-10-18T08:00:00+00:00",
        }
        json.dumps(payload)

    def test_frozen_order_is_immutable(self, order):
        order.price = PriceBreakdown(9000, 20)
        order.image_data_uri = "data:image/png;base64,AA=="
        frozen = order.freeze()

        with pytest.raises(AttributeError):
            frozen.size = "5x7"
        assert frozen.total == 180000
        assert frozen.quantity == 20

    def test_customer_from_dict_accepts_note(self):
        assert CustomerInfo.from_dict({"name": "Minh", "note": "matte"}).notes == "matte"
