"""
Order assembly service.

Ties the two independent core pieces together for one order:

    1. Resolve the frame the customer picked
    2. Quote the price (PriceResolver)
    3. Composite photo + frame (ImageCompositor)
    4. Freeze the order and build the submission payload

Forwarding the payload to the order-intake service is the caller's job; this
service only produces it.

Usage:
    service = OrderService(resolver, compositor, frame_library)

    order = service.build_order(
        photo=photo_bytes,
        crop_region=CropRegion(0, 0, 800, 1000),
        frame_id="frame-classic",
        category="Ép Plastic",
        size="10x15",
        quantity=20,
        customer=CustomerInfo(name="Lan", phone="0901234567"),
    )
    payload = order.to_payload()
"""

from __future__ import annotations

import uuid
from typing import Optional

from core.exceptions import PreconditionNotMetError
from logging_config import get_logger, get_order_logger
from models.crop import CropRegion
from models.order import CustomerInfo, FrozenPhotoOrder, PhotoOrder, PriceBreakdown
from modules.compositor import ImageCompositor, to_data_uri
from modules.frames import FrameLibrary
from modules.pricing import PriceResolver

# Module logger
logger = get_logger(__name__)


class OrderService:
    """
    Builds priced, composited orders.

    Holds no per-order state; safe to share across request threads.
    """

    def __init__(
        self,
        resolver: PriceResolver,
        compositor: ImageCompositor,
        frame_library: FrameLibrary,
    ):
        self.resolver = resolver
        self.compositor = compositor
        self.frame_library = frame_library

    def quote(self, category: str, size: str, quantity: int) -> PriceBreakdown:
        return self.resolver.quote(category, size, quantity)

    def render(
        self,
        photo: Optional[bytes],
        crop_region: Optional[CropRegion],
        frame_id: str,
        output_width: Optional[int] = None,
    ) -> bytes:
        """
        Composite a photo with a catalogue frame.

        Raises:
            PreconditionNotMetError: No frame chosen, no photo or no crop
            FrameNotFoundError: Unknown frame id or missing frame file
            CompositionError: Any other compositing failure
        """
        if not frame_id:
            raise PreconditionNotMetError("frame")

        frame = self.frame_library.get(frame_id)
        frame_bytes = self.frame_library.load_bytes(frame)

        return self.compositor.compose(
            photo,
            crop_region,
            frame_bytes,
            output_width=output_width,
            frame_aspect=frame.aspect_ratio,
        )

    def build_order(
        self,
        photo: Optional[bytes],
        crop_region: Optional[CropRegion],
        frame_id: str,
        category: str,
        size: str,
        quantity: int,
        customer: Optional[CustomerInfo] = None,
        output_width: Optional[int] = None,
    ) -> FrozenPhotoOrder:
        """
        Price and composite an order, returning its frozen snapshot.

        Raises:
            CompositionError, FrameNotFoundError: The image could not be built;
                no order is produced
        """
        order = PhotoOrder(
            order_id=str(uuid.uuid4()),
            category=category,
            size=size,
            quantity=quantity,
            frame_id=frame_id,
            customer=customer or CustomerInfo(),
        )
        order_logger = get_order_logger(order.order_id)
        order_logger.info(f"Building order: {category}/{size} x{quantity}, frame {frame_id or '-'}")

        order.price = self.quote(category, size, quantity)
        if not order.price.found:
            order_logger.warning("No matching price bracket; unit price set to 0")
        order_logger.debug(f"Price: {order.price.to_dict()}")

        try:
            image = self.render(photo, crop_region, frame_id, output_width)
        except Exception as e:
            order_logger.error(f"Compositing failed: {e}")
            raise

        order.image_data_uri = to_data_uri(image)
        frozen = order.freeze()

        order_logger.info(f"Order ready: {frozen.quantity} print(s), total {frozen.total} ({len(image)} byte image)")
        return frozen
