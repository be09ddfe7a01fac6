"""
Order data models.

These models represent a customer's photo print order as it is assembled:
quote -> compose -> payload.

Thread Safety:
    - PhotoOrder is mutable while a request fills it in
    - Use PhotoOrder.freeze() to get the immutable snapshot the payload is
      built from
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class CustomerInfo:
    """
    Free-form customer fields.

    Passed through to the order-intake service untouched.
    """

    name: str = ""
    phone: str = ""
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomerInfo":
        return cls(
            name=data.get("name", ""),
            phone=data.get("phone", ""),
            # Older clients sent "note"
            notes=data.get("notes", data.get("note", "")),
        )


@dataclass(frozen=True)
class PriceBreakdown:
    """
    Unit price, quantity and total for an order.

    An unresolved price is 0, so the total is 0 as well.
    """

    unit_price: int
    """Price per print in currency units."""

    quantity: int
    """Number of prints."""

    found: bool = True
    """False when no bracket matched and unit_price was defaulted to 0."""

    @property
    def total(self) -> int:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        """Wire format used in the order payload."""
        return {
            "unitPrice": self.unit_price,
            "quantity": self.quantity,
            "total": self.total,
        }


@dataclass
class PhotoOrder:
    """
    A customer's order while it is being assembled.

    Lifecycle:
        1. Created from the submitted form (category, size, quantity, customer)
        2. Priced by the PriceResolver
        3. Given the composited image from the ImageCompositor
        4. Frozen and turned into the submission payload
    """

    order_id: str
    category: str
    size: str
    quantity: int
    frame_id: str = ""
    customer: CustomerInfo = field(default_factory=CustomerInfo)

    price: Optional[PriceBreakdown] = None
    """Set once the order has been quoted."""

    image_data_uri: str = ""
    """data:image/png;base64,... set once the image has been composed."""

    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def freeze(self) -> "FrozenPhotoOrder":
        """
        Create an immutable snapshot of this order.

        Raises:
            ValueError: If the order has not been priced or composed yet
        """
        if self.price is None:
            raise ValueError("Order must be priced before it is frozen")
        if not self.image_data_uri:
            raise ValueError("Order image must be composed before it is frozen")

        return FrozenPhotoOrder(
            order_id=self.order_id,
            category=self.category,
            size=self.size,
            frame_id=self.frame_id,
            customer=self.customer,
            price=self.price,
            image_data_uri=self.image_data_uri,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class FrozenPhotoOrder:
    """
    Immutable snapshot of a completed order.

    This is what gets handed to the order-intake service.
    """

    order_id: str
    category: str
    size: str
    frame_id: str
    customer: CustomerInfo
    price: PriceBreakdown
    image_data_uri: str
    created_at: str

    @property
    def quantity(self) -> int:
        return self.price.quantity

    @property
    def total(self) -> int:
        return self.price.total

    def to_payload(self) -> Dict[str, Any]:
        """
        JSON-serializable submission payload.

        Customer fields sit at the top level, as the intake service expects.
        """
        return {
            "id": self.order_id,
            "name": self.customer.name,
            "phone": self.customer.phone,
            "notes": self.customer.notes,
            "category": self.category,
            "size": self.size,
            "frameId": self.frame_id,
            "price": self.price.to_dict(),
            "image": self.image_data_uri,
            "createdAt": self.created_at,
        }
