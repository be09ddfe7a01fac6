"""Quantity-bracket price resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from logging_config import get_logger
from models.order import PriceBreakdown
from modules.rate_tables import RateTable

logger = get_logger(__name__)


class BracketKind(Enum):
    RANGE = "range"    # "min-max", inclusive both ends
    OPEN = "open"      # "min+"
    BELOW = "below"    # "<max", exclusive


_RANGE_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")
_OPEN_RE = re.compile(r"^\s*(\d+)\s*\+\s*$")
_BELOW_RE = re.compile(r"^\s*<\s*(\d+)\s*$")


@dataclass(frozen=True)
class Bracket:
    """A parsed bracket descriptor and the unit price it maps to."""

    descriptor: str
    kind: BracketKind
    price: int
    lower: Optional[int] = None
    upper: Optional[int] = None

    def matches(self, quantity: int) -> bool:
        if self.kind is BracketKind.RANGE:
            return self.lower <= quantity <= self.upper
        if self.kind is BracketKind.OPEN:
            return quantity >= self.lower
        return quantity < self.upper


def parse_bracket(descriptor: str, price: int) -> Optional[Bracket]:
    """
    Parse a bracket descriptor such as ``"16-40"``, ``"1000+"`` or ``"<15"``.

    Returns None for anything else; callers skip those entries.
    """
    if not isinstance(descriptor, str):
        return None

    match = _RANGE_RE.match(descriptor)
    if match:
        return Bracket(
            descriptor=descriptor,
            kind=BracketKind.RANGE,
            price=price,
            lower=int(match.group(1)),
            upper=int(match.group(2)),
        )

    match = _OPEN_RE.match(descriptor)
    if match:
        return Bracket(descriptor, BracketKind.OPEN, price, lower=int(match.group(1)))

    match = _BELOW_RE.match(descriptor)
    if match:
        return Bracket(descriptor, BracketKind.BELOW, price, upper=int(match.group(1)))

    return None


def resolve(table: RateTable, category: str, size: str, quantity: int) -> Optional[int]:
    """
    Unit price for ``quantity`` prints of ``category``/``size``.

    Brackets are tried in the order they are stored and the first match
    wins, so overlapping brackets resolve to whichever comes first.
    Malformed descriptors never match.

    Returns:
        The unit price, or None when the category/size is unknown or no
        bracket contains the quantity
    """
    pricing = table.get(category, {}).get(size)
    if not pricing:
        return None

    for descriptor, price in pricing.items():
        bracket = parse_bracket(descriptor, price)
        if bracket is None:
            logger.debug(f"Skipping malformed bracket {descriptor!r} for {category}/{size}")
            continue
        if bracket.matches(quantity):
            return bracket.price

    return None


class PriceResolver:
    """Quotes prices against one rate table."""

    def __init__(self, table: RateTable, name: str = "") -> None:
        self.table = table
        self.name = name

    def resolve(self, category: str, size: str, quantity: int) -> Optional[int]:
        return resolve(self.table, category, size, quantity)

    def price_for(self, category: str, size: str, quantity: int) -> int:
        """Unit price, with "not found" treated as 0."""
        price = self.resolve(category, size, quantity)
        return price if price is not None else 0

    def quote(self, category: str, size: str, quantity: int) -> PriceBreakdown:
        """
        Price breakdown for an order line.

        When the category and size exist but no bracket holds the quantity,
        the table has a gap (e.g. 151-999 in the tiered list). That is
        logged and priced 0; the table data is not patched here.
        """
        price = self.resolve(category, size, quantity)

        if price is None:
            if size in self.table.get(category, {}):
                logger.warning(
                    f"No price bracket for quantity {quantity} in "
                    f"{category}/{size} (table {self.name or 'unnamed'})"
                )
            else:
                logger.debug(f"Unknown category/size: {category}/{size}")
            return PriceBreakdown(unit_price=0, quantity=quantity, found=False)

        return PriceBreakdown(unit_price=price, quantity=quantity)

    def categories(self) -> List[str]:
        return list(self.table)

    def sizes(self, category: str) -> List[str]:
        return list(self.table.get(category, {}))

    def brackets(self, category: str, size: str) -> List[Bracket]:
        """Well-formed brackets for a size, in table order."""
        pricing = self.table.get(category, {}).get(size, {})
        parsed = (parse_bracket(descriptor, price) for descriptor, price in pricing.items())
        return [bracket for bracket in parsed if bracket is not None]

    def catalogue(self) -> Dict[str, List[str]]:
        """Category -> sizes, in table order."""
        return {category: self.sizes(category) for category in self.table}
