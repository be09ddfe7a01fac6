"""
Static price lists, in VND per print.

Two lists are in use and they describe brackets differently:

    "range"  - "10-15", "16-40", ..., "1000+"
    "tiered" - "<15", "15-40", ..., "1000+"

Both are resolved by the same code in modules.pricing. Bracket order inside
each size matters: the first matching bracket wins.
"""

from typing import Dict

from core.exceptions import RateTableNotFoundError

RateTable = Dict[str, Dict[str, Dict[str, int]]]

SLEEVE = "Màng Sleeve"
LAMINATED = "Ép Plastic"

RANGE_RATE_TABLE: RateTable = {
    SLEEVE: {
        "5x7": {"10-15": 1500, "16-40": 1300, "41-100": 900, "101-150": 700, "1000+": 500},
        "6x9": {"10-15": 1800, "16-40": 1500, "41-100": 1000, "101-150": 800, "1000+": 600},
    },
    LAMINATED: {
        "5x7": {"10-15": 2300, "16-40": 2000, "41-100": 1200, "101-150": 900, "1000+": 600},
        "6x9": {"10-15": 5000, "16-40": 4000, "41-100": 3800, "101-150": 3500, "1000+": 3000},
        "9x12": {"10-15": 6600, "16-40": 5900, "41-100": 5300, "101-150": 4900, "1000+": 4200},
        "10x15": {"10-15": 9000, "16-40": 8000, "41-100": 7300, "101-150": 7000, "1000+": 6000},
        "13x18": {"10-15": 12000, "16-40": 10800, "41-100": 9300, "101-150": 8300, "1000+": 7300},
        "15x21": {"10-15": 18500, "16-40": 17800, "41-100": 16300, "101-150": 14300, "1000+": 12500},
        "21x29 (A4)": {"10-15": 18500, "16-40": 17800, "41-100": 16300, "101-150": 14300, "1000+": 12500},
    },
}

TIERED_RATE_TABLE: RateTable = {
    SLEEVE: {
        "5x7": {"<15": 4800, "15-40": 4300, "41-100": 3800, "101-150": 3300, "1000+": 1500},
        "6x9": {"<15": 6500, "15-40": 6000, "41-100": 4000, "101-150": 3500, "1000+": 1800},
    },
    LAMINATED: {
        "5x7": {"<15": 5000, "15-40": 4500, "41-100": 4000, "101-150": 3500, "1000+": 1800},
        "6x9": {"<15": 7000, "15-40": 6500, "41-100": 6000, "101-150": 5500, "1000+": 2000},
        "9x12": {"<15": 8000, "15-40": 7500, "41-100": 7000, "101-150": 6500, "1000+": 3500},
        "10x15": {"<15": 10000, "15-40": 9000, "41-100": 8000, "101-150": 7500, "1000+": 5000},
        "13x18": {"<15": 15000, "15-40": 14500, "41-100": 14000, "101-150": 12000, "1000+": 5000},
        "15x21": {"<15": 17000, "15-40": 16000, "41-100": 14000, "101-150": 13000, "1000+": 11000},
        "21x29 (A4)": {"<15": 20000, "15-40": 18000, "41-100": 17000, "101-150": 15500, "1000+": 5000},
    },
}

RATE_TABLES: Dict[str, RateTable] = {
    "range": RANGE_RATE_TABLE,
    "tiered": TIERED_RATE_TABLE,
}


def get_rate_table(name: str) -> RateTable:
    """
    Look up a price list by name.

    Raises:
        RateTableNotFoundError: If no table has that name
    """
    try:
        return RATE_TABLES[name]
    except KeyError:
        raise RateTableNotFoundError(name, sorted(RATE_TABLES)) from None
