"""Helper modules for the Photo Print Web application."""

__all__ = [
    "compositor",
    "frames",
    "pricing",
    "rate_tables",
]
