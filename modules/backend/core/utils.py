"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and
    assumed to be UTC. The note store uses this as its default clock,
    so note timestamps and response metadata share one convention.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
