"""Passenger tier parsing and matching."""

import re
from typing import Optional

from vincyfares.models import PassengerRange

_INTEGER = re.compile(r"\d+")
_OVER_PREFIX = "over "
_RANGE_TOKEN = " to "


def _parse_int(text: str) -> Optional[int]:
    match = _INTEGER.fullmatch(text)
    return int(match.group(0)) if match else None


def parse_passenger_range(text: str) -> Optional[PassengerRange]:
    """
    Parse a tier string into a PassengerRange.

    Accepted forms, checked in this order:
        "Over 10"  -> 11 and above (prefix is case-insensitive)
        "5 to 10"  -> 5 through 10 inclusive
        "4"        -> exactly 4

    Returns:
        The parsed range, or None if the text is malformed
    """
    if text.lower().startswith(_OVER_PREFIX):
        limit = _parse_int(text[len(_OVER_PREFIX):])
        if limit is None:
            return None
        return PassengerRange(minimum=limit + 1)

    if _RANGE_TOKEN in text:
        low_text, _, high_text = text.partition(_RANGE_TOKEN)
        low, high = _parse_int(low_text), _parse_int(high_text)
        if low is None or high is None:
            return None
        return PassengerRange(minimum=low, maximum=high)

    exact = _parse_int(text)
    if exact is None:
        return None
    return PassengerRange(minimum=exact, maximum=exact)


def matches(count: int, range_text: str) -> bool:
    """Check if a passenger count falls in a tier. Malformed tiers never match."""
    passenger_range = parse_passenger_range(range_text)
    return passenger_range is not None and passenger_range.contains(count)
