"""Shared field helpers for propdash models."""

import math
from typing import Any

from pydantic.alias_generators import to_camel


def coerce_number(value: Any) -> float:
    """Coerce a loosely typed numeric value to a finite float.

    Anything that is not a number (or is NaN/infinite) becomes 0.0 so that
    summaries degrade instead of failing.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


# Persisted records use camelCase keys (riskPercent, propFirm, ...).
RECORD_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}
