"""Normalization helpers.

Centralizes lenient numeric parsing so extractors leave a field unset
instead of raising on a malformed number.
"""

from __future__ import annotations

import math
from typing import Any

_UINT64 = 1 << 64


def safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def signed_int64(value: int) -> int:
    """Reinterpret an unsigned 64-bit registry value as signed.

    ``ioreg`` prints negative currents as their two's-complement
    unsigned form (e.g. ``18446744073709551000``).
    """
    if value >= _UINT64 // 2:
        return value - _UINT64
    return value


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)
