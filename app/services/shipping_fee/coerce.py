# app/services/shipping_fee/coerce.py
from __future__ import annotations

import math
from typing import Any, Optional


def to_int(value: Any, default: int = 0) -> int:
    """
    Provider JSON is loosely typed (ids and fees come back as int, float or
    numeric string). Anything absent or non-numeric becomes `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return default
        return int(value)
    if isinstance(value, str):
        t = value.strip()
        if not t:
            return default
        try:
            return int(t)
        except ValueError:
            pass
        try:
            f = float(t)
        except ValueError:
            return default
        if math.isnan(f) or math.isinf(f):
            return default
        return int(f)
    return default


def to_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        t = value.strip()
        return t if t else None
    if isinstance(value, (int, float)):
        return str(value)
    return None
