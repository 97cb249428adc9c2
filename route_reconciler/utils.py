"""General utility helpers shared across modules."""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any

import numpy as np


def _normalise_value(value: Any) -> Any:
    """Convert objects to JSON-friendly representations."""

    if isinstance(value, (np.floating, np.integer)):
        value = value.item()
    if isinstance(value, Decimal):
        value = float(value)
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="ignore")
    if isinstance(value, (list, tuple)):
        return [_normalise_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _normalise_value(val) for key, val in value.items()}
    return value


def json_dumps(value: Any, *, indent: int | None = None) -> str:
    """Return JSON for host output; non-finite floats become null."""

    return json.dumps(_normalise_value(value), indent=indent, allow_nan=False)
