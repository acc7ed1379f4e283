"""
Utility functions for course analytics.

This module provides the scalar helpers shared by the builders and analyzers:
safe averaging, decimal truncation, duration parsing and formatting, and
summary statistics. None of these functions raise on malformed input.
"""

import math
from decimal import Decimal, ROUND_DOWN, localcontext
from typing import Any, Dict, Iterable, List, Mapping, Union

import numpy as np

from src.utils.safe_ops import safe_float, safe_dict_get

Number = Union[int, float]


# Statistical Utilities


def calculate_average(values: Iterable[Number]) -> float:
    """
    Calculate the arithmetic mean of a sequence of values.

    Args:
        values: Values to average (may be empty or None)

    Returns:
        float: The mean, or 0.0 for an empty sequence
    """
    if values is None:
        return 0.0
    items = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)


def truncate_to_decimals(value: Any, decimals: int = 2) -> float:
    """
    Truncate a number toward zero to a fixed number of decimal digits.

    This is truncation, not rounding: 59.996 at one decimal is 59.9.
    Non-numeric input yields 0.0.

    Args:
        value: Number or numeric string
        decimals: Number of decimal digits to keep

    Returns:
        float: Truncated value
    """
    number = safe_float(value, default=float("nan"))
    if math.isnan(number):
        return 0.0
    # repr-based Decimal avoids binary artefacts such as 0.29 -> 0.28999...
    exact = Decimal(repr(number))
    quantum = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        # Enough digits for the integer part plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        return float(exact.quantize(quantum, rounding=ROUND_DOWN))


def calculate_summary_statistics(values: List[float]) -> Dict[str, float]:
    """
    Calculate summary statistics for a list of values.

    Args:
        values: List of values to analyze

    Returns:
        Dict with summary statistics
    """
    if not values:
        return {
            "count": 0,
            "mean": 0.0,
            "median": 0.0,
            "min": 0.0,
            "max": 0.0,
            "std_dev": 0.0,
        }

    data = np.asarray(values, dtype=float)

    return {
        "count": int(data.size),
        "mean": float(np.mean(data)),
        "median": float(np.median(data)),
        "min": float(np.min(data)),
        "max": float(np.max(data)),
        "std_dev": float(np.std(data)),
    }


# Duration Utilities


def parse_duration_to_seconds(duration: Any) -> int:
    """
    Parse an "H:M:S" duration string into seconds.

    Exactly three colon-separated components are required; anything else,
    including a non-numeric component, is treated as a zero duration.

    Args:
        duration: Duration string such as "01:05:30"

    Returns:
        int: Total seconds
    """
    if not duration or not isinstance(duration, str):
        return 0

    parts = duration.split(":")
    if len(parts) != 3:
        return 0

    components = [safe_float(part, default=float("nan")) for part in parts]
    if any(math.isnan(c) for c in components):
        return 0

    hours, minutes, seconds = components
    return int(hours * 3600 + minutes * 60 + seconds)


def parse_time_object_to_seconds(time_spent: Any) -> int:
    """
    Parse a time-spent cell into seconds.

    Accepts either an "H:M:S" string or a mapping with optional
    ``hours``/``minutes``/``seconds`` keys.

    Args:
        time_spent: String, mapping or None

    Returns:
        int: Total seconds (0 when absent or malformed)
    """
    if not time_spent:
        return 0
    if isinstance(time_spent, str):
        return parse_duration_to_seconds(time_spent)
    if isinstance(time_spent, Mapping):
        hours = safe_float(safe_dict_get(time_spent, "hours"))
        minutes = safe_float(safe_dict_get(time_spent, "minutes"))
        seconds = safe_float(safe_dict_get(time_spent, "seconds"))
        return int(hours * 3600 + minutes * 60 + seconds)
    return 0


def format_seconds_to_duration(seconds: Any) -> str:
    """
    Format a number of seconds as a zero-padded "HH:MM:SS" string.

    Hours are not wrapped at 24. Negative or non-numeric input gives "00:00:00".

    Args:
        seconds: Number of seconds

    Returns:
        str: Formatted duration
    """
    total = safe_float(seconds, default=-1.0)
    if total < 0:
        return "00:00:00"

    hours = int(total // 3600)
    minutes = int((total % 3600) // 60)
    secs = int(total % 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
