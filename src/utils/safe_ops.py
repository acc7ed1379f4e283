"""
Utility functions for handling None and malformed values in the flat table.

This module provides functions to safely convert the loosely typed cells of
the learning-event table (ids, percentages, counts) without raising. Anything
that cannot be interpreted degrades to a neutral value so that a single bad
cell never aborts a hierarchy build.
"""

import math
from typing import Optional, Any, Dict, Union


def safe_str(value: Any) -> str:
    """
    Safely convert any value to a string, handling None values.

    Args:
        value: Any value that might be None

    Returns:
        A string representation or empty string if None
    """
    if value is None:
        return ""
    return str(value)


def safe_id(value: Any) -> Optional[str]:
    """
    Normalize an entity identifier to a string.

    Integral floats (as produced by spreadsheet or CSV exports) lose their
    trailing ".0" so that 7, 7.0 and "7" address the same entity.

    Args:
        value: Raw identifier cell

    Returns:
        Optional[str]: The identifier, or None when the cell is absent or blank
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return str(int(value))
    text = str(value).strip()
    return text or None


def safe_float(value: Any, default: float = 0.0) -> float:
    """
    Safely convert a value to a float.

    Args:
        value: A number, numeric string or anything else
        default: Value returned when conversion is impossible

    Returns:
        float: The parsed value, or the default for None, blanks, NaN and junk
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def safe_int(value: Any, default: int = 0) -> int:
    """
    Safely convert a value to an int, truncating any fractional part.

    Args:
        value: A number, numeric string or anything else
        default: Value returned when conversion is impossible

    Returns:
        int: The parsed value or the default
    """
    result = safe_float(value, default=float("nan"))
    if math.isnan(result):
        return default
    return int(result)


def safe_number(value: Any, default: Union[int, float] = 0) -> Union[int, float]:
    """Parse a sort key such as a chapter or unit number, keeping ints as ints."""
    result = safe_float(value, default=float("nan"))
    if math.isnan(result):
        return default
    if result.is_integer():
        return int(result)
    return result


def safe_dict_get(d: Optional[Dict], key: Any, default: Any = None) -> Any:
    """
    Safely get a value from a dictionary, handling None values and missing keys.

    Args:
        d: The dictionary to get the value from
        key: The key to look up
        default: The default value to return if the key doesn't exist

    Returns:
        The value or the default
    """
    if d is None:
        return default
    return d.get(key, default)


def is_blank(value: Any) -> bool:
    """True for cells that carry no information (None, "", NaN, empty dict)."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, (str, dict, list)) and len(value) == 0:
        return True
    return False
