import copy
import pandas as pd
from typing import Optional, Tuple


# Helper function for deep merging dictionaries (like config)
def deep_merge_dicts(base, updates):
    """Recursively merges dictionaries. Updates values in base."""
    result = copy.deepcopy(base)
    for key, value in updates.items():
        if isinstance(value, dict) and key in result and isinstance(result[key], dict):
            result[key] = deep_merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def _get_scale_and_suffix(max_value: float) -> Tuple[float, str]:
    """Helper function to determine the appropriate scale and suffix for values."""
    abs_max = abs(max_value) if pd.notna(max_value) else 0
    if abs_max >= 1_000_000_000:
        return 1_000_000_000, "B"
    elif abs_max >= 1_000_000:
        return 1_000_000, "M"
    elif abs_max >= 1_000:
        return 1_000, "K"
    else:
        return 1, ""


def _format_number(value: float, commas: bool, decimals: Optional[int]) -> str:
    """Format a float with optional thousands separators.

    With ``decimals=None`` integral values print without a fractional part and
    other values print with at most six places, trailing zeros removed.
    """
    sep = "," if commas else ""
    if decimals is not None:
        return f"{value:{sep}.{decimals}f}"
    if float(value).is_integer():
        return f"{int(value):{sep}d}"
    text = f"{value:{sep}.6f}".rstrip("0").rstrip(".")
    # "-0" after rounding tiny negatives away
    return "0" if text in ("-0", "") else text


def format_label(
    value: float,
    commas: bool = False,
    percent: bool = False,
    percent_scale: str = "fraction",
    decimals: Optional[int] = None,
    abbreviate: bool = False,
    prefix: str = "",
    suffix: str = "",
) -> str:
    """
    Formats a numeric cell value into the text shown next to its bar.

    Args:
        value: The numeric value
        commas: Insert thousands separators
        percent: Append a "%" suffix
        percent_scale: "fraction" multiplies by 100 first (0.25 -> "25%"),
            "points" treats the value as already scaled (0.25 -> "0.25%")
        decimals: Fixed number of decimals, or None for the shortest form
        abbreviate: Scale the value to K/M/B
        prefix: Text placed before the number
        suffix: Text placed after the number (and after any "%")

    Returns:
        The formatted label
    """
    scaled = float(value)
    unit = ""
    if percent:
        if percent_scale == "fraction":
            scaled = scaled * 100
        unit = "%"
    elif abbreviate:
        scale, unit = _get_scale_and_suffix(scaled)
        scaled = scaled / scale

    number = _format_number(scaled, commas, decimals)
    return f"{prefix}{number}{unit}{suffix}"
