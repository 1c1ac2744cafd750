import math
import numbers
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Number:
    """A finite numeric cell value, stored as float."""

    value: float


@dataclass(frozen=True)
class Missing:
    """An absent cell value (None, NaN, pd.NA, NaT)."""


@dataclass(frozen=True)
class Invalid:
    """A cell value that cannot be drawn as a bar."""

    raw: Any
    reason: str


CellValue = Union[Number, Missing, Invalid]


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        result = pd.isna(value)
    except (TypeError, ValueError):
        return False
    # list-likes give an array back; they are never a single missing cell
    return isinstance(result, (bool, np.bool_)) and bool(result)


def classify(value: Any) -> CellValue:
    """
    Classifies a raw cell value into Number, Missing or Invalid.

    Args:
        value: A raw value taken from a table column

    Returns:
        The tagged cell value
    """
    if isinstance(value, (Number, Missing, Invalid)):
        return value
    if _is_missing(value):
        return Missing()
    if isinstance(value, (bool, np.bool_)):
        return Invalid(value, "boolean values are not drawn as bars")
    if isinstance(value, numbers.Real):
        number = float(value)
        if not math.isfinite(number):
            return Invalid(value, "non-finite values are not drawn as bars")
        return Number(number)
    return Invalid(value, f"expected a number, got {type(value).__name__}")
