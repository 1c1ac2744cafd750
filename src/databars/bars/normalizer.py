import logging
import numpy as np
import pandas as pd
from dataclasses import dataclass
from collections.abc import Iterable
from typing import Any, List, Optional, Tuple

from ..exceptions import CellTypeError, DataBarsConfigError
from .values import CellValue, Invalid, Missing, Number, classify

logger = logging.getLogger(__name__)

NEGATIVE_POLICIES = ("abs", "clamp", "error")

LEFT = "left"
RIGHT = "right"
NONE = "none"


def _as_cells(values: Iterable[Any]) -> List[CellValue]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise DataBarsConfigError(
            f"Column values must be a sequence, got {type(values).__name__}"
        )
    if isinstance(values, pd.DataFrame):
        raise DataBarsConfigError("Pass a single column (Series), not a DataFrame")
    return [classify(v) for v in values]


@dataclass(frozen=True)
class ColumnScale:
    """
    Column-wide normalization context, computed once and shared by every cell.

    Attributes:
        denominator: Value that maps to a 100% wide bar (never zero)
        max_abs: Largest absolute numeric value in the column (0 if none)
        minimum: Smallest numeric value, or None for a column without numbers
        maximum: Largest numeric value, or None
        mean: Mean of the numeric values, or None
        count: Number of numeric cells
        missing: Number of missing cells
        invalid: Number of non-numeric cells
    """

    denominator: float
    max_abs: float
    minimum: Optional[float]
    maximum: Optional[float]
    mean: Optional[float]
    count: int
    missing: int = 0
    invalid: int = 0

    @classmethod
    def from_values(
        cls, values: Iterable[Any], max_value: Optional[float] = None
    ) -> "ColumnScale":
        """
        Builds the scale for a column.

        Missing and non-numeric entries are excluded from every statistic.
        An empty, all-missing or all-zero column gets a denominator of 1 so
        that every bar comes out 0% wide.

        Args:
            values: The column's raw values
            max_value: Optional explicit denominator overriding the column maximum

        Returns:
            The column scale
        """
        cells = _as_cells(values)
        numbers = np.array(
            [cell.value for cell in cells if isinstance(cell, Number)], dtype=float
        )
        missing = sum(1 for cell in cells if isinstance(cell, Missing))
        invalid = sum(1 for cell in cells if isinstance(cell, Invalid))

        if invalid:
            logger.warning(
                f"Skipping {invalid} non-numeric value(s) when scaling column."
            )

        if numbers.size == 0:
            logger.warning("No numeric data in column; all bars will be empty.")
            max_abs = 0.0
            minimum = maximum = mean = None
        else:
            max_abs = float(np.max(np.abs(numbers)))
            minimum = float(np.min(numbers))
            maximum = float(np.max(numbers))
            mean = float(np.mean(numbers))

        if max_value is not None:
            denominator = abs(float(max_value))
            if not np.isfinite(denominator) or denominator == 0:
                raise DataBarsConfigError(
                    f"max_value must be a finite non-zero number, got {max_value!r}"
                )
        else:
            denominator = max_abs if max_abs > 0 else 1.0

        return cls(
            denominator=denominator,
            max_abs=max_abs,
            minimum=minimum,
            maximum=maximum,
            mean=mean,
            count=int(numbers.size),
            missing=missing,
            invalid=invalid,
        )


def _clip_percent(value: float) -> float:
    return float(np.clip(value, 0.0, 100.0))


def unsigned_width(value: float, scale: ColumnScale, negative_policy: str = "abs") -> float:
    """
    Width in percent of an unsigned data bar.

    Args:
        value: The numeric cell value
        scale: The column's scale
        negative_policy: How negative values are drawn: "abs" as their
            magnitude, "clamp" as an empty bar, "error" raises CellTypeError

    Returns:
        Width in [0, 100]
    """
    if value < 0:
        if negative_policy == "clamp":
            return 0.0
        if negative_policy == "error":
            raise CellTypeError(
                f"Negative value {value} is not allowed in an unsigned data bar"
            )
    return _clip_percent(abs(value) / scale.denominator * 100)


def signed_width(value: float, scale: ColumnScale) -> Tuple[float, str]:
    """Width in percent and direction ("left", "right" or "none") of a diverging bar."""
    if value == 0:
        return 0.0, NONE
    direction = LEFT if value < 0 else RIGHT
    return _clip_percent(abs(value) / scale.denominator * 100), direction


def position(value: float, scale: ColumnScale, signed: bool, negative_policy: str = "abs") -> float:
    """Normalized position used for color lookup: [0, 1] unsigned, [-1, 1] signed."""
    if signed:
        return float(np.clip(value / scale.denominator, -1.0, 1.0))
    return unsigned_width(value, scale, negative_policy) / 100
