import numpy as np
import pandas as pd
import pytest

from databars.bars.values import Invalid, Missing, Number, classify


@pytest.mark.parametrize(
    "value, expected",
    [
        (3, 3.0),
        (-2.5, -2.5),
        (np.int64(7), 7.0),
        (np.float32(0.5), 0.5),
    ],
)
def test_numbers(value, expected):
    assert classify(value) == Number(expected)


@pytest.mark.parametrize("value", [None, np.nan, float("nan"), pd.NA, pd.NaT])
def test_missing(value):
    assert classify(value) == Missing()


@pytest.mark.parametrize("value", ["12", True, np.bool_(False), [1, 2], float("inf"), object()])
def test_invalid(value):
    cell = classify(value)
    assert isinstance(cell, Invalid)
    assert cell.raw is value
    assert cell.reason


def test_already_classified_passes_through():
    cell = Number(1.0)
    assert classify(cell) is cell
