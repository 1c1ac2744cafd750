import numpy as np
import pandas as pd
import pytest

from databars import DataBars


@pytest.fixture
def bars():
    return DataBars()


@pytest.fixture
def df_mix():
    return pd.DataFrame(
        {
            "Name": ["a", "b", "c", "d"],
            "Amount": [100, 200, 300, np.nan],
            "Change": [-50, 0, 50, 25],
        }
    )
