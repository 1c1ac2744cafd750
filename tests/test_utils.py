import pytest

from databars.utils import _get_scale_and_suffix, deep_merge_dicts, format_label


@pytest.mark.parametrize(
    "value, kwargs, expected",
    [
        (1234, {"commas": True}, "1,234"),
        (1234, {}, "1234"),
        (-1234567, {"commas": True}, "-1,234,567"),
        (1234.5, {"commas": True, "decimals": 2}, "1,234.50"),
        (0.1 + 0.2, {}, "0.3"),
        (0.25, {"percent": True}, "25%"),
        (0.29, {"percent": True}, "29%"),
        (0.125, {"percent": True}, "12.5%"),
        (0.25, {"percent": True, "percent_scale": "points"}, "0.25%"),
        (12.3456, {"percent": True, "percent_scale": "points", "decimals": 1}, "12.3%"),
        (2_500_000, {"abbreviate": True}, "2.5M"),
        (3_000, {"abbreviate": True}, "3K"),
        (42, {"prefix": "$", "suffix": " USD"}, "$42 USD"),
    ],
)
def test_format_label(value, kwargs, expected):
    assert format_label(value, **kwargs) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(5, (1, "")), (1_500, (1_000, "K")), (-2_000_000, (1_000_000, "M")), (3e9, (1_000_000_000, "B"))],
)
def test_get_scale_and_suffix(value, expected):
    assert _get_scale_and_suffix(value) == expected


def test_deep_merge_dicts_keeps_base_intact():
    base = {"data_bars": {"colors": "#1e90ff", "commas": False}, "output": {"default_dir": "output"}}
    merged = deep_merge_dicts(base, {"data_bars": {"commas": True}})
    assert merged["data_bars"] == {"colors": "#1e90ff", "commas": True}
    assert merged["output"] == {"default_dir": "output"}
    assert base["data_bars"]["commas"] is False
