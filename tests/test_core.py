import logging

import pandas as pd
import pytest

from databars import DataBars, DataBarsConfigError, data_bars, data_bars_pos_neg
from databars.core import _generate_filename_from_title


class TestConfig:
    def test_defaults(self, bars):
        assert bars.config["data_bars"]["alignment"] == "left"
        assert bars.config["data_bars_pos_neg"]["alignment"] == "right"

    def test_user_config_is_deep_merged(self):
        bars = DataBars(config={"data_bars": {"commas": True}})
        assert bars.config["data_bars"]["commas"] is True
        assert bars.config["data_bars"]["colors"] == "#1e90ff"
        assert bars.data_bars([1234, 1])(1234).find("databar-label").text == "1,234"

    def test_keyword_options_override_config(self):
        bars = DataBars(config={"data_bars": {"commas": True}})
        assert bars.data_bars([1234], commas=False)(1234).find("databar-label").text == "1234"

    def test_bad_config_fails_at_construction(self):
        with pytest.raises(DataBarsConfigError):
            DataBars(config={"data_bars": {"alignment": "sideways"}})

    @pytest.mark.parametrize(
        "section",
        [
            {"data_bars": {"colors": []}},
            {"data_bars_pos_neg": {"colors": ["#ffffff", "blue"]}},
            {"data_bars": {"fill_opacity": "0.5"}},
        ],
    )
    def test_bad_colors_or_opacity_fail_at_construction(self, section):
        with pytest.raises(DataBarsConfigError):
            DataBars(config=section)

    def test_unknown_option(self, bars):
        with pytest.raises(DataBarsConfigError):
            bars.data_bars([1, 2], width=3)

    def test_negative_policy_not_accepted_for_pos_neg(self, bars):
        with pytest.raises(DataBarsConfigError):
            bars.data_bars_pos_neg([1, -2], negative_policy="clamp")


def test_module_level_helpers():
    assert data_bars([100, 200, 300]).width(100) == pytest.approx(100 / 3)
    render = data_bars_pos_neg([-50, 0, 50])
    assert render.signed
    assert render.config.alignment == "right"


def test_series_max_as_max_value():
    column = pd.Series([10, 20, 40])
    assert data_bars(column, max_value=column.max()).width(20) == 50.0


def test_renderer_shares_one_scale_per_column(bars):
    render = bars.data_bars(pd.Series([10, 20, 40]))
    assert render.scale.denominator == 40
    assert [render.width(v) for v in (40, 10, 20)] == [100.0, 25.0, 50.0]


class TestTable:
    def test_formats_listed_columns(self, bars, df_mix):
        styler = bars.table(
            df_mix,
            {"Amount": {"commas": True}, "Change": "data_bars_pos_neg"},
        )
        html = styler.to_html()
        assert 'class="databar databar-pos-neg"' in html
        assert "databar-missing" in html
        assert "width: 100%" in html

    def test_missing_column_is_skipped(self, bars, df_mix, caplog):
        with caplog.at_level(logging.WARNING):
            styler = bars.table(df_mix, {"Nope": "data_bars", "Amount": "data_bars"})
        assert "Column 'Nope' not found" in caplog.text
        assert "databar-fill" in styler.to_html()

    def test_unknown_kind(self, bars, df_mix):
        with pytest.raises(DataBarsConfigError):
            bars.table(df_mix, {"Amount": "sparkline"})

    def test_empty_frame(self, bars, caplog):
        with caplog.at_level(logging.WARNING):
            styler = bars.table(pd.DataFrame(), {"Amount": "data_bars"})
        assert "No data provided for table." in caplog.text
        assert styler.data.empty

    def test_save_table(self, bars, df_mix, tmp_path):
        styler = bars.table(df_mix, {"Amount": "data_bars"})
        ok, path = bars.save_table(styler, "Quarterly Summary!", save_path=str(tmp_path))
        assert ok
        assert path.endswith("quarterly_summary.html")
        assert "databar-fill" in (tmp_path / "quarterly_summary.html").read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "title, expected",
    [("Quarterly Summary", "quarterly_summary"), ("", "untitled_table"), ("!!!", "untitled_table")],
)
def test_generate_filename_from_title(title, expected):
    assert _generate_filename_from_title(title) == expected
