from .core import DataBars, data_bars, data_bars_pos_neg, save_table_html
from .exceptions import CellTypeError, DataBarsConfigError, DataBarsError
from .bars.fragment import Fragment
from .bars.renderer import CellBarRenderer, RenderConfig

__all__ = [
    "DataBars",
    "data_bars",
    "data_bars_pos_neg",
    "save_table_html",
    "CellBarRenderer",
    "RenderConfig",
    "Fragment",
    "DataBarsError",
    "DataBarsConfigError",
    "CellTypeError",
]
