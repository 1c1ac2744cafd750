import copy
import logging
import re
import time
import pandas as pd
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from pandas.io.formats.style import Styler

# --- Relative Imports ---
from .config import DEFAULT_DATABARS_CONFIG
from .exceptions import DataBarsConfigError
from .utils import deep_merge_dicts
from .bars.color_mapper import ColorScale
from .bars.renderer import CellBarRenderer, RenderConfig

logger = logging.getLogger(__name__)

BAR_KINDS = ("data_bars", "data_bars_pos_neg")


# Utility function to generate safe filenames from titles
def _generate_filename_from_title(title: str) -> str:
    """
    Generate a safe filename from a table title.

    Args:
        title: The title to convert

    Returns:
        A filename-safe string based on the title
    """
    if not title:
        return "untitled_table"

    # Replace spaces and special characters with underscores
    safe_name = re.sub(r"[^\w\s-]", "", title).strip().lower()
    safe_name = re.sub(r"[-\s]+", "_", safe_name)

    return safe_name if safe_name else "untitled_table"


def save_table_html(
    styler: Styler,
    title: str,
    save_path: Optional[str] = None,
    default_dir: str = "output",
) -> Tuple[bool, str]:
    """
    Saves a styled table as an HTML file.

    Args:
        styler: The pandas Styler returned by DataBars.table.
        title: The table title (used for generating the filename).
        save_path: The directory path to save the file. Defaults to './output'.
        default_dir: Directory name under the working directory used when
            save_path is not given.

    Returns:
        A tuple containing:
        - bool: True if saving was successful, False otherwise.
        - str: The absolute path to the saved HTML file or an error message.
    """
    safe_filename = _generate_filename_from_title(title)
    output_path = Path(save_path) if save_path else Path.cwd() / default_dir
    filepath = output_path / f"{safe_filename}.html"

    logger.info(f"Attempting to save table HTML to: {filepath}")

    try:
        start_time = time.time()
        output_path.mkdir(parents=True, exist_ok=True)
        filepath.write_text(styler.to_html(), encoding="utf-8")
        elapsed_time = time.time() - start_time
        logger.info(f"HTML export completed in {elapsed_time:.2f} seconds.")

        if filepath.exists() and filepath.stat().st_size > 0:
            abs_path_str = str(filepath.resolve())
            logger.info(f"Table saved to: {abs_path_str}")
            return True, abs_path_str
        else:
            error_msg = f"HTML export finished without error, but the output file is missing or empty: {filepath}"
            logger.error(error_msg)
            return False, error_msg

    except OSError as e:
        error_msg = f"Error saving table as HTML to {filepath}: {e}"
        logger.exception(error_msg)
        return False, error_msg


class DataBars:
    """
    Inline data bars for table cells.

    Builds per-column cell renderers that draw each value as a horizontal bar
    proportional to the column's largest magnitude, with an optional label.

    Configuration:
        - Accepts a config dictionary (deep-merged with DEFAULT_DATABARS_CONFIG).
        - config['data_bars'] and config['data_bars_pos_neg'] hold the option
          defaults for each helper; keyword options passed to a helper win.
        - config['table'] styles the pandas Styler produced by table().
        - Saved tables go to './output/' unless a save_path is given.

    Methods:
        - data_bars(...): Renderer for bars growing from one side.
        - data_bars_pos_neg(...): Renderer for bars diverging from zero.
        - table(...): pandas Styler with data bar columns.

    Raises:
        DataBarsConfigError: If options or colors are invalid.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
    ):
        """Initialize DataBars, configured via a dictionary.

        Args:
            config (Dict[str, Any], optional): A dictionary to override default
                options. Deep merged with DEFAULT_DATABARS_CONFIG.
        """
        base_config = copy.deepcopy(DEFAULT_DATABARS_CONFIG)
        if config:
            self.config = deep_merge_dicts(base_config, config)
        else:
            self.config = base_config

        # Validate helper defaults up front so a bad config fails at construction
        for kind in BAR_KINDS:
            cfg = RenderConfig.from_options(self.config[kind])
            ColorScale.from_spec(
                cfg.colors,
                signed=(kind == "data_bars_pos_neg"),
                opacity=cfg.fill_opacity,
            )

    def _render_config(self, kind: str, options: Dict[str, Any]) -> RenderConfig:
        merged = dict(self.config[kind])
        merged.update(options)
        return RenderConfig.from_options(merged)

    def data_bars(self, values: Iterable[Any], **options: Any) -> CellBarRenderer:
        """
        Creates a renderer for unsigned data bars.

        Bar width is abs(value) / max(abs(column)). How negative values are
        drawn is controlled by the negative_policy option ("abs", "clamp" or
        "error").

        Args:
            values: The column's values (list, array or Series)
            **options: RenderConfig options, e.g. colors, background, commas,
                percent, alignment

        Returns:
            A CellBarRenderer; call it with a cell value to get a Fragment
        """
        cfg = self._render_config("data_bars", options)
        return CellBarRenderer.for_column(values, cfg, signed=False)

    def data_bars_pos_neg(self, values: Iterable[Any], **options: Any) -> CellBarRenderer:
        """
        Creates a renderer for diverging data bars anchored at zero.

        Negative values extend left from the centre and positive values
        extend right. With several colors, the gradient spans [-1, 1] and its
        midpoint sits at zero.

        Args:
            values: The column's values (list, array or Series)
            **options: RenderConfig options

        Returns:
            A CellBarRenderer
        """
        if "negative_policy" in options:
            raise DataBarsConfigError("negative_policy only applies to data_bars")
        cfg = self._render_config("data_bars_pos_neg", options)
        return CellBarRenderer.for_column(values, cfg, signed=True)

    def table(
        self,
        data: pd.DataFrame,
        columns: Dict[str, Union[str, Dict[str, Any]]],
    ) -> Styler:
        """
        Formats DataFrame columns as data bars using pandas' Styler.

        Args:
            data: DataFrame containing the table data
            columns: Column name mapped to "data_bars", "data_bars_pos_neg",
                or a dict of options with a "kind" key (default "data_bars")

        Returns:
            A Styler whose listed columns render as data bars
        """
        cfg_table = self.config["table"]

        if data is None or data.empty:
            logger.warning("No data provided for table.")
            return (data if data is not None else pd.DataFrame()).style

        formatters = {}
        for column, spec in columns.items():
            if column not in data.columns:
                logger.warning(
                    f"Column '{column}' not found in data. Columns available: {data.columns.tolist()}"
                )
                continue

            if isinstance(spec, str):
                kind, options = spec, {}
            else:
                options = dict(spec)
                kind = options.pop("kind", "data_bars")

            if kind == "data_bars":
                renderer = self.data_bars(data[column], **options)
            elif kind == "data_bars_pos_neg":
                renderer = self.data_bars_pos_neg(data[column], **options)
            else:
                raise DataBarsConfigError(
                    f"Unknown bar kind '{kind}' for column '{column}'; use one of {', '.join(BAR_KINDS)}"
                )
            formatters[column] = lambda value, _renderer=renderer: _renderer(value).to_html()

        styler = data.style.format(formatter=formatters)
        styler = styler.set_table_styles(
            [
                {
                    "selector": "th",
                    "props": [
                        ("background-color", cfg_table["header_fill"]),
                        ("color", cfg_table["header_font"]),
                        ("padding", cfg_table["cell_padding"]),
                    ],
                },
                {
                    "selector": "td",
                    "props": [
                        ("padding", cfg_table["cell_padding"]),
                        ("min-width", "120px"),
                    ],
                },
            ]
        )
        styler = styler.set_properties(
            **{
                "font-family": cfg_table["font_family"],
                "font-size": cfg_table["font_size"],
            }
        )
        if cfg_table["hide_index"]:
            styler = styler.hide(axis="index")
        return styler

    def save_table(
        self, styler: Styler, title: str, save_path: Optional[str] = None
    ) -> Tuple[bool, str]:
        """Saves a styled table under the configured output directory."""
        return save_table_html(
            styler, title, save_path, default_dir=self.config["output"]["default_dir"]
        )


def data_bars(values: Iterable[Any], **options: Any) -> CellBarRenderer:
    """Unsigned data bar renderer using the default configuration."""
    return DataBars().data_bars(values, **options)


def data_bars_pos_neg(values: Iterable[Any], **options: Any) -> CellBarRenderer:
    """Diverging data bar renderer using the default configuration."""
    return DataBars().data_bars_pos_neg(values, **options)
