import logging
import numbers
import numpy as np
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, List, Optional

from ..exceptions import CellTypeError, DataBarsConfigError
from ..utils import format_label
from .color_mapper import ColorScale
from .fragment import Fragment
from .normalizer import (
    LEFT,
    NEGATIVE_POLICIES,
    RIGHT,
    ColumnScale,
    position,
    signed_width,
    unsigned_width,
)
from .values import Invalid, Missing, classify

logger = logging.getLogger(__name__)

ALIGNMENTS = ("left", "center", "right")
PERCENT_SCALES = ("fraction", "points")
TEXT_POSITIONS = ("outside-end", "inside-end", "none")

_JUSTIFY = {"left": "flex-start", "center": "center", "right": "flex-end"}

ERROR_COLOR = "#EF798A"


@dataclass(frozen=True)
class RenderConfig:
    """Options recognized by the data bar renderers."""

    colors: Any = "#1e90ff"
    background: Optional[str] = None
    commas: bool = False
    percent: bool = False
    percent_scale: str = "fraction"
    alignment: str = "left"
    decimals: Optional[int] = None
    abbreviate: bool = False
    prefix: str = ""
    suffix: str = ""
    negative_policy: str = "abs"
    text_position: str = "outside-end"
    max_value: Optional[float] = None
    fill_opacity: float = 1.0
    bar_height: int = 16
    round_edges: bool = False
    text_color: str = "#120B2C"
    bold_text: bool = False
    missing_text: str = ""

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "RenderConfig":
        """
        Builds a validated config from an options dict.

        Args:
            options: Option names mapped to values; unset options keep their defaults

        Returns:
            The render config

        Raises:
            DataBarsConfigError: On unknown options or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise DataBarsConfigError(f"Unknown data bar option(s): {', '.join(unknown)}")

        values = dict(options)
        if isinstance(values.get("colors"), list):
            values["colors"] = tuple(values["colors"])
        config = cls(**values)
        config._validate()
        return config

    def _validate(self) -> None:
        _check_choice("alignment", self.alignment, ALIGNMENTS)
        _check_choice("percent_scale", self.percent_scale, PERCENT_SCALES)
        _check_choice("negative_policy", self.negative_policy, NEGATIVE_POLICIES)
        _check_choice("text_position", self.text_position, TEXT_POSITIONS)
        if self.decimals is not None and (
            not isinstance(self.decimals, int) or isinstance(self.decimals, bool) or self.decimals < 0
        ):
            raise DataBarsConfigError(f"decimals must be a non-negative int, got {self.decimals!r}")
        if self.max_value is not None and not _is_real(self.max_value):
            raise DataBarsConfigError(f"max_value must be a number, got {self.max_value!r}")
        if not _is_real(self.bar_height) or self.bar_height <= 0:
            raise DataBarsConfigError(f"bar_height must be positive, got {self.bar_height!r}")
        if not _is_real(self.fill_opacity) or not 0 <= self.fill_opacity <= 1:
            raise DataBarsConfigError(f"fill_opacity must be a number within [0, 1], got {self.fill_opacity!r}")


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))

def _check_choice(name: str, value: Any, choices) -> None:
    if value not in choices:
        raise DataBarsConfigError(
            f"{name} must be one of {', '.join(choices)}; got {value!r}"
        )


def _pct(width: float) -> str:
    return f"{width:.2f}".rstrip("0").rstrip(".") + "%"


class CellBarRenderer:
    """
    Renders one column's cells as data bars.

    The column scale and color scale are built once, when the renderer is
    created, and every cell is drawn against them, so bars within a column
    share one width scale. Instances hold no mutable state.
    """

    def __init__(
        self,
        config: RenderConfig,
        scale: ColumnScale,
        color_scale: ColorScale,
        signed: bool = False,
    ):
        self.config = config
        self.scale = scale
        self.color_scale = color_scale
        self.signed = signed

    @classmethod
    def for_column(
        cls, values: Iterable[Any], config: RenderConfig, signed: bool = False
    ) -> "CellBarRenderer":
        """Computes the column-wide scale and colors, then returns the renderer."""
        color_scale = ColorScale.from_spec(
            config.colors, signed=signed, opacity=config.fill_opacity
        )
        scale = ColumnScale.from_values(values, max_value=config.max_value)
        return cls(config, scale, color_scale, signed=signed)

    # --- Per-cell measurements ---

    def _number(self, value: Any) -> Optional[float]:
        cell = classify(value)
        if isinstance(cell, Missing):
            return None
        if isinstance(cell, Invalid):
            raise CellTypeError(f"Cannot draw {cell.raw!r} as a data bar: {cell.reason}")
        return cell.value

    def width(self, value: Any) -> float:
        """Bar width in percent for ``value`` (0 for missing cells)."""
        number = self._number(value)
        if number is None:
            return 0.0
        if self.signed:
            return signed_width(number, self.scale)[0]
        return unsigned_width(number, self.scale, self.config.negative_policy)

    def fill_color(self, value: Any) -> Optional[str]:
        """Bar fill color for ``value``, or None for missing cells."""
        number = self._number(value)
        if number is None:
            return None
        p = position(number, self.scale, self.signed, self.config.negative_policy)
        return self.color_scale.color_at(p)

    def label(self, value: Any) -> str:
        number = self._number(value)
        if number is None:
            return self.config.missing_text
        cfg = self.config
        return format_label(
            number,
            commas=cfg.commas,
            percent=cfg.percent,
            percent_scale=cfg.percent_scale,
            decimals=cfg.decimals,
            abbreviate=cfg.abbreviate,
            prefix=cfg.prefix,
            suffix=cfg.suffix,
        )

    # --- Fragment construction ---

    def _label_fragment(self, text: str) -> Fragment:
        cfg = self.config
        style = {
            "color": cfg.text_color,
            "white-space": "nowrap",
            "padding": "0 6px",
            "text-align": cfg.alignment,
        }
        if cfg.bold_text:
            style["font-weight"] = "bold"
        return Fragment(tag="span", classes=("databar-label",), style=style, children=[text])

    def _fill_fragment(self, width: float, color: str, direction: str = RIGHT) -> Fragment:
        cfg = self.config
        style = {
            "width": _pct(width),
            "height": f"{cfg.bar_height}px",
            "background-color": color,
            "display": "flex",
            "align-items": "center",
            "justify-content": "flex-start" if direction == LEFT else "flex-end",
        }
        if cfg.round_edges:
            style["border-radius"] = f"{cfg.bar_height / 2:g}px"
        return Fragment(classes=("databar-fill",), style=style)

    def _region_style(self, justify: str) -> Dict[str, Any]:
        style = {
            "display": "flex",
            "align-items": "center",
            "justify-content": justify,
            "height": f"{self.config.bar_height}px",
        }
        if self.config.background is not None:
            style["background-color"] = self.config.background
        return style

    def _compose(self, bars: Fragment, label: Optional[Fragment], root_classes) -> Fragment:
        alignment = self.config.alignment
        style = {"display": "flex", "align-items": "center", "width": "100%"}
        if label is None:
            children = [bars]
        elif alignment == "center":
            style["flex-direction"] = "column"
            style["align-items"] = "stretch"
            children = [label, bars]
        elif alignment == "right":
            children = [label, bars]
        else:
            children = [bars, label]
        return Fragment(classes=root_classes, style=style, children=children)

    def _placeholder(self) -> Fragment:
        text = self.config.missing_text
        return Fragment(
            classes=("databar", "databar-missing"),
            style={"color": self.config.text_color},
            children=[text] if text else [],
        )

    def render(self, value: Any) -> Fragment:
        """
        Renders a single cell.

        Args:
            value: The raw cell value

        Returns:
            The cell fragment; missing values produce a placeholder without a bar

        Raises:
            CellTypeError: If the value is not numeric, or is negative in an
                unsigned column with negative_policy="error"
        """
        number = self._number(value)
        if number is None:
            return self._placeholder()

        cfg = self.config
        text = self.label(number)
        color = self.fill_color(number)
        inside = cfg.text_position == "inside-end"

        if self.signed:
            width, direction = signed_width(number, self.scale)
            neg = Fragment(classes=("databar-neg",), style=self._region_style("flex-end"))
            pos = Fragment(classes=("databar-pos",), style=self._region_style("flex-start"))
            for region in (neg, pos):
                region.style["flex"] = "1 1 0"
            fill = None
            if direction == LEFT:
                fill = self._fill_fragment(width, color, direction=LEFT)
                neg.children.append(fill)
            elif direction == RIGHT:
                fill = self._fill_fragment(width, color, direction=RIGHT)
                pos.children.append(fill)
            bars = Fragment(
                classes=("databar-track",),
                style={"display": "flex", "flex-grow": "1"},
                children=[neg, pos],
            )
            root_classes = ("databar", "databar-pos-neg")
        else:
            width = unsigned_width(number, self.scale, cfg.negative_policy)
            fill = self._fill_fragment(width, color)
            bars = Fragment(
                classes=("databar-track",),
                style={**self._region_style(_JUSTIFY[cfg.alignment]), "flex-grow": "1"},
                children=[fill],
            )
            root_classes = ("databar",)

        label = None
        if cfg.text_position != "none":
            label = self._label_fragment(text)
            if inside and fill is not None and width > 0:
                fill.children.append(label)
                label = None
        return self._compose(bars, label, root_classes)

    def _error(self, value: Any, error: CellTypeError) -> Fragment:
        return Fragment(
            classes=("databar", "databar-error"),
            style={"color": ERROR_COLOR},
            attrs={"title": str(error)},
            children=[str(value)],
        )

    def __call__(self, value: Any, row: Any = None) -> Fragment:
        """
        Host table extension point.

        Per-cell errors are logged and rendered as an error fragment so the
        rest of the table still renders.
        """
        try:
            return self.render(value)
        except CellTypeError as e:
            logger.warning(f"Could not render cell: {e}")
            return self._error(value, e)

    def render_column(self, values: Iterable[Any]) -> List[Fragment]:
        return [self(value) for value in values]
