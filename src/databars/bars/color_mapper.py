import numbers
import re
import numpy as np
from dataclasses import dataclass
from plotly.colors import hex_to_rgb, label_rgb, unlabel_rgb
from typing import Any, Sequence, Tuple, Union

from ..exceptions import DataBarsConfigError

ColorSpec = Union[str, Tuple[int, int, int], Sequence[Union[str, Tuple[int, int, int]]]]

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_RGB_RE = re.compile(r"^rgb\(\s*\d{1,3}(\.\d+)?\s*,\s*\d{1,3}(\.\d+)?\s*,\s*\d{1,3}(\.\d+)?\s*\)$")


def parse_color(color: Any) -> Tuple[int, int, int]:
    """
    Parses a color into an (r, g, b) tuple of 0-255 ints.

    Args:
        color: "#RRGGBB", "rgb(r, g, b)" or a 3-tuple of 0-255 integer channels.
            Tuples are never read as 0-1 fractions; fractional channels are rejected.

    Returns:
        The color as an int tuple

    Raises:
        DataBarsConfigError: If the color cannot be parsed
    """
    if isinstance(color, str):
        text = color.strip()
        if _HEX_RE.match(text):
            channels = hex_to_rgb(text)
        elif _RGB_RE.match(text):
            channels = unlabel_rgb(text)
        else:
            raise DataBarsConfigError(
                f"Unsupported color {color!r}; use '#RRGGBB' or 'rgb(r, g, b)'"
            )
    elif isinstance(color, (tuple, list)) and len(color) == 3:
        if not all(_is_real(c) and float(c).is_integer() for c in color):
            raise DataBarsConfigError(
                f"Tuple colors take integer 0-255 channels, got {color!r}"
            )
        channels = color
    else:
        raise DataBarsConfigError(f"Unsupported color {color!r}")

    try:
        rgb = tuple(int(round(float(c))) for c in channels)
    except (TypeError, ValueError) as e:
        raise DataBarsConfigError(f"Unsupported color {color!r}: {e}") from e
    if any(c < 0 or c > 255 for c in rgb):
        raise DataBarsConfigError(f"Color channels must be within 0-255, got {color!r}")
    return rgb


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _with_opacity(rgb: Tuple[int, int, int], opacity: float) -> str:
    if opacity >= 1:
        return label_rgb(rgb)
    return f"rgba({rgb[0]}, {rgb[1]}, {rgb[2]}, {opacity:g})"


@dataclass(frozen=True)
class ColorScale:
    """
    Maps a normalized position to a bar fill color.

    A single color is returned as configured for every position. Two or more
    colors become equally spaced stops over [0, 1], or over [-1, 1] for a
    diverging column, and positions between stops are interpolated per channel.
    """

    colors: Tuple[Any, ...]
    stops: Tuple[Tuple[int, int, int], ...]
    signed: bool = False
    opacity: float = 1.0

    @classmethod
    def from_spec(cls, colors: ColorSpec, signed: bool = False, opacity: float = 1.0) -> "ColorScale":
        """Validates a color spec once, at renderer setup time."""
        if isinstance(colors, str) or (
            isinstance(colors, tuple)
            and len(colors) == 3
            and all(_is_real(c) for c in colors)
        ):
            spec = (colors,)
        else:
            try:
                spec = tuple(colors)
            except TypeError:
                raise DataBarsConfigError(f"colors must be a color or a list of colors, got {colors!r}")
        if len(spec) == 0:
            raise DataBarsConfigError("colors must contain at least one color")
        if not _is_real(opacity) or not 0 <= opacity <= 1:
            raise DataBarsConfigError(f"fill_opacity must be within [0, 1], got {opacity!r}")

        stops = tuple(parse_color(c) for c in spec)
        return cls(colors=spec, stops=stops, signed=signed, opacity=float(opacity))

    @property
    def is_gradient(self) -> bool:
        return len(self.stops) > 1

    @property
    def positions(self) -> np.ndarray:
        low = -1.0 if self.signed else 0.0
        return np.linspace(low, 1.0, len(self.stops))

    def color_at(self, p: float) -> str:
        """
        Color for a normalized position.

        Args:
            p: Position in [0, 1] (or [-1, 1] when signed); clamped to the domain

        Returns:
            A CSS color string
        """
        if not self.is_gradient:
            if self.opacity >= 1:
                return self.colors[0] if isinstance(self.colors[0], str) else label_rgb(self.stops[0])
            return _with_opacity(self.stops[0], self.opacity)

        positions = self.positions
        p = float(np.clip(p, positions[0], positions[-1]))
        channels = np.array(self.stops, dtype=float)
        rgb = tuple(
            int(round(float(np.interp(p, positions, channels[:, i])))) for i in range(3)
        )
        return _with_opacity(rgb, self.opacity)
