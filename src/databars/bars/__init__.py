from .color_mapper import ColorScale, parse_color
from .fragment import Fragment
from .normalizer import ColumnScale, position, signed_width, unsigned_width
from .renderer import CellBarRenderer, RenderConfig
from .values import Invalid, Missing, Number, classify
