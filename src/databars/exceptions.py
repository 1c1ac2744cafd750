class DataBarsError(Exception):
    """Base exception for data bar rendering errors."""
    pass


class DataBarsConfigError(DataBarsError, ValueError):
    """Raised when renderer options or colors fail validation at setup time."""
    pass


class CellTypeError(DataBarsError, TypeError):
    """Raised when a single cell cannot be rendered as a data bar."""
    pass
