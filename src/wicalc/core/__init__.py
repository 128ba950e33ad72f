"""Core module: units, constants, config, errors, logging."""

from .errors import ConfigReadError, DimensionError, ParseError, ParseErrorKind
from .units import Dimension, Quantity, format_quantity, parse_quantity

__all__ = [
    "ConfigReadError",
    "Dimension",
    "DimensionError",
    "ParseError",
    "ParseErrorKind",
    "Quantity",
    "format_quantity",
    "parse_quantity",
]
