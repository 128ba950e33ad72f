"""Exception types raised by the quantity parser and config loader."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .units import Dimension


class ParseErrorKind(str, Enum):
    """Why a quantity string was rejected."""

    EMPTY_INPUT = "empty input"
    MALFORMED_NUMBER = "malformed number"
    UNRECOGNIZED_UNIT = "unrecognized unit"


class ParseError(ValueError):
    """A magnitude-and-unit string could not be turned into a Quantity.

    Attributes:
        kind: Failure category.
        text: The offending input string.
        dimension: Dimension the input was parsed against.
        field: Config key the input came from, if any.
        detail: Token that caused the failure (number or unit).
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        text: str,
        dimension: Dimension,
        *,
        detail: str = "",
        field: str | None = None,
    ) -> None:
        self.kind = kind
        self.text = text
        self.dimension = dimension
        self.detail = detail
        self.field = field
        super().__init__(self._render())

    def _render(self) -> str:
        if self.kind is ParseErrorKind.EMPTY_INPUT:
            msg = f"empty {self.dimension.label} string"
        elif self.kind is ParseErrorKind.MALFORMED_NUMBER:
            msg = f"malformed number {self.detail!r} in {self.text!r}"
        else:
            msg = f"unrecognized {self.dimension.label} unit {self.detail!r} in {self.text!r}"
        if self.field is not None:
            msg = f"{self.field}: {msg}"
        return msg

    def with_field(self, field: str) -> ParseError:
        """Return a copy of this error tagged with the config key it came from."""
        return ParseError(self.kind, self.text, self.dimension, detail=self.detail, field=field)


class DimensionError(TypeError):
    """Arithmetic or comparison between quantities of different dimensions."""


class ConfigReadError(Exception):
    """Config file missing, unreadable, or failing the strict schema."""

    def __init__(self, path: str | Path | None, message: str) -> None:
        self.path = Path(path) if path is not None else None
        self.message = message
        prefix = f"{self.path}: " if self.path is not None else ""
        super().__init__(f"{prefix}{message}")
