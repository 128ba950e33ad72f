"""Typed physical quantities and the magnitude-and-unit string parser.

Every quantity is stored in the single canonical unit of its dimension.
Unit tables are closed: each dimension recognises exactly the symbols
listed here, and an unknown symbol is a hard parse failure.

Canonical units:
    volume              nL          (1 L = 1e9)
    pressure            Pa
    volume flow rate    nL/s
    specific heat       J/(kg*K)
    enthalpy            J/kg
    molar mass          ug/mol
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from numbers import Real
from types import MappingProxyType

from .errors import DimensionError, ParseError, ParseErrorKind


class Dimension(Enum):
    """Physical quantity category with its own canonical unit."""

    VOLUME = "volume"
    PRESSURE = "pressure"
    VOLUME_FLOW_RATE = "volume flow rate"
    SPECIFIC_HEAT = "specific heat"
    ENTHALPY = "enthalpy"
    MOLAR_MASS = "molar mass"

    @property
    def label(self) -> str:
        return self.value

    @property
    def canonical_unit(self) -> str:
        return _CANONICAL[self]

    @classmethod
    def from_name(cls, name: str) -> Dimension:
        """Look up a dimension by label or member name (``"molar mass"``, ``"MOLAR_MASS"``)."""
        key = re.sub(r"[\s_-]+", " ", name.strip()).lower()
        for dim in cls:
            if dim.value == key:
                return dim
        known = ", ".join(d.value for d in cls)
        raise ValueError(f"Unknown dimension {name!r}; expected one of: {known}")


# Conversion factors into the canonical unit of each dimension.
_L = 1e9  # nL per litre
_MIN = 60.0
_HOUR = 3600.0
_PSI = 6894.757293168361  # Pa
_ATM = 101325.0  # Pa

_VOLUME: dict[str, float] = {
    "nL": 1.0,
    "uL": 1e-6 * _L,
    "µL": 1e-6 * _L,
    "mL": 1e-3 * _L,
    "ml": 1e-3 * _L,
    "cc": 1e-3 * _L,
    "cm3": 1e-3 * _L,
    "cm³": 1e-3 * _L,
    "cL": 1e-2 * _L,
    "dL": 1e-1 * _L,
    "L": _L,
    "l": _L,
    "dm3": _L,
    "dm³": _L,
    "m3": 1e3 * _L,
    "m³": 1e3 * _L,
    "mm3": 1e-6 * _L,
    "mm³": 1e-6 * _L,
    "um3": 1e-15 * _L,
    "µm3": 1e-15 * _L,
    "µm³": 1e-15 * _L,
    "in3": 16.387064e-3 * _L,
    "cu in": 16.387064e-3 * _L,
    "litre": _L,
    "litres": _L,
    "liter": _L,
    "liters": _L,
    "millilitre": 1e-3 * _L,
    "millilitres": 1e-3 * _L,
    "milliliter": 1e-3 * _L,
    "milliliters": 1e-3 * _L,
}

_PRESSURE: dict[str, float] = {
    "Pa": 1.0,
    "hPa": 1e2,
    "kPa": 1e3,
    "MPa": 1e6,
    "mbar": 1e2,
    "bar": 1e5,
    "psi": _PSI,
    "atm": _ATM,
    "Torr": _ATM / 760.0,
    "mmHg": 133.322387415,
    "inHg": 3386.388640341,
    "pascal": 1.0,
    "pascals": 1.0,
}

_VOLUME_FLOW_RATE: dict[str, float] = {
    "nL/s": 1.0,
    "mL/s": 1e-3 * _L,
    "mL/min": 1e-3 * _L / _MIN,
    "mL/h": 1e-3 * _L / _HOUR,
    "cc/s": 1e-3 * _L,
    "cc/min": 1e-3 * _L / _MIN,
    "ccm": 1e-3 * _L / _MIN,
    "cc/h": 1e-3 * _L / _HOUR,
    "L/s": _L,
    "L/min": _L / _MIN,
    "lpm": _L / _MIN,
    "L/h": _L / _HOUR,
    "lph": _L / _HOUR,
    "m3/s": 1e3 * _L,
    "m³/s": 1e3 * _L,
    "m3/h": 1e3 * _L / _HOUR,
    "m³/h": 1e3 * _L / _HOUR,
}

_SPECIFIC_HEAT: dict[str, float] = {
    "J/(kg*K)": 1.0,
    "J/(kg·K)": 1.0,
    "J/kgK": 1.0,
    "kJ/(kg*K)": 1e3,
    "kJ/(kg·K)": 1e3,
    "kJ/kgK": 1e3,
}

_ENTHALPY: dict[str, float] = {
    "J/kg": 1.0,
    "kJ/kg": 1e3,
    "MJ/kg": 1e6,
}

_MOLAR_MASS: dict[str, float] = {
    "ug/mol": 1.0,
    "µg/mol": 1.0,
    "mg/mol": 1e3,
    "g/mol": 1e6,
    "kg/mol": 1e9,
}


def _freeze(table: dict[str, float]) -> Mapping[str, float]:
    # Accept the Greek mu wherever the micro sign is listed.
    out = dict(table)
    for symbol, factor in table.items():
        if "µ" in symbol:
            out.setdefault(symbol.replace("µ", "μ"), factor)
    return MappingProxyType(out)


UNIT_TABLES: Mapping[Dimension, Mapping[str, float]] = MappingProxyType(
    {
        Dimension.VOLUME: _freeze(_VOLUME),
        Dimension.PRESSURE: _freeze(_PRESSURE),
        Dimension.VOLUME_FLOW_RATE: _freeze(_VOLUME_FLOW_RATE),
        Dimension.SPECIFIC_HEAT: _freeze(_SPECIFIC_HEAT),
        Dimension.ENTHALPY: _freeze(_ENTHALPY),
        Dimension.MOLAR_MASS: _freeze(_MOLAR_MASS),
    }
)

_CANONICAL: Mapping[Dimension, str] = MappingProxyType(
    {
        Dimension.VOLUME: "nL",
        Dimension.PRESSURE: "Pa",
        Dimension.VOLUME_FLOW_RATE: "nL/s",
        Dimension.SPECIFIC_HEAT: "J/(kg*K)",
        Dimension.ENTHALPY: "J/kg",
        Dimension.MOLAR_MASS: "ug/mol",
    }
)


def units_for(dimension: Dimension) -> Mapping[str, float]:
    """Return the read-only ``symbol -> factor`` table for a dimension."""
    return UNIT_TABLES[dimension]


def canonical_unit(dimension: Dimension) -> str:
    return _CANONICAL[dimension]


def _factor(dimension: Dimension, unit: str, text: str) -> float:
    try:
        return UNIT_TABLES[dimension][unit]
    except KeyError:
        raise ParseError(ParseErrorKind.UNRECOGNIZED_UNIT, text, dimension, detail=unit) from None


@total_ordering
@dataclass(frozen=True, eq=False)
class Quantity:
    """Magnitude in the canonical unit of a fixed dimension.

    Attributes:
        magnitude: Value in ``dimension.canonical_unit``.
        dimension: Physical dimension; immutable.
    """

    magnitude: float
    dimension: Dimension

    def __post_init__(self) -> None:
        if not isinstance(self.dimension, Dimension):
            raise TypeError(f"dimension must be a Dimension, got {self.dimension!r}")
        value = float(self.magnitude)
        if not math.isfinite(value):
            raise ValueError(f"magnitude must be finite, got {value}")
        object.__setattr__(self, "magnitude", value)

    @classmethod
    def of(cls, value: float, unit: str, dimension: Dimension) -> Quantity:
        """Build a quantity from a value expressed in ``unit``."""
        factor = _factor(dimension, unit, f"{value} {unit}")
        return cls(float(value) * factor, dimension)

    def to(self, unit: str) -> float:
        """Value of this quantity expressed in ``unit``."""
        return self.magnitude / _factor(self.dimension, unit, unit)

    def _check(self, other: object, op: str) -> Quantity:
        if not isinstance(other, Quantity):
            raise DimensionError(f"unsupported operand for {op}: Quantity and {type(other).__name__}")
        if other.dimension is not self.dimension:
            raise DimensionError(
                f"cannot {op} {self.dimension.label} and {other.dimension.label}"
            )
        return other

    def __add__(self, other: Quantity) -> Quantity:
        other = self._check(other, "add")
        return Quantity(self.magnitude + other.magnitude, self.dimension)

    def __sub__(self, other: Quantity) -> Quantity:
        other = self._check(other, "subtract")
        return Quantity(self.magnitude - other.magnitude, self.dimension)

    def __mul__(self, k: float) -> Quantity:
        if isinstance(k, Quantity) or not isinstance(k, Real):
            return NotImplemented
        return Quantity(self.magnitude * float(k), self.dimension)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Quantity):
            # Same-dimension ratio is dimensionless.
            other = self._check(other, "divide")
            return self.magnitude / other.magnitude
        if not isinstance(other, Real):
            return NotImplemented
        return Quantity(self.magnitude / float(other), self.dimension)

    def __neg__(self) -> Quantity:
        return Quantity(-self.magnitude, self.dimension)

    def __abs__(self) -> Quantity:
        return Quantity(abs(self.magnitude), self.dimension)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.dimension is other.dimension and self.magnitude == other.magnitude

    def __lt__(self, other: Quantity) -> bool:
        other = self._check(other, "compare")
        return self.magnitude < other.magnitude

    def __hash__(self) -> int:
        return hash((self.magnitude, self.dimension))

    def __str__(self) -> str:
        return format_quantity(self)


_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
# Characters that cannot start a unit symbol; seeing one right after the
# number means the numeric token itself is malformed (e.g. "2.0.1", "1,000").
_NUMBER_TAIL = set("0123456789.,_+-")


def parse_quantity(text: str, dimension: Dimension) -> Quantity:
    """Parse ``"<number> <unit>"`` into a quantity of ``dimension``.

    Whitespace between number and unit is optional (``"2.0L"``).

    Raises:
        ParseError: ``EMPTY_INPUT`` for empty/blank input, ``MALFORMED_NUMBER``
            when the leading token is not a finite decimal number,
            ``UNRECOGNIZED_UNIT`` when the unit is missing or not in the
            dimension's table.
    """
    s = text.strip()
    if not s:
        raise ParseError(ParseErrorKind.EMPTY_INPUT, text, dimension)

    m = _NUMBER.match(s)
    rest = s[m.end():] if m else ""
    if m is None or (rest and rest[0] in _NUMBER_TAIL):
        token = s.split(None, 1)[0]
        raise ParseError(ParseErrorKind.MALFORMED_NUMBER, text, dimension, detail=token)

    value = float(m.group())
    if not math.isfinite(value):
        raise ParseError(ParseErrorKind.MALFORMED_NUMBER, text, dimension, detail=m.group())

    unit = rest.strip()
    magnitude = value * _factor(dimension, unit, text)
    # Scaling into the canonical unit can overflow a finite literal.
    if not math.isfinite(magnitude):
        raise ParseError(ParseErrorKind.MALFORMED_NUMBER, text, dimension, detail=m.group())
    return Quantity(magnitude, dimension)


def format_quantity(q: Quantity, unit: str | None = None, precision: int | None = None) -> str:
    """Render ``q`` as ``"<value> <unit>"``.

    Without ``precision`` the shortest round-trip representation is used, so
    the result parses back to ``q`` within float tolerance.
    """
    unit = unit if unit is not None else q.dimension.canonical_unit
    value = q.to(unit)
    text = repr(value) if precision is None else f"{value:.{precision}g}"
    return f"{text} {unit}"
