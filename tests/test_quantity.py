"""Tests for Quantity arithmetic and dimension safety."""

import dataclasses

import pytest

from wicalc.core.errors import DimensionError, ParseError
from wicalc.core.units import Dimension, Quantity


def bar(x: float) -> Quantity:
    return Quantity.of(x, "bar", Dimension.PRESSURE)


def litres(x: float) -> Quantity:
    return Quantity.of(x, "L", Dimension.VOLUME)


def test_add_and_subtract_same_dimension():
    assert (bar(1) + bar(2)).to("bar") == pytest.approx(3.0)
    assert (bar(5) - bar(2)).to("bar") == pytest.approx(3.0)


def test_add_different_dimensions_raises():
    with pytest.raises(DimensionError, match="cannot add pressure and volume"):
        bar(1) + litres(1)


def test_dimension_error_is_type_error():
    with pytest.raises(TypeError):
        bar(1) - litres(1)


def test_add_plain_number_raises():
    with pytest.raises(TypeError):
        bar(1) + 5  # type: ignore[operator]


def test_scalar_multiply_and_divide():
    assert (bar(2) * 3).to("bar") == pytest.approx(6.0)
    assert (3 * bar(2)).to("bar") == pytest.approx(6.0)
    assert (bar(6) / 2).to("bar") == pytest.approx(3.0)
    assert (bar(6) * 0.5).dimension is Dimension.PRESSURE


def test_same_dimension_ratio_is_dimensionless():
    ratio = litres(3) / litres(1.5)
    assert isinstance(ratio, float)
    assert ratio == pytest.approx(2.0)


def test_cross_dimension_ratio_raises():
    with pytest.raises(DimensionError):
        litres(1) / bar(1)


def test_negate_and_abs():
    assert (-bar(2)).magnitude == pytest.approx(-2e5)
    assert abs(-bar(2)) == bar(2)


def test_comparisons():
    assert bar(1) < bar(2)
    assert bar(2) >= bar(2)
    assert max(bar(1), bar(3), bar(2)) == bar(3)


def test_compare_different_dimensions_raises():
    with pytest.raises(DimensionError):
        bar(1) < litres(1)  # noqa: B015


def test_equality_requires_same_dimension():
    assert Quantity(1.0, Dimension.PRESSURE) != Quantity(1.0, Dimension.ENTHALPY)
    assert Quantity(1.0, Dimension.PRESSURE) == Quantity(1, Dimension.PRESSURE)


def test_hashable():
    assert len({bar(1), bar(1.0), litres(1)}) == 2


def test_immutable():
    q = bar(1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        q.dimension = Dimension.VOLUME  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        q.magnitude = 0.0  # type: ignore[misc]


def test_to_unknown_unit_raises():
    with pytest.raises(ParseError):
        bar(1).to("L")


def test_of_unknown_unit_raises():
    with pytest.raises(ParseError):
        Quantity.of(1.0, "gallon", Dimension.VOLUME)


@pytest.mark.parametrize("magnitude", [float("nan"), float("inf"), -float("inf")])
def test_non_finite_magnitude_rejected(magnitude):
    with pytest.raises(ValueError, match="finite"):
        Quantity(magnitude, Dimension.PRESSURE)


def test_dimension_must_be_enum():
    with pytest.raises(TypeError):
        Quantity(1.0, "pressure")  # type: ignore[arg-type]
