import pytest
import sympy as sp

from errors import InvalidSyntax, InvalidValue, ParseIntError, ParseRationalError
from monomial import Monomial
from number import Number
from polynomial import Polynomial


def test_constructors():
    assert str(Monomial.constant(4)) == "4"
    assert str(Monomial.linear(2)) == "2x"
    assert str(Monomial(4, 22)) == "4x^22"
    assert Monomial("2.5", 1) == Monomial(sp.Rational(5, 2), 1)


@pytest.mark.parametrize('factory', [Monomial.constant, Monomial.linear, lambda c: Monomial(c, 5)])
def test_zero_coefficient_is_rejected(factory):
    with pytest.raises(ValueError, match="must not be zero"):
        factory(0)


@pytest.mark.parametrize('text, coeff, degree', [
    ("4x^10", 4, 10),
    ("x", 1, 1),
    ("-x", -1, 1),
    ("+x^2", 1, 2),
    ("-2.5x", sp.Rational(-5, 2), 1),
    ("7", 7, 0),
    ("-3", -3, 0),
    ("x^-3", 1, -3),
    ("1/3x^2", sp.Rational(1, 3), 2),
    (" 2 x ^ 3 ", 2, 3),
])
def test_from_string(text, coeff, degree):
    assert Monomial.from_string(text) == Monomial(coeff, degree)


@pytest.mark.parametrize('text, error', [
    ("", InvalidSyntax),
    ("xx", InvalidSyntax),
    ("2^3", InvalidSyntax),
    ("x2", InvalidSyntax),
    ("x^", ParseIntError),
    ("x^a", ParseIntError),
    ("x^1_0", ParseIntError),
    ("x^+3", ParseIntError),
    ("x^\u0663", ParseIntError),
    ("x^--2", ParseIntError),
    ("abc", ParseRationalError),
    ("2.x", ParseRationalError),
    ("0", InvalidValue),
    ("0x^2", InvalidValue),
])
def test_from_string_errors(text, error):
    with pytest.raises(error):
        Monomial.from_string(text)


def test_integer_parse_error_keeps_cause():
    with pytest.raises(ParseIntError) as info:
        Monomial.from_string("3x^two")
    assert isinstance(info.value.__cause__, ValueError)


@pytest.mark.parametrize('monomial, text', [
    (Monomial(1, 0), "1"),
    (Monomial(-1, 0), "-1"),
    (Monomial(1, 1), "x"),
    (Monomial(-1, 1), "-x"),
    (Monomial(-1, 5), "-x^5"),
    (Monomial("6.25", 1), "6.25x"),
    (Monomial(sp.Rational(1, 3), 2), "1/3x^2"),
    (Monomial("2.5", -3), "2.5x^-3"),
])
def test_display(monomial, text):
    assert str(monomial) == text
    assert Monomial.from_string(text) == monomial


def test_multiplication_and_division():
    assert Monomial(4, 10) * Monomial.linear(2) == Monomial(8, 11)
    assert Monomial(4, 10) * 3 == Monomial(12, 10)
    assert 3 * Monomial(4, 10) == Monomial(12, 10)
    assert Monomial(2, 1) * Number("1/2") == Monomial(1, 1)
    assert Monomial(4, 2) / Monomial(8, 5) == Monomial("0.5", -3)
    assert 1 / Monomial(2, 1) == Monomial("0.5", -1)


def test_in_place_operators():
    monomial = Monomial(3, 1)
    monomial *= Monomial(2, 2)
    assert monomial == Monomial(6, 3)

    monomial /= 3
    assert monomial == Monomial(2, 3)


def test_power():
    assert str(Monomial.from_string("5x^4") ** 3) == "125x^12"
    assert Monomial(2, 3) ** -1 == Monomial("0.5", -3)
    assert Monomial(7, 2) ** 0 == Monomial(1, 0)


def test_negation():
    assert -Monomial(3, 2) == Monomial(-3, 2)


def test_addition_makes_polynomials():
    total = Monomial(4, 10) + Monomial(1, 20)
    assert isinstance(total, Polynomial)
    assert str(total) == "x^20 + 4x^10"

    assert str(Monomial(1, 0) + Monomial("2.5", 0)) == "3.5"
    assert (Monomial(2, 1) - Monomial(2, 1)).is_zero()
    assert str(1 - Monomial(1, 1)) == "-x + 1"
    assert sum([Monomial(1, 1), Monomial(2, 0)]) == Polynomial.from_string("x + 2")


def test_operands_that_are_not_monomials():
    with pytest.raises(TypeError):
        Monomial(1, 1) * "2"
    with pytest.raises(ValueError):
        Monomial(1, 1) / 0


def test_copy_is_independent():
    original = Monomial(2, 2)
    duplicate = original.copy()
    duplicate *= 2

    assert original == Monomial(2, 2)
    assert repr(duplicate) == "Monomial('4', 2)"
