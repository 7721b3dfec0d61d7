#Number class and the rational helpers shared by the monomial and polynomial code

import functools
import logging
import math
import numbers
import re
from enum import Enum
from typing import Final

import gmpy2
import sympy as sp

from errors import ParseRationalError, UnsupportedOperationError

logger = logging.getLogger(__name__)

# Decimal places kept by the rational approximations of pi and e
CONSTANT_DIGITS: Final[int] = 15

_DECIMAL = re.compile(r"^([+-]?)([0-9]+)(?:\.([0-9]+))?$")
_FRACTION = re.compile(r"^([+-]?)([0-9]+)/([0-9]+)$")


# Parse "12", "-2.5" or "7/3" into an exact sympy Rational
def parse_rational(text):
    stripped = text.strip()

    match = _DECIMAL.match(stripped)
    if match:
        sign, whole, fraction = match.groups()
        fraction = fraction or ""
        value = sp.Rational(_to_int(text, whole + fraction), 10 ** len(fraction))
    else:
        match = _FRACTION.match(stripped)
        if match is None:
            raise ParseRationalError(text)
        sign, numerator, denominator = match.groups()
        denominator = _to_int(text, denominator)
        if denominator == 0:
            raise ParseRationalError(text, "zero denominator")
        value = sp.Rational(_to_int(text, numerator), denominator)

    return -value if sign == "-" else value


# Digit strings go through mpz so literals of any length convert
def _to_int(text, digits):
    try:
        return int(gmpy2.mpz(digits))
    except ValueError as err:
        raise ParseRationalError(text) from err


def _digits(n):
    return gmpy2.mpz(n).digits()


def to_rational(value):
    """
    Convert a scalar into an exact sympy Rational.

    Accepts Number, sympy Integer/Rational, any integral or rational value
    (int, numpy integers, fractions.Fraction), finite floats (read through their
    shortest decimal representation, so 0.1 becomes 1/10) and rational text.
    """
    if isinstance(value, Number):
        return value.value
    if isinstance(value, sp.Rational):
        return value
    if isinstance(value, numbers.Integral):
        return sp.Integer(int(value))
    if isinstance(value, numbers.Rational):
        return sp.Rational(int(value.numerator), int(value.denominator))
    if isinstance(value, numbers.Real):
        if not math.isfinite(value):
            raise ValueError(f"cannot represent {value} exactly")
        return sp.Rational(str(float(value)))
    if isinstance(value, str):
        return parse_rational(value)
    raise TypeError(f"cannot convert {type(value).__name__} to a rational number")


def format_rational(value):
    """
    Render a sympy Rational so that parse_rational reads it back unchanged.

    Integers print plainly, rationals with a terminating decimal expansion print
    as a decimal (5/2 -> "2.5") and everything else prints as "p/q".
    """
    if value.q == 1:
        return _digits(value.p)

    twos = sp.multiplicity(2, value.q)
    fives = sp.multiplicity(5, value.q)
    if 2 ** twos * 5 ** fives != value.q:
        return f"{_digits(value.p)}/{_digits(value.q)}"

    places = max(twos, fives)
    digits = _digits(abs(value.p) * 10 ** places // value.q).rjust(places + 1, "0")
    sign = "-" if value.p < 0 else ""
    return f"{sign}{digits[:-places]}.{digits[-places:]}"


class NumberKind(Enum):
    NATURAL = "natural"
    INTEGER = "integer"
    RATIONAL = "rational"


@functools.total_ordering
class Number:
    """
    An exact scalar that always knows which set it belongs to.

    The kind is never chosen by the caller: the constructor normalizes the value
    and derives it (positive integers are NATURAL, zero and negative integers are
    INTEGER, everything else is RATIONAL). Arithmetic results go through the same
    constructor, so 5/2 * 2 comes back as a NATURAL.
    """

    __slots__ = ("_value", "_kind")

    def __init__(self, value=0):
        rational = to_rational(value)

        if rational.is_integer:
            kind = NumberKind.NATURAL if rational > 0 else NumberKind.INTEGER
        else:
            kind = NumberKind.RATIONAL

        self._value = rational
        self._kind = kind

    @classmethod
    def from_string(cls, text):
        number = cls(parse_rational(text))
        logger.debug("parsed %r as %s", text, number)
        return number

    parse = from_string

    @classmethod
    def pi(cls):
        scale = 10 ** CONSTANT_DIGITS
        return cls(sp.Rational(int(sp.floor(sp.pi * scale)), scale))

    @classmethod
    def e(cls):
        scale = 10 ** CONSTANT_DIGITS
        return cls(sp.Rational(int(sp.floor(sp.E * scale)), scale))

    @property
    def value(self):
        return self._value

    @property
    def kind(self):
        return self._kind

    @property
    def numerator(self):
        return self._value.p

    @property
    def denominator(self):
        return self._value.q

    @property
    def is_integer(self):
        return self._kind is not NumberKind.RATIONAL

    def to_monomial(self):
        from monomial import Monomial

        return Monomial.constant(self._value)

    @staticmethod
    def _coerce(other):
        if isinstance(other, Number):
            return other
        if isinstance(other, str):
            return NotImplemented
        try:
            return Number(other)
        except (TypeError, ValueError):
            return NotImplemented

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return Number(self._value + other._value)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return Number(self._value - other._value)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return Number(other._value - self._value)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return Number(self._value * other._value)

    __rmul__ = __mul__

    # sympy answers x / 0 with complex infinity, Python numbers raise
    def __truediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if other._value == 0:
            raise ZeroDivisionError("division by zero")
        return Number(self._value / other._value)

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other / self

    # Truncating remainder (takes the sign of the dividend), integers only
    def __mod__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if NumberKind.RATIONAL in (self._kind, other._kind):
            raise UnsupportedOperationError(
                f"remainder is not defined for non-integer operands ({self} % {other})"
            )
        if other._value == 0:
            raise ZeroDivisionError("integer modulo by zero")

        lhs, rhs = int(self._value), int(other._value)
        remainder = abs(lhs) % abs(rhs)
        return Number(-remainder if lhs < 0 else remainder)

    def __rmod__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other % self

    def __neg__(self):
        return Number(-self._value)

    def __abs__(self):
        return Number(abs(self._value))

    def __eq__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return bool(self._value == other._value)

    def __lt__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return bool(self._value < other._value)

    def __hash__(self):
        return hash(self._value)

    def __int__(self):
        return int(self._value)

    def __float__(self):
        return float(self._value)

    def __str__(self):
        return format_rational(self._value)

    def __repr__(self):
        return f"Number({str(self)!r})"
