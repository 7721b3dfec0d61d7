#Monomial class

import operator
import re
from typing import Final

from errors import InvalidSyntax, InvalidValue, ParseIntError
from number import format_rational, parse_rational, to_rational

# Display name of the indeterminate
VARIABLE: Final[str] = "x"

# Exponents are ASCII digits with an optional minus
_EXPONENT = re.compile(r"^-?[0-9]+$")


class Monomial:
    """
    A single term ``coeff * x^degree``.

    ``coeff`` is an exact sympy Rational that is never zero, ``degree`` is an
    int and may be negative (dividing by a monomial of higher degree).
    """

    __slots__ = ("coeff", "degree")

    def __init__(self, coeff, degree=0):
        coeff = to_rational(coeff)
        if coeff == 0:
            raise ValueError("monomial coefficient must not be zero")

        self.coeff = coeff
        self.degree = operator.index(degree)

    @classmethod
    def constant(cls, coeff):
        return cls(coeff, 0)

    @classmethod
    def linear(cls, coeff):
        return cls(coeff, 1)

    # Conversion capability used by every operator that accepts "something monomial-like"
    @classmethod
    def coerce(cls, value):
        if isinstance(value, Monomial):
            return value
        to_monomial = getattr(value, "to_monomial", None)
        if to_monomial is not None:
            return to_monomial()
        return cls.constant(value)

    # Static method to create a Monomial instance from a string such as "-2.5x^3"
    @staticmethod
    def from_string(text):
        term = "".join(text.split())
        if not term or term.count(VARIABLE) > 1:
            raise InvalidSyntax(text)

        head, marker, tail = term.partition(VARIABLE)

        if not marker:
            if "^" in term:
                raise InvalidSyntax(text)
            degree = 0
        elif not tail:
            degree = 1
        elif tail.startswith("^"):
            exponent = tail[1:]
            try:
                if not _EXPONENT.match(exponent):
                    raise ValueError(f"invalid exponent {exponent!r}")
                degree = int(exponent)
            except ValueError as err:
                raise ParseIntError(exponent) from err
        else:
            raise InvalidSyntax(text)

        if marker and head in ("", "+"):
            coeff = 1
        elif marker and head == "-":
            coeff = -1
        else:
            coeff = parse_rational(head)

        if coeff == 0:
            raise InvalidValue(head)

        return Monomial(coeff, degree)

    def copy(self):
        return Monomial(self.coeff, self.degree)

    def __neg__(self):
        return Monomial(-self.coeff, self.degree)

    def __mul__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Monomial(self.coeff * rhs.coeff, self.degree + rhs.degree)

    __rmul__ = __mul__

    def __imul__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        self.coeff *= rhs.coeff
        self.degree += rhs.degree
        return self

    def __truediv__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Monomial(self.coeff / rhs.coeff, self.degree - rhs.degree)

    def __rtruediv__(self, other):
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def __itruediv__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        self.coeff /= rhs.coeff
        self.degree -= rhs.degree
        return self

    def __pow__(self, exponent):
        exponent = operator.index(exponent)
        return Monomial(self.coeff ** exponent, self.degree * exponent)

    # Sums of monomials are not monomials, so these hand over to Polynomial
    def __add__(self, other):
        from polynomial import Polynomial

        return Polynomial([self]) + other

    __radd__ = __add__

    def __sub__(self, other):
        from polynomial import Polynomial

        return Polynomial([self]) - other

    def __rsub__(self, other):
        from polynomial import Polynomial

        return -Polynomial([self]) + other

    def __eq__(self, other):
        if isinstance(other, Monomial):
            return self.degree == other.degree and bool(self.coeff == other.coeff)
        return NotImplemented

    __hash__ = None

    def __str__(self):
        if self.degree == 0:
            return format_rational(self.coeff)

        power = VARIABLE if self.degree == 1 else f"{VARIABLE}^{self.degree}"

        if self.coeff == 1:
            return power
        if self.coeff == -1:
            return f"-{power}"
        return f"{format_rational(self.coeff)}{power}"

    def __repr__(self):
        return f"Monomial({format_rational(self.coeff)!r}, {self.degree})"


# Returns None for operands that cannot be read as a monomial so the caller can defer
def _operand(value):
    if isinstance(value, str):
        return None
    try:
        return Monomial.coerce(value)
    except TypeError:
        return None
