#Polynomial class

import bisect
import functools
import logging
import re

import numpy as np
import sympy as sp

from monomial import VARIABLE, Monomial
from number import Number, to_rational

logger = logging.getLogger(__name__)

# A "-" that is not the sign of an exponent starts a new term
_TERM_SEPARATOR = re.compile(r"(?<!\^)-")


# Sort key: terms are stored by descending degree
def _descending(monomial):
    return -monomial.degree


# Zero-coefficient slot, only ever lives inside a polynomial until the next _clean
def _slot(degree):
    slot = Monomial.__new__(Monomial)
    slot.coeff = sp.Integer(0)
    slot.degree = degree
    return slot


# gcd(a/b, c/d) = gcd(a, c) / lcm(b, d)
def _rational_gcd(acc, coeff):
    return sp.Rational(sp.igcd(acc.p, coeff.p), sp.ilcm(acc.q, coeff.q))


class Polynomial:
    """
    A univariate polynomial with exact rational coefficients.

    Terms are kept sorted by degree in descending order, every degree appears at
    most once and no term has a zero coefficient. The empty polynomial is zero.

    >>> Polynomial.from_string("4x^2 + 5x^3")
    5x^3 + 4x^2
    >>> Polynomial.from_string("x - 1") * Polynomial.from_string("x + 1")
    x^2 - 1
    """

    def __init__(self, monomials=()):
        self._terms = []
        for monomial in monomials:
            self._insert(Monomial.coerce(monomial).copy())
        self._clean()

    def __repr__(self):
        return self.format_polynomial()

    @classmethod
    def zero(cls):
        return cls()

    @classmethod
    def coerce(cls, value):
        if isinstance(value, Polynomial):
            return value
        if isinstance(value, str):
            raise TypeError("use Polynomial.from_string to read text")
        if isinstance(value, Monomial):
            return cls([value])
        if to_rational(value) == 0:
            return cls()
        return cls([value])

    # Builds a polynomial from terms that are already in canonical order
    @classmethod
    def _from_terms(cls, terms):
        result = cls()
        result._terms = list(terms)
        return result

    # Static method to create a Polynomial instance from a string
    @staticmethod
    def from_string(expression):
        if expression.strip() == "0":
            return Polynomial()

        compact = "".join(expression.split())
        negative = compact.startswith("-")
        if negative:
            compact = compact[1:]

        segments = _TERM_SEPARATOR.sub("+-", compact).split("+")
        monomials = [Monomial.from_string(segment) for segment in segments]
        if negative:
            monomials[0] = -monomials[0]

        logger.debug("parsed %r into terms %s", expression, monomials)

        result = Polynomial()
        for monomial in monomials:
            result += monomial
        return result

    # Static method to create a Polynomial from dense coefficients, highest degree first
    @staticmethod
    def from_coefficients(coefficients):
        values = [to_rational(value) for value in np.asarray(coefficients, dtype=object).ravel()]
        top = len(values) - 1
        return Polynomial(
            Monomial(value, top - index) for index, value in enumerate(values) if value != 0
        )

    @staticmethod
    def from_sympy(expr, symbol=None):
        x = sp.Symbol(VARIABLE) if symbol is None else symbol
        result = Polynomial()

        for term in sp.Add.make_args(sp.expand(sp.sympify(expr))):
            if term == 0:
                continue
            coeff, exponent = term.as_coeff_exponent(x)
            if not (coeff.is_Rational and exponent.is_Integer):
                raise ValueError(f"{term} is not a rational monomial in {x}")
            result += Monomial(coeff, int(exponent))

        return result

    def to_sympy(self, symbol=None):
        x = sp.Symbol(VARIABLE) if symbol is None else symbol
        return sp.Add(*(monomial.coeff * x ** monomial.degree for monomial in self._terms))

    # Dense coefficient array, highest degree first (the zero polynomial gives an empty array)
    def coefficients(self):
        if not self._terms:
            return np.array([], dtype=object)
        if self._terms[-1].degree < 0:
            raise ValueError("dense coefficients need non-negative degrees")

        top = self._terms[0].degree
        dense = np.full(top + 1, sp.Integer(0), dtype=object)
        for monomial in self._terms:
            dense[top - monomial.degree] = monomial.coeff
        return dense

    def _locate(self, degree):
        index = bisect.bisect_left(self._terms, -degree, key=_descending)
        found = index < len(self._terms) and self._terms[index].degree == degree
        return index, found

    def _insert(self, monomial):
        index, found = self._locate(monomial.degree)
        if found:
            self._terms[index].coeff += monomial.coeff
        else:
            self._terms.insert(index, monomial)

    def _get_or_insert(self, degree):
        index, found = self._locate(degree)
        if not found:
            self._terms.insert(index, _slot(degree))
        return self._terms[index]

    def _clean(self):
        self._terms = [monomial for monomial in self._terms if monomial.coeff != 0]

    def degree(self):
        return self._terms[0].degree if self._terms else None

    def leading(self):
        return self._terms[0].copy() if self._terms else None

    def get(self, degree):
        monomial = self.get_mut(degree)
        return None if monomial is None else monomial.copy()

    def get_mut(self, degree):
        """
        Return the stored term of the given degree, or None.

        The term is live: changing its coefficient changes the polynomial. The
        coefficient must stay non-zero, as for any Monomial.
        """
        index, found = self._locate(degree)
        return self._terms[index] if found else None

    def is_zero(self):
        return not self._terms

    def copy(self):
        return Polynomial._from_terms(monomial.copy() for monomial in self._terms)

    def __iter__(self):
        return iter([monomial.copy() for monomial in self._terms])

    def __len__(self):
        return len(self._terms)

    def __bool__(self):
        return bool(self._terms)

    # Method to check if two polynomials are equal
    def __eq__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._terms == rhs._terms

    __hash__ = None

    def __neg__(self):
        return Polynomial._from_terms(-monomial for monomial in self._terms)

    # Method to add two polynomials
    def __iadd__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        for monomial in [monomial.copy() for monomial in rhs._terms]:
            self._insert(monomial)
        self._clean()
        return self

    def __add__(self, other):
        return self.copy().__iadd__(other)

    __radd__ = __add__

    # Method to subtract two polynomials
    def __isub__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        for monomial in [-monomial for monomial in rhs._terms]:
            self._insert(monomial)
        self._clean()
        return self

    def __sub__(self, other):
        return self.copy().__isub__(other)

    def __rsub__(self, other):
        return (-self).__iadd__(other)

    # Scale every coefficient and shift every degree by one monomial
    def _scaled(self, monomial):
        return Polynomial._from_terms(term * monomial for term in self._terms)

    # Method to multiply two polynomials, one shifted copy of self per term of other
    def __mul__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented

        product = Polynomial()
        for monomial in rhs._terms:
            product += self._scaled(monomial)
        return product

    __rmul__ = __mul__

    def __imul__(self, other):
        product = self.__mul__(other)
        if product is NotImplemented:
            return NotImplemented
        self._terms = product._terms
        return self

    def div_rem(self, divisor):
        """
        Divide by ``divisor`` and return ``(quotient, remainder)``.

        Returns None when the divisor is the zero polynomial. A zero dividend gives
        ``(0, 0)``.

        >>> Polynomial.from_string("6x^5 + 5x^2 - 7").div_rem(Polynomial.from_string("2x^2 - 1"))
        (3x^3 + 1.5x + 2.5, 1.5x - 4.5)
        """
        quotient = self.copy()
        remainder = quotient.div_rem_inplace(divisor)
        if remainder is None:
            return None
        return quotient, remainder

    def div_rem_inplace(self, divisor):
        """
        Replace self with the quotient of the division by ``divisor`` and return
        the remainder, or None (leaving self untouched) if the divisor is zero.

        The sweep runs over every integer degree from the dividend's top degree
        down to the degree of the divisor's leading term (the normalizer). Each
        step turns the dividend's slot at that degree into the quotient
        coefficient and subtracts the rest of the divisor, scaled by it, from the
        lower slots. Afterwards the slots below the normalizer degree are the
        remainder and the ones above it, shifted down by the normalizer degree,
        are the quotient. Divisor terms that sit far from the leading one can
        leave negative degrees in the quotient.
        """
        divisor = Polynomial.coerce(divisor)
        if not divisor._terms:
            return None

        normalizer, *tail = [monomial.copy() for monomial in divisor._terms]

        top = self.degree()
        if top is None:
            return Polynomial()

        logger.debug("dividing %s by %s, sweeping degrees %d..%d", self, divisor, top, normalizer.degree)

        for degree in range(top, normalizer.degree - 1, -1):
            slot = self._get_or_insert(degree)
            coeff = slot.coeff / normalizer.coeff
            slot.coeff = coeff

            for term in tail:
                target = self._get_or_insert(degree + term.degree - normalizer.degree)
                target.coeff -= coeff * term.coeff

        self._clean()

        split = bisect.bisect_right(self._terms, -normalizer.degree, key=_descending)
        remainder = Polynomial._from_terms(self._terms[split:])
        del self._terms[split:]

        for monomial in self._terms:
            monomial.degree -= normalizer.degree

        logger.debug("quotient %s, remainder %s", self, remainder)
        return remainder

    def _quotient(self, divisor):
        result = self.div_rem(divisor)
        if result is None:
            raise ZeroDivisionError("cannot divide by the zero polynomial")
        return result

    # Method to divide two polynomials: by a polynomial gives the quotient, by a term divides every term
    def __truediv__(self, other):
        if isinstance(other, Polynomial):
            return self._quotient(other)[0]

        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        if not rhs._terms:
            raise ZeroDivisionError("division by zero")

        divisor = rhs._terms[0]
        return Polynomial._from_terms(term / divisor for term in self._terms)

    def __rtruediv__(self, other):
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return lhs._quotient(self)[0]

    def __itruediv__(self, other):
        result = self.__truediv__(other)
        if result is NotImplemented:
            return NotImplemented
        self._terms = result._terms
        return self

    def __mod__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._quotient(rhs)[1]

    def __rmod__(self, other):
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return lhs._quotient(self)[1]

    def __imod__(self, other):
        result = self.__mod__(other)
        if result is NotImplemented:
            return NotImplemented
        self._terms = result._terms
        return self

    def __divmod__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._quotient(rhs)

    def gcd(self, other):
        """Greatest common divisor in monic form (Euclid on div_rem remainders)."""
        a = self.copy()
        b = Polynomial.coerce(other).copy()

        while b:
            a, b = b, a.div_rem_inplace(b)
            logger.debug("gcd step: (%s, %s)", a, b)

        a.monic_inplace()
        return a

    def gcd_ext(self, other):
        """
        Extended Euclidean algorithm.

        Returns ``(s, t, g)`` where ``g`` is the monic gcd and
        ``s * self + t * other == g``.
        """
        old_r, r = self.copy(), Polynomial.coerce(other).copy()
        old_s, s = Polynomial([1]), Polynomial()
        old_t, t = Polynomial(), Polynomial([1])

        while r:
            quotient, remainder = old_r.div_rem(r)
            old_r, r = r, remainder
            old_s, s = s, old_s - quotient * s
            old_t, t = t, old_t - quotient * t
            logger.debug("gcd_ext step: r=%s, s=%s, t=%s", old_r, old_s, old_t)

        lead = old_r.monic_inplace()
        if lead is not None:
            old_s /= lead
            old_t /= lead

        return old_s, old_t, old_r

    def factor(self):
        result = self.copy()
        factor = result.factor_inplace()
        return None if factor is None else (factor, result)

    # Divide out the largest rational common to all coefficients, None if it is not above one
    def factor_inplace(self):
        factor = functools.reduce(
            _rational_gcd, (monomial.coeff for monomial in self._terms), sp.Integer(0)
        )
        if factor <= 1:
            return None

        for monomial in self._terms:
            monomial.coeff /= factor

        logger.debug("extracted common factor %s", Number(factor))
        return factor

    def monic(self):
        result = self.copy()
        lead = result.monic_inplace()
        return None if lead is None else (lead, result)

    # Divide by the leading coefficient, None for zero or already monic polynomials
    def monic_inplace(self):
        if not self._terms:
            return None

        lead = self._terms[0].coeff
        if lead == 1:
            return None

        for monomial in self._terms:
            monomial.coeff /= lead
        return lead

    # Method to format the polynomial
    def format_polynomial(self):
        if not self._terms:
            return "0"

        first, *rest = self._terms
        result = str(first)
        for monomial in rest:
            if monomial.coeff > 0:
                result += f" + {monomial}"
            else:
                result += f" - {-monomial}"
        return result


# Returns None for operands that cannot be read as a polynomial so the caller can defer
def _operand(value):
    if isinstance(value, str):
        return None
    try:
        return Polynomial.coerce(value)
    except TypeError:
        return None
