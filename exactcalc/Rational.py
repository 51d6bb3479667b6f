# Rational.py
"""""
Exact rational numbers as numerator / denominator pairs of Python ints.

The denominator is kept positive after every operation, but values are only
reduced to lowest terms where it is cheap (multiplication / division cross
cancellation) or where the denominator has grown past the simplify threshold.
Call simplify() to get the canonical form.
"""""

from . import error as E


# Denominators above this are reduced after add / subtract
SIMPLIFY_THRESHOLD = 10 ** 4000


class Rational:
    __slots__ = ("numerator", "denominator")

    def __init__(self, numerator, denominator=1):
        self.numerator = numerator
        self.denominator = denominator

    @property
    def is_integer(self):
        return self.denominator == 1

    def __eq__(self, other):
        if isinstance(other, int):
            other = Rational(other)
        if not isinstance(other, Rational):
            return NotImplemented
        # Cross multiplication also compares unreduced values correctly
        return self.numerator * other.denominator == other.numerator * self.denominator

    def __hash__(self):
        canonical = simplify(self)
        return hash((canonical.numerator, canonical.denominator))

    def __repr__(self):
        return f"Rational({self.numerator}, {self.denominator})"


def trailing_zeros(value):
    """Number of factors of two in a positive int."""
    return (value & -value).bit_length() - 1


def gcd(a, b):
    """Greatest common divisor with Stein's binary algorithm.

    Only shifts and subtraction are used on the big operands.
    gcd(a, 0) == |a|, gcd(0, 0) == 0.
    """
    a = -a if a < 0 else a
    b = -b if b < 0 else b
    if a == 0:
        return b
    if b == 0:
        return a
    if a == 1 or b == 1:
        return 1

    # Common powers of two
    shift = trailing_zeros(a | b)
    a >>= trailing_zeros(a)

    while b != 0:
        b >>= trailing_zeros(b)
        if a > b:
            a, b = b, a
        b -= a

    return a << shift


def simplify(value):
    """Return value in canonical form (positive denominator, lowest terms)."""
    numerator, denominator = value.numerator, value.denominator
    if denominator == 0:
        raise E.DivisionByZeroError()
    if numerator == 0:
        return Rational(0, 1)
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    common = gcd(numerator, denominator)
    if common == 1:
        return Rational(numerator, denominator)
    return Rational(numerator // common, denominator // common)


def bounded(numerator, denominator, threshold):
    """Keep the pair as it is unless the denominator got too large."""
    if denominator == 1:
        return Rational(numerator, 1)
    if denominator > threshold:
        return simplify(Rational(numerator, denominator))
    return Rational(numerator, denominator)


# -----------------------------
# Unary operations
# -----------------------------

def negate(value):
    return Rational(-value.numerator, value.denominator)


def absolute(value):
    return Rational(abs(value.numerator), value.denominator)


# -----------------------------
# Binary operations
# -----------------------------

def add(left, right, threshold=SIMPLIFY_THRESHOLD):
    return _add_or_subtract(left, right, False, threshold)


def subtract(left, right, threshold=SIMPLIFY_THRESHOLD):
    return _add_or_subtract(left, right, True, threshold)


def _add_or_subtract(left, right, is_sub, threshold):
    if left.denominator == right.denominator:
        # Shared denominator: combine numerators directly
        if is_sub:
            numerator = left.numerator - right.numerator
        else:
            numerator = left.numerator + right.numerator
        return bounded(numerator, left.denominator, threshold)

    common_factor = gcd(left.denominator, right.denominator)

    if common_factor == 1:
        left_part = left.numerator * right.denominator
        right_part = right.numerator * left.denominator
        denominator = left.denominator * right.denominator
    else:
        # Scale both sides up to lcm(dl, dr) instead of the full product
        multiplier_left = right.denominator // common_factor
        multiplier_right = left.denominator // common_factor
        left_part = left.numerator * multiplier_left
        right_part = right.numerator * multiplier_right
        denominator = left.denominator * multiplier_left

    numerator = left_part - right_part if is_sub else left_part + right_part
    return bounded(numerator, denominator, threshold)


def multiply(left, right):
    if left.denominator == 1 and right.denominator == 1:
        return Rational(left.numerator * right.numerator, 1)

    # Cross-cancel before multiplying so the factors stay small
    g1 = gcd(left.numerator, right.denominator)
    g2 = gcd(right.numerator, left.denominator)
    return Rational((left.numerator // g1) * (right.numerator // g2),
                    (left.denominator // g2) * (right.denominator // g1))


def divide(left, right):
    if right.numerator == 0:
        raise E.DivisionByZeroError()

    numerator, denominator = right.denominator, right.numerator
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    return multiply(left, Rational(numerator, denominator))


def power(base, exponent, max_result_bits=None):
    """Raise base to an integer exponent.

    Raises:
        FractionalExponentError: exponent has a denominator other than 1.
        DivisionByZeroError: zero base with a negative exponent.
        MaximumPrecisionError: the result would exceed max_result_bits.
    """
    if exponent.denominator != 1:
        exponent = simplify(exponent)
        if exponent.denominator != 1:
            raise E.FractionalExponentError()

    n = exponent.numerator
    numerator, denominator = base.numerator, base.denominator

    if n < 0:
        if numerator == 0:
            raise E.DivisionByZeroError()
        numerator, denominator = denominator, numerator
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        n = -n

    if max_result_bits is not None and n > 1:
        size = max(abs(numerator).bit_length(), denominator.bit_length())
        # 0, 1 and -1 over 1 never grow
        if size > 1 and (size - 1) * n > max_result_bits:
            raise E.MaximumPrecisionError((size - 1) * n, max_result_bits)

    return Rational(numerator ** n, denominator ** n)
