# ScientificEngine
"""""
Named constants and the factorial for the exact evaluator.

pi and e are irrational, so they are represented by the rational value of
their first CONSTANT_DIGITS decimal places.
"""""

from types import MappingProxyType

from .Rational import Rational, simplify


CONSTANT_DIGITS = 100

PI_DIGITS = ("3."
             "1415926535897932384626433832795028841971693993751058209749445923"
             "078164062862089986280348253421170679")

E_DIGITS = ("2."
            "7182818284590452353602874713526624977572470936999595749669676277"
            "240766303535475945713821785251664274")

# Below this the plain running product is faster than the prime factorisation
FACTORIAL_THRESHOLD = 1000


def from_digits(digits):
    whole, fraction = digits.split(".")
    return simplify(Rational(int(whole + fraction), 10 ** len(fraction)))


CONSTANTS = MappingProxyType({
    "pi": from_digits(PI_DIGITS),
    "e": from_digits(E_DIGITS),
})


def constant(name):
    """Rational approximation of a named constant ('pi' or 'e')."""
    return CONSTANTS[name]


def primes_up_to(limit):
    """Sieve of Eratosthenes; returns all primes <= limit."""
    if limit < 2:
        return []
    sieve = bytearray([1]) * (limit + 1)
    sieve[0] = sieve[1] = 0
    i = 2
    while i * i <= limit:
        if sieve[i]:
            sieve[i * i::i] = bytes(len(range(i * i, limit + 1, i)))
        i += 1
    return [p for p in range(2, limit + 1) if sieve[p]]


def legendre_exponent(n, p):
    """Exponent of the prime p in n! (sum of n // p^k)."""
    exponent = 0
    while n >= p:
        n //= p
        exponent += n
    return exponent


def balanced_product(factors):
    """Multiply factors pairwise, level by level, so operands stay similar in size."""
    if not factors:
        return 1
    level = list(factors)
    while len(level) > 1:
        paired = [level[i] * level[i + 1] for i in range(0, len(level) - 1, 2)]
        if len(level) % 2:
            paired.append(level[-1])
        level = paired
    return level[0]


def factorial(n):
    """n! for a non-negative int n.

    Small n use the direct product; larger n combine the prime powers of n!
    (Legendre's formula) with a balanced product.
    """
    if n < 0:
        raise ValueError("factorial() not defined for negative values")
    if n < 2:
        return 1

    if n < FACTORIAL_THRESHOLD:
        result = 1
        for i in range(2, n + 1):
            result *= i
        return result

    prime_powers = [p ** legendre_exponent(n, p) for p in primes_up_to(n)]
    return balanced_product(prime_powers)
