"""
Numeric primitives shared by the formula families.

erfc uses the Chebyshev-fitted exponential approximation from Numerical
Recipes (fractional error below 1.2e-7 everywhere): with z = |x| and
t = 1 / (1 + z/2),

    erfc(z) ~= t * exp(-z^2 + P(t))

where P is a degree-9 polynomial evaluated by Horner's method. Negative
arguments are reflected through erfc(-x) = 2 - erfc(x).
"""

import math

# P(t) coefficients, constant term first
ERFC_COEFFICIENTS = (
    -1.26551223,
    1.00002368,
    0.37409196,
    0.09678418,
    -0.18628806,
    0.27886807,
    -1.13520398,
    1.48851587,
    -0.82215223,
    0.17087277,
)


def erfc(x: float) -> float:
    """Complementary error function, erfc(x) = 2/sqrt(pi) * int_x^inf exp(-t^2) dt."""
    z = abs(x)
    t = 1.0 / (1.0 + 0.5 * z)

    poly = 0.0
    for coefficient in reversed(ERFC_COEFFICIENTS):
        poly = coefficient + t * poly

    result = t * math.exp(-z * z + poly)
    return result if x >= 0 else 2.0 - result


def q_function(x: float) -> float:
    """Gaussian tail probability Q(x) = 0.5 * erfc(x / sqrt(2))."""
    return 0.5 * erfc(x / math.sqrt(2))


def factorial(n: int) -> int:
    """
    Iterative factorial.

    Returns -1 for negative n. The sentinel is not a factorial; callers must
    check for it before dividing.
    """
    if n < 0:
        return -1
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def db_to_linear(value_db: float) -> float:
    """Power ratio from decibels."""
    return 10 ** (value_db / 10)


def linear_to_db(value: float) -> float:
    """Decibels from a positive power ratio."""
    return 10 * math.log10(value)
