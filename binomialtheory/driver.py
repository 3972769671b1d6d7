"""Driver evaluation: (1 + x)^n or its explicit binomial expansion."""
from __future__ import annotations

from decimal import Decimal

from binomialtheory.numeric import ONE, precision

CLAMP_LOW = Decimal(-1)
CLAMP_HIGH = Decimal(1)


def expansion_variable(
    t: Decimal,
    q: Decimal,
    qdot: Decimal,
    use_time: bool,
    clamp: bool = False,
) -> Decimal:
    """x = q / (1 + q̇), or t·q / (1 + q̇) once the time factor is unlocked.

    With *clamp* set, x is limited to [-1, 1].
    """
    with precision():
        base = t * q if use_time else q
        x = base / (ONE + qdot)
    if clamp:
        x = min(max(x, CLAMP_LOW), CLAMP_HIGH)
    return x


def binomial_sum(n: int, x: Decimal) -> Decimal:
    """Σ_{k=0}^{n} C(n, k) x^k using the multiplicative coefficient recurrence."""
    if n <= 0:
        return ONE
    with precision():
        total = ONE
        term = ONE
        for k in range(1, n + 1):
            term = term * (n - k + 1) / k * x
            total += term
    return total


def power_expansion(n: int, x: Decimal) -> Decimal:
    """(1 + x)^n."""
    if n <= 0:
        return ONE
    with precision():
        return (ONE + x) ** n


def compute_driver(n: int, x: Decimal, sigma_enabled: bool) -> Decimal:
    if sigma_enabled:
        return binomial_sum(n, x)
    return power_expansion(n, x)
