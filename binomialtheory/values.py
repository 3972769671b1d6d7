"""Level -> value functions for the five regular upgrades."""
from __future__ import annotations

from decimal import Decimal

from binomialtheory.numeric import TWO, precision


def stepwise_power_sum(level: int, base: int, step_length: int, offset: int) -> Decimal:
    """Accelerating growth curve used by c1 and q1.

    Within a block of *step_length* levels the value grows linearly; every
    completed block multiplies the per-level increment by *base*. Level 0
    evaluates to *offset*.
    """
    level = max(level, 0)
    blocks, remainder = divmod(level, step_length)
    with precision():
        d = Decimal(step_length) / (base - 1)
        return (d + remainder) * Decimal(base) ** blocks - d + offset


def get_c1(level: int) -> Decimal:
    return stepwise_power_sum(level, 2, 10, 0)


def get_c2(level: int) -> Decimal:
    with precision():
        return TWO ** max(level, 0)


def get_n(level: int) -> int:
    return max(1, level + 1)


def get_q1(level: int) -> Decimal:
    return stepwise_power_sum(level, 2, 10, 0)


def get_q2(level: int) -> Decimal:
    with precision():
        return TWO ** max(level, 0)
