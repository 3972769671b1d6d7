from __future__ import annotations

from decimal import Decimal
from typing import Callable

from binomialtheory.numeric import TWO, ZERO, Number, precision, to_decimal


class Cost:
    """Maps an upgrade level to the price of its next level."""

    def __init__(self, fn: Callable[[int], Decimal], description: str = "") -> None:
        self._fn = fn
        self.description = description

    def compute(self, level: int) -> Decimal:
        return self._fn(level)

    def __call__(self, level: int) -> Decimal:
        return self._fn(level)

    @classmethod
    def exponential(cls, base: Number, progress: Number) -> Cost:
        """Cost = base * 2^(progress * level)."""
        b = to_decimal(base)
        p = to_decimal(progress)

        def _compute(level: int) -> Decimal:
            with precision():
                return b * TWO ** (p * level)

        return cls(_compute, f"exponential({base}, {progress})")

    @classmethod
    def first_free(cls, inner: Cost) -> Cost:
        """Level 0 is free; later levels are shifted down by one."""

        def _compute(level: int) -> Decimal:
            if level <= 0:
                return ZERO
            return inner.compute(level - 1)

        return cls(_compute, f"first_free({inner.description})")

    @classmethod
    def custom(cls, fn: Callable[[int], Number], description: str = "custom") -> Cost:
        """Arbitrary cost function."""
        return cls(lambda level: to_decimal(fn(level)), description)
