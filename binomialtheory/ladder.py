from __future__ import annotations

from decimal import Decimal
from typing import Sequence

C1_EXP_STEPS: tuple[Decimal, ...] = tuple(
    Decimal(s) for s in ("1.00", "1.02", "1.04", "1.06", "1.08", "1.10")
)
Q1_EXP_STEPS: tuple[Decimal, ...] = tuple(
    Decimal(s) for s in ("1.00", "1.05", "1.10", "1.15")
)


def ladder_lookup(level: int, table: Sequence[Decimal]) -> Decimal:
    """Return the step for *level*, plateauing at the last entry."""
    index = min(max(level, 0), len(table) - 1)
    return table[index]


def is_ascending(table: Sequence[Decimal]) -> bool:
    return all(a < b for a, b in zip(table, table[1:]))
