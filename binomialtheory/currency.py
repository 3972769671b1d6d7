from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from loguru import logger

from binomialtheory.numeric import ZERO, precision


@dataclass
class Currency:
    """Host-owned accumulator. The theory only ever adds to it."""

    symbol: str = "\\rho"
    value: Decimal = ZERO

    def accrue(self, amount: Decimal) -> bool:
        """Add *amount* unless the sum would be non-finite. Returns success."""
        with precision():
            total = self.value + amount
        if not total.is_finite():
            logger.warning(
                "Dropping accrual of {} to currency {}: result is not finite",
                amount,
                self.symbol,
            )
            return False
        self.value = total
        return True


def accrue(
    currency: Currency,
    bonus: Decimal,
    vc1: Decimal,
    vc2: Decimal,
    driver: Decimal,
    dt: Decimal,
) -> Decimal:
    """Add bonus * c1 * c2 * driver * dt to *currency*.

    Returns the increment actually applied (zero when it was dropped).
    """
    factors = (bonus, vc1, vc2, driver, dt)
    if not all(f.is_finite() for f in factors):
        logger.warning(
            "Dropping accrual to currency {}: non-finite factor in {}", currency.symbol, factors
        )
        return ZERO
    with precision():
        increment = bonus * vc1 * vc2 * driver * dt
    if currency.accrue(increment):
        return increment
    return ZERO
