from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from binomialtheory.numeric import ONE, ZERO, Number, precision, to_decimal


@dataclass(frozen=True)
class PublicationRules:
    """Power-law conversion between currency and tau."""

    tau_multiplier: Number = 4

    @property
    def _tm(self) -> Decimal:
        return to_decimal(self.tau_multiplier)

    @property
    def multiplier_exponent(self) -> Decimal:
        with precision():
            return Decimal("1.5") / self._tm

    def tau_from_currency(self, currency: Decimal) -> Decimal:
        """tau = currency^(0.1 * tau_multiplier)."""
        if currency <= 0:
            return ZERO
        with precision():
            return currency ** (Decimal("0.1") * self._tm)

    def currency_from_tau(self, tau: Decimal) -> Decimal:
        """Inverse of tau_from_currency, floored at tau = 1."""
        with precision():
            return max(tau, ONE) ** (Decimal(10) / self._tm)

    def publication_multiplier(self, tau: Decimal) -> Decimal:
        if tau.is_zero():
            return ONE
        with precision():
            return tau ** self.multiplier_exponent

    def multiplier_formula(self, symbol: str) -> str:
        exponent = self.multiplier_exponent.normalize()
        return "{" + symbol + "}^{" + f"{exponent:f}" + "}"


@dataclass(frozen=True)
class PublicationResult:
    """Outcome of a publication performed by the host."""

    tau: Decimal
    previous_multiplier: Decimal
    new_multiplier: Decimal
