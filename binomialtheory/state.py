from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from loguru import logger

from binomialtheory.numeric import ZERO, parse_decimal


@dataclass
class SimulationState:
    """Time-integrated state owned by the theory: elapsed time t and q."""

    t: Decimal = ZERO
    q: Decimal = ZERO

    def serialize(self) -> str:
        return f"{self.t} {self.q}"

    def deserialize(self, text: str | None) -> None:
        """Restore from a whitespace-joined "t q" string.

        Missing, unparseable or negative tokens leave the matching field untouched.
        """
        if not text:
            return
        tokens = text.split()
        for name, token in zip(("t", "q"), tokens):
            value = parse_decimal(token)
            if value is None or value < 0:
                logger.warning("Ignoring invalid {} token {!r} in saved state", name, token)
                continue
            setattr(self, name, value)
        logger.debug("Restored state t={} q={}", self.t, self.q)

    def reset_on_publish(self) -> None:
        self.t = ZERO
        self.q = ZERO
