from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from binomialtheory.numeric import Number, precision, to_decimal
from binomialtheory.state import SimulationState


@dataclass(frozen=True)
class Step:
    """What a single integration step did."""

    dt: Decimal
    qdot: Decimal


def compute_qdot(q1_value: Decimal, q2_value: Decimal, alpha_q: Decimal) -> Decimal:
    """q̇ = q1^α_q * q2."""
    with precision():
        return q1_value ** alpha_q * q2_value


def advance(
    state: SimulationState,
    elapsed: Number,
    multiplier: Number,
    q1_value: Decimal,
    q2_value: Decimal,
    alpha_q: Decimal,
) -> Step | None:
    """Advance t and q by one tick. Returns None (and changes nothing) if dt <= 0."""
    with precision():
        dt = to_decimal(elapsed) * to_decimal(multiplier)
        if not dt.is_finite() or dt <= 0:
            return None
        qdot = compute_qdot(q1_value, q2_value, alpha_q)
        state.t = state.t + dt
        # q stays an exact zero while the rate is zero
        if not qdot.is_zero():
            state.q = state.q + qdot * dt
    return Step(dt=dt, qdot=qdot)
