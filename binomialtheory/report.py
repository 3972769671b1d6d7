from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class Snapshot:
    """State of the theory at one sampled moment."""

    time: float
    t: Decimal
    q: Decimal
    qdot: Decimal
    x: Decimal
    driver: Decimal
    currency: Decimal
    tau: Decimal


@dataclass
class SimulationReport:
    """Container for simulation results."""

    theory_name: str = ""
    total_time: float = 0.0
    multiplier: float = 1.0
    tick_count: int = 0
    levels: dict[str, int] = field(default_factory=dict)
    milestones: dict[str, int] = field(default_factory=dict)
    primary_equation: str = ""
    internal_state: str = ""
    snapshots: list[Snapshot] = field(default_factory=list)

    @property
    def final(self) -> Snapshot | None:
        return self.snapshots[-1] if self.snapshots else None

    def series(self, name: str) -> list[tuple[float, Decimal]]:
        """Return (time, value) pairs for a snapshot field such as "q"."""
        return [(s.time, getattr(s, name)) for s in self.snapshots]
