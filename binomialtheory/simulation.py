from __future__ import annotations

from decimal import Decimal
from typing import Iterator

from binomialtheory.definition import TheoryConfig
from binomialtheory.numeric import ZERO, precision, to_decimal
from binomialtheory.report import SimulationReport, Snapshot
from binomialtheory.runtime import LocalHost

MAX_TICKS = 10_000_000


class Simulation:
    """Headless run of the theory at fixed upgrade and milestone levels."""

    def __init__(
        self,
        config: TheoryConfig | None = None,
        levels: dict[str, int] | None = None,
        milestones: dict[str, int] | None = None,
        duration: float = 600.0,
        tick_resolution: float = 0.1,
        multiplier: float = 1.0,
        snapshot_interval: float = 1.0,
        initial_state: str | None = None,
    ) -> None:
        if tick_resolution <= 0:
            raise ValueError("tick_resolution must be positive")
        if snapshot_interval <= 0:
            raise ValueError("snapshot_interval must be positive")

        self.duration = duration
        self.tick_resolution = tick_resolution
        self.multiplier = multiplier
        self.snapshot_interval = snapshot_interval

        self.host = LocalHost()
        self.theory = self.host.load(config)

        # Milestones first so availability reflects the final levels
        for key, level in (milestones or {}).items():
            self.host.set_milestone_level(key, level)
        for key, level in (levels or {}).items():
            self.host.set_level(key, level)
        if initial_state:
            self.theory.set_internal_state(initial_state)

    def snapshot(self, time: float) -> Snapshot:
        derived = self.theory.derived()
        return Snapshot(
            time=time,
            t=self.theory.state.t,
            q=self.theory.state.q,
            qdot=derived.qdot,
            x=derived.x,
            driver=derived.driver,
            currency=self.theory.currency.value,
            tau=self.theory.get_tau(),
        )

    def _tick_lengths(self) -> Iterator[Decimal]:
        """Whole ticks of tick_resolution, then one shorter tick for any remainder."""
        resolution = to_decimal(self.tick_resolution)
        with precision():
            full_ticks, remainder = divmod(to_decimal(self.duration), resolution)
        for _ in range(int(full_ticks)):
            yield resolution
        if remainder > 0:
            yield remainder

    def run(self) -> SimulationReport:
        snapshots = [self.snapshot(0.0)]
        interval = to_decimal(self.snapshot_interval)
        elapsed = ZERO
        # Index of the next snapshot; it is due at index * interval
        next_index = 1
        tick_count = 0

        for dt in self._tick_lengths():
            if tick_count >= MAX_TICKS:
                break
            self.host.tick(dt, self.multiplier)
            with precision():
                elapsed += dt
                due = interval * next_index
            tick_count += 1
            if elapsed >= due:
                snapshots.append(self.snapshot(float(elapsed)))
                with precision():
                    next_index = int(elapsed // interval) + 1

        if snapshots[-1].time != float(elapsed):
            snapshots.append(self.snapshot(float(elapsed)))

        theory = self.theory
        return SimulationReport(
            theory_name=theory.config.name,
            total_time=float(elapsed),
            multiplier=self.multiplier,
            tick_count=tick_count,
            levels={key: u.level for key, u in theory.upgrades.items()},
            milestones={key: m.level for key, m in theory.milestones.items()},
            primary_equation=theory.get_primary_equation(),
            internal_state=theory.get_internal_state(),
            snapshots=snapshots,
        )
