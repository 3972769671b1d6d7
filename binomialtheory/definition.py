from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from decimal import Decimal

from binomialtheory.cost_scaling import Cost
from binomialtheory.ladder import C1_EXP_STEPS, Q1_EXP_STEPS, is_ascending
from binomialtheory.milestone import MilestoneDef
from binomialtheory.numeric import TEN, precision
from binomialtheory.requirement import Req
from binomialtheory.upgrade import PermanentKind, PermanentUpgradeDef, UpgradeDef

UPGRADE_KEYS = ("c1", "c2", "n", "q1", "q2")
MILESTONE_KEYS = ("c1_exp", "sigma", "q1_exp", "time")


def _milestone_cost(level: int) -> Decimal:
    with precision():
        return TEN ** (50 + 25 * level)


def default_upgrades() -> list[UpgradeDef]:
    return [
        UpgradeDef(0, "c1", Cost.first_free(Cost.exponential(50, 3.38 / 1.5)), display_name="c_1"),
        UpgradeDef(1, "c2", Cost.exponential(1e6, 3.38 * 5), display_name="c_2"),
        UpgradeDef(2, "n", Cost.exponential(1e4, 250), max_level=4, display_name="n"),
        UpgradeDef(3, "q1", Cost.exponential(15, 3.38 / 3.5), display_name="q_1"),
        UpgradeDef(4, "q2", Cost.exponential(2000, 3.38 * 4), display_name="q_2"),
    ]


def default_milestones() -> list[MilestoneDef]:
    return [
        MilestoneDef(
            1,
            "c1_exp",
            5,
            description="Boost c_1",
            info="Hidden exponent on c_1 increases stepwise.",
        ),
        MilestoneDef(
            2,
            "sigma",
            1,
            description="Enable binomial Σ expansion",
            info="Switch (1+x)^n → Σ_{k=0}^n C(n,k)x^k",
            visible_when=Req.milestone("c1_exp", ">=", 2),
        ),
        MilestoneDef(
            3,
            "q1_exp",
            3,
            description="Boost q_1",
            info="Hidden exponent on q_1 increases stepwise.",
            visible_when=Req.milestone("sigma", ">=", 1),
        ),
        MilestoneDef(
            4,
            "time",
            1,
            description="Enable time factor in x",
            info="x = tq / (1+\\dot q)",
            visible_when=Req.all(
                Req.milestone("sigma", ">=", 1),
                Req.milestone("q1_exp", ">=", 3),
            ),
        ),
    ]


def default_permanents() -> list[PermanentUpgradeDef]:
    return [
        PermanentUpgradeDef(PermanentKind.PUBLICATION, 0, 1e8),
        PermanentUpgradeDef(PermanentKind.BUY_ALL, 1, 1e15),
        PermanentUpgradeDef(PermanentKind.AUTO_BUYER, 2, 1e25),
    ]


@dataclass
class TheoryConfig:
    """Complete static definition of the theory."""

    id: str = "binomial_distribution"
    name: str = "Binomial Distribution"
    description: str = "wip"
    authors: str = "Maimai"
    version: int = 13
    required_game_version: str = "1.4.33"

    tau_multiplier: float = 4
    clamp_expansion: bool = False

    c1_exp_steps: tuple[Decimal, ...] = C1_EXP_STEPS
    q1_exp_steps: tuple[Decimal, ...] = Q1_EXP_STEPS

    upgrades: list[UpgradeDef] = field(default_factory=default_upgrades)
    milestones: list[MilestoneDef] = field(default_factory=default_milestones)
    permanents: list[PermanentUpgradeDef] = field(default_factory=default_permanents)
    milestone_cost: Cost = field(
        default_factory=lambda: Cost.custom(_milestone_cost, "10^(50+25L)")
    )

    def get_upgrade(self, key: str) -> UpgradeDef | None:
        for u in self.upgrades:
            if u.key == key:
                return u
        return None

    def get_milestone(self, key: str) -> MilestoneDef | None:
        for m in self.milestones:
            if m.key == key:
                return m
        return None

    def validate(self) -> list[str]:
        """Check for common configuration errors. Returns list of error messages."""
        errors: list[str] = []

        if self.tau_multiplier <= 0:
            errors.append(f"tau_multiplier must be positive, got {self.tau_multiplier!r}")

        # Duplicate ids / keys
        seen_ids: set[int] = set()
        for u in self.upgrades:
            if u.id in seen_ids:
                errors.append(f"Duplicate upgrade ID: {u.id!r}")
            seen_ids.add(u.id)
        seen_ids = set()
        for m in self.milestones:
            if m.id in seen_ids:
                errors.append(f"Duplicate milestone ID: {m.id!r}")
            seen_ids.add(m.id)

        upgrade_keys = {u.key for u in self.upgrades}
        for key in UPGRADE_KEYS:
            if key not in upgrade_keys:
                errors.append(f"Missing upgrade {key!r}")
        milestone_keys = {m.key for m in self.milestones}
        for key in MILESTONE_KEYS:
            if key not in milestone_keys:
                errors.append(f"Missing milestone {key!r}")

        # Ladders
        for name, steps, key in (
            ("c1_exp_steps", self.c1_exp_steps, "c1_exp"),
            ("q1_exp_steps", self.q1_exp_steps, "q1_exp"),
        ):
            if not steps:
                errors.append(f"{name} is empty")
                continue
            if not is_ascending(steps):
                errors.append(f"{name} must be strictly ascending")
            mdef = self.get_milestone(key)
            if mdef is not None and len(steps) < mdef.max_level + 1:
                warnings.warn(
                    f"{name} has {len(steps)} steps but milestone {key!r} "
                    f"reaches level {mdef.max_level}; higher levels reuse the "
                    f"last step.",
                    stacklevel=2,
                )

        # Visibility requirements must reference known milestones
        for m in self.milestones:
            if m.visible_when is None:
                continue
            for ref in sorted(m.visible_when.milestone_keys()):
                if ref not in milestone_keys:
                    errors.append(
                        f"Milestone {m.key!r} visibility references unknown milestone {ref!r}"
                    )
                elif ref == m.key:
                    errors.append(f"Milestone {m.key!r} visibility depends on itself")

        return errors
