from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Callable

from loguru import logger

from binomialtheory.currency import accrue
from binomialtheory.definition import TheoryConfig
from binomialtheory.driver import compute_driver, expansion_variable
from binomialtheory.equation import (
    order_description,
    power_of_two_description,
    primary_equation,
    secondary_equation,
    stepwise_description,
    tertiary_equation,
)
from binomialtheory.formatting import get_math, get_math_to
from binomialtheory.integrator import advance, compute_qdot
from binomialtheory.milestone import LadderMilestone, Milestone, ToggleMilestone
from binomialtheory.numeric import Number, precision, to_decimal
from binomialtheory.publication import PublicationRules
from binomialtheory.state import SimulationState
from binomialtheory.values import get_c1, get_c2, get_n, get_q1, get_q2

if TYPE_CHECKING:
    from binomialtheory.currency import Currency
    from binomialtheory.host import TheoryHost
    from binomialtheory.upgrade import Upgrade


@dataclass(frozen=True)
class DerivedQuantities:
    """Values recomputed from state and levels on every read."""

    alpha_c: Decimal
    alpha_q: Decimal
    qdot: Decimal
    x: Decimal
    n: int
    driver: Decimal


class BinomialTheory:
    """Production model driven by (1 + x)^n or its binomial expansion."""

    def __init__(self, host: TheoryHost, config: TheoryConfig | None = None) -> None:
        config = config or TheoryConfig()
        errors = config.validate()
        if errors:
            raise ValueError(
                "Invalid TheoryConfig:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.config = config
        self.host = host
        self.state = SimulationState()
        self.rules = PublicationRules(config.tau_multiplier)

        self.currency: Currency = host.create_currency()
        self.upgrades: dict[str, Upgrade] = {}
        self.milestones: dict[str, Milestone] = {}

        self._register_upgrades()
        self._register_milestones()

        self.c1_exp = LadderMilestone(self.milestones["c1_exp"], config.c1_exp_steps)
        self.q1_exp = LadderMilestone(self.milestones["q1_exp"], config.q1_exp_steps)
        self.sigma = ToggleMilestone(self.milestones["sigma"])
        self.time_factor = ToggleMilestone(self.milestones["time"])

        self.update_availability()
        logger.debug("Initialised theory {} v{}", config.id, config.version)

    # ── Registration ─────────────────────────────────────────────────

    def _register_upgrades(self) -> None:
        describers: dict[str, Callable[[int], str]] = {
            "c1": lambda level: stepwise_description("c_1", get_c1(level)),
            "c2": lambda level: power_of_two_description("c_2", level),
            "n": lambda level: order_description(get_n(level)),
            "q1": lambda level: stepwise_description("q_1", get_q1(level)),
            "q2": lambda level: power_of_two_description("q_2", level),
        }
        for udef in self.config.upgrades:
            upgrade = self.host.create_upgrade(udef.id, self.currency, udef.cost)
            upgrade.max_level = udef.max_level
            describe = describers.get(udef.key)
            if describe is not None:
                self._attach_description(upgrade, describe)
            self.upgrades[udef.key] = upgrade

        for pdef in self.config.permanents:
            self.host.create_permanent_upgrade(pdef.kind, pdef.id, self.currency, pdef.price)

    @staticmethod
    def _attach_description(upgrade: Upgrade, describe: Callable[[int], str]) -> None:
        upgrade.get_description = lambda: get_math(describe(upgrade.level))
        upgrade.get_info = lambda amount: get_math_to(
            describe(upgrade.level), describe(upgrade.level + amount)
        )

    def _register_milestones(self) -> None:
        self.host.set_milestone_cost(self.config.milestone_cost)
        for mdef in self.config.milestones:
            milestone = self.host.create_milestone(mdef.id, mdef.max_level)
            milestone.description = mdef.description
            milestone.info = mdef.info
            milestone.bought_or_refunded = lambda _amount: self.update_availability()
            self.milestones[mdef.key] = milestone

    def milestone_level(self, key: str) -> int:
        return self.milestones[key].level

    def upgrade_level(self, key: str) -> int:
        return self.upgrades[key].level

    def update_availability(self) -> None:
        """Re-evaluate which upgrades and milestones are visible."""
        for upgrade in self.upgrades.values():
            upgrade.is_available = True
        for mdef in self.config.milestones:
            visible = mdef.visible_when is None or mdef.visible_when.evaluate(self)
            self.milestones[mdef.key].is_available = visible
        self.host.invalidate_primary_equation()

    # ── Derived values ───────────────────────────────────────────────

    def qdot(self) -> Decimal:
        return compute_qdot(
            get_q1(self.upgrade_level("q1")),
            get_q2(self.upgrade_level("q2")),
            self.q1_exp.exponent,
        )

    def c_multiplier(self) -> tuple[Decimal, Decimal]:
        """(c1^α_c, c2) for the current levels."""
        with precision():
            vc1 = get_c1(self.upgrade_level("c1")) ** self.c1_exp.exponent
        return vc1, get_c2(self.upgrade_level("c2"))

    def derived(self) -> DerivedQuantities:
        qdot = self.qdot()
        x = expansion_variable(
            self.state.t,
            self.state.q,
            qdot,
            use_time=self.time_factor.enabled,
            clamp=self.config.clamp_expansion,
        )
        n = get_n(self.upgrade_level("n"))
        return DerivedQuantities(
            alpha_c=self.c1_exp.exponent,
            alpha_q=self.q1_exp.exponent,
            qdot=qdot,
            x=x,
            n=n,
            driver=compute_driver(n, x, self.sigma.enabled),
        )

    # ── Tick ─────────────────────────────────────────────────────────

    def tick(self, elapsed: Number, multiplier: Number) -> None:
        """Advance t and q, then accrue currency for this step."""
        step = advance(
            self.state,
            elapsed,
            multiplier,
            get_q1(self.upgrade_level("q1")),
            get_q2(self.upgrade_level("q2")),
            self.q1_exp.exponent,
        )
        if step is None:
            return

        x = expansion_variable(
            self.state.t,
            self.state.q,
            step.qdot,
            use_time=self.time_factor.enabled,
            clamp=self.config.clamp_expansion,
        )
        driver = compute_driver(get_n(self.upgrade_level("n")), x, self.sigma.enabled)
        vc1, vc2 = self.c_multiplier()
        accrue(self.currency, self.host.publication_multiplier, vc1, vc2, driver, step.dt)

        self.host.invalidate_tertiary_equation()

    # ── Display ──────────────────────────────────────────────────────

    def get_primary_equation(self) -> str:
        return primary_equation(self.sigma.enabled, self.time_factor.enabled)

    def get_secondary_equation(self) -> str:
        with precision():
            exponent = Decimal("0.1") * to_decimal(self.config.tau_multiplier)
        return secondary_equation("\\tau", self.currency.symbol, exponent)

    def get_tertiary_equation(self) -> str:
        return tertiary_equation(
            self.state.t, self.state.q, self.derived().x, self.time_factor.enabled
        )

    # ── Publication ──────────────────────────────────────────────────

    def get_publication_multiplier(self, tau: Decimal) -> Decimal:
        return self.rules.publication_multiplier(tau)

    def get_publication_multiplier_formula(self, symbol: str) -> str:
        return self.rules.multiplier_formula(symbol)

    def get_tau(self) -> Decimal:
        return self.rules.tau_from_currency(self.currency.value)

    def get_currency_from_tau(self, tau: Decimal) -> tuple[Decimal, str]:
        return self.rules.currency_from_tau(tau), self.currency.symbol

    def get_2d_graph_value(self) -> float:
        value = self.currency.value
        if value.is_zero():
            return 0.0
        with precision():
            magnitude = float((1 + abs(value)).log10())
        return magnitude if value > 0 else -magnitude

    # ── Persistence ──────────────────────────────────────────────────

    def get_internal_state(self) -> str:
        return self.state.serialize()

    def set_internal_state(self, text: str | None) -> None:
        self.state.deserialize(text)

    def post_publish(self) -> None:
        self.state.reset_on_publish()
