from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from loguru import logger

from binomialtheory.currency import Currency
from binomialtheory.host import TheoryHost
from binomialtheory.milestone import Milestone
from binomialtheory.numeric import ONE, ZERO, Number, to_decimal
from binomialtheory.publication import PublicationResult
from binomialtheory.theory import BinomialTheory
from binomialtheory.upgrade import PermanentKind, Upgrade

if TYPE_CHECKING:
    from binomialtheory.cost_scaling import Cost
    from binomialtheory.definition import TheoryConfig


class LocalHost(TheoryHost):
    """In-memory host: owns currency, upgrade and milestone levels.

    Levels are set directly; purchase transactions are left to a real host.
    """

    def __init__(self) -> None:
        self.currencies: list[Currency] = []
        self.upgrades: dict[int, Upgrade] = {}
        self.permanents: dict[PermanentKind, tuple[int, Decimal]] = {}
        self.milestones: dict[int, Milestone] = {}
        self.milestone_cost: Cost | None = None
        self.primary_invalidations = 0
        self.tertiary_invalidations = 0
        self.best_tau = ZERO
        self.publication_count = 0
        self._publication_multiplier = ONE
        self.theory: BinomialTheory | None = None

    # ── TheoryHost capabilities ──────────────────────────────────────

    def create_currency(self) -> Currency:
        currency = Currency()
        self.currencies.append(currency)
        return currency

    def create_upgrade(self, id: int, currency: Currency, cost: Cost) -> Upgrade:
        if id in self.upgrades:
            raise ValueError(f"Upgrade id {id} registered twice")
        upgrade = Upgrade(id=id, currency=currency, cost=cost)
        self.upgrades[id] = upgrade
        return upgrade

    def create_permanent_upgrade(
        self, kind: PermanentKind, id: int, currency: Currency, price: float
    ) -> None:
        self.permanents[kind] = (id, to_decimal(price))

    def set_milestone_cost(self, cost: Cost) -> None:
        self.milestone_cost = cost

    def create_milestone(self, id: int, max_level: int) -> Milestone:
        if id in self.milestones:
            raise ValueError(f"Milestone id {id} registered twice")
        milestone = Milestone(id=id, max_level=max_level)
        self.milestones[id] = milestone
        return milestone

    def invalidate_primary_equation(self) -> None:
        self.primary_invalidations += 1

    def invalidate_tertiary_equation(self) -> None:
        self.tertiary_invalidations += 1

    @property
    def publication_multiplier(self) -> Decimal:
        return self._publication_multiplier

    # ── Driving a theory ─────────────────────────────────────────────

    def load(self, config: TheoryConfig | None = None) -> BinomialTheory:
        """Build a theory against this host."""
        self.theory = BinomialTheory(self, config)
        return self.theory

    def _require_theory(self) -> BinomialTheory:
        if self.theory is None:
            raise RuntimeError("No theory loaded; call load() first")
        return self.theory

    def tick(self, elapsed: Number, multiplier: Number = 1) -> None:
        self._require_theory().tick(elapsed, multiplier)

    def set_level(self, key: str, level: int) -> None:
        """Set a regular upgrade's level by key (c1, c2, n, q1, q2)."""
        theory = self._require_theory()
        upgrade = theory.upgrades.get(key)
        if upgrade is None:
            raise KeyError(f"Unknown upgrade: {key!r}")
        if level < 0:
            raise ValueError(f"Upgrade level must be >= 0, got {level}")
        if upgrade.max_level is not None and level > upgrade.max_level:
            raise ValueError(
                f"Upgrade {key!r} is capped at level {upgrade.max_level}, got {level}"
            )
        upgrade.level = level

    def set_milestone_level(self, key: str, level: int) -> None:
        """Set a milestone level by key and fire its bought/refunded hook."""
        theory = self._require_theory()
        milestone = theory.milestones.get(key)
        if milestone is None:
            raise KeyError(f"Unknown milestone: {key!r}")
        if not 0 <= level <= milestone.max_level:
            raise ValueError(
                f"Milestone {key!r} level must be within 0..{milestone.max_level}, got {level}"
            )
        delta = level - milestone.level
        milestone.level = level
        if delta and milestone.bought_or_refunded is not None:
            milestone.bought_or_refunded(delta)

    def publish(self) -> PublicationResult:
        """Convert current currency into a publication multiplier and reset."""
        theory = self._require_theory()
        tau = theory.get_tau()
        if tau > self.best_tau:
            self.best_tau = tau
        previous = self._publication_multiplier
        self._publication_multiplier = theory.get_publication_multiplier(self.best_tau)

        for currency in self.currencies:
            currency.value = ZERO
        for upgrade in self.upgrades.values():
            upgrade.level = 0
        theory.post_publish()
        theory.update_availability()
        self.publication_count += 1

        logger.info(
            "Published at tau={} (multiplier {} -> {})",
            tau,
            previous,
            self._publication_multiplier,
        )
        return PublicationResult(
            tau=tau,
            previous_multiplier=previous,
            new_multiplier=self._publication_multiplier,
        )
