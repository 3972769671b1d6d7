from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from binomialtheory.cost_scaling import Cost
    from binomialtheory.currency import Currency
    from binomialtheory.milestone import Milestone
    from binomialtheory.upgrade import PermanentKind, Upgrade


class TheoryHost(ABC):
    """Capabilities the host engine provides to a theory."""

    @abstractmethod
    def create_currency(self) -> Currency: ...

    @abstractmethod
    def create_upgrade(self, id: int, currency: Currency, cost: Cost) -> Upgrade: ...

    @abstractmethod
    def create_permanent_upgrade(
        self, kind: PermanentKind, id: int, currency: Currency, price: float
    ) -> None: ...

    @abstractmethod
    def set_milestone_cost(self, cost: Cost) -> None: ...

    @abstractmethod
    def create_milestone(self, id: int, max_level: int) -> Milestone: ...

    @abstractmethod
    def invalidate_primary_equation(self) -> None: ...

    @abstractmethod
    def invalidate_tertiary_equation(self) -> None: ...

    @property
    @abstractmethod
    def publication_multiplier(self) -> Decimal: ...
