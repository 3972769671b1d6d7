from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable

from binomialtheory.cost_scaling import Cost

if TYPE_CHECKING:
    from binomialtheory.currency import Currency


class PermanentKind(Enum):
    PUBLICATION = "publication"
    BUY_ALL = "buy_all"
    AUTO_BUYER = "auto_buyer"


@dataclass
class UpgradeDef:
    """Static definition of a regular upgrade."""

    id: int
    key: str
    cost: Cost
    max_level: int | None = None
    display_name: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.key


@dataclass
class PermanentUpgradeDef:
    """Permanent upgrade that survives publication."""

    kind: PermanentKind
    id: int
    price: float


@dataclass
class Upgrade:
    """Host-side upgrade handle. The host owns and advances ``level``."""

    id: int
    currency: Currency
    cost: Cost
    level: int = 0
    max_level: int | None = None
    is_available: bool = True
    get_description: Callable[[], str] | None = field(default=None, repr=False)
    get_info: Callable[[int], str] | None = field(default=None, repr=False)

    def current_cost(self):
        return self.cost.compute(self.level)

    @property
    def is_maxed(self) -> bool:
        return self.max_level is not None and self.level >= self.max_level
