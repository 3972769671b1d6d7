from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Sequence

from binomialtheory.ladder import ladder_lookup
from binomialtheory.requirement import Requirement


@dataclass
class MilestoneDef:
    """Static definition of a milestone upgrade."""

    id: int
    key: str
    max_level: int
    description: str = ""
    info: str = ""
    visible_when: Requirement | None = None


@dataclass
class Milestone:
    """Host-side milestone handle. The host owns ``level``."""

    id: int
    max_level: int
    level: int = 0
    is_available: bool = True
    description: str = ""
    info: str = ""
    bought_or_refunded: Callable[[int], None] | None = field(default=None, repr=False)


class LadderMilestone:
    """Bounded milestone level indexing into an ascending exponent table."""

    def __init__(self, handle: Milestone, steps: Sequence[Decimal]) -> None:
        self.handle = handle
        self.steps = tuple(steps)

    @property
    def level(self) -> int:
        return self.handle.level

    @property
    def exponent(self) -> Decimal:
        return ladder_lookup(self.handle.level, self.steps)


class ToggleMilestone:
    """Single-level milestone acting as an on/off gate."""

    def __init__(self, handle: Milestone) -> None:
        self.handle = handle

    @property
    def level(self) -> int:
        return self.handle.level

    @property
    def enabled(self) -> bool:
        return self.handle.level > 0
