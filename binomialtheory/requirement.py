from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Protocol

from binomialtheory.numeric import compare


class LevelSource(Protocol):
    """Anything that can report the current level of a milestone by key."""

    def milestone_level(self, key: str) -> int: ...


class Requirement(ABC):
    """Base class for all requirements: boolean conditions on milestone levels."""

    @abstractmethod
    def evaluate(self, source: LevelSource) -> bool: ...

    def milestone_keys(self) -> set[str]:
        """Milestone keys this requirement reads."""
        return set()

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])

    def __or__(self, other: Requirement) -> Requirement:
        return _AnyRequirement([self, other])


# ── Private implementations ──────────────────────────────────────────


class _MilestoneLevelRequirement(Requirement):
    def __init__(self, key: str, op: str, threshold: int) -> None:
        self.key = key
        self.op = op
        self.threshold = threshold

    def evaluate(self, source: LevelSource) -> bool:
        return compare(source.milestone_level(self.key), self.op, self.threshold)

    def milestone_keys(self) -> set[str]:
        return {self.key}


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, source: LevelSource) -> bool:
        return all(r.evaluate(source) for r in self.reqs)

    def milestone_keys(self) -> set[str]:
        return set().union(*(r.milestone_keys() for r in self.reqs))


class _AnyRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, source: LevelSource) -> bool:
        return any(r.evaluate(source) for r in self.reqs)

    def milestone_keys(self) -> set[str]:
        return set().union(*(r.milestone_keys() for r in self.reqs))


class _CustomRequirement(Requirement):
    def __init__(self, fn: Callable[[LevelSource], bool]) -> None:
        self.fn = fn

    def evaluate(self, source: LevelSource) -> bool:
        return self.fn(source)


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def milestone(key: str, op: str, threshold: int) -> Requirement:
        return _MilestoneLevelRequirement(key, op, threshold)

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        return _AnyRequirement(list(reqs))

    @staticmethod
    def custom(fn: Callable[[LevelSource], bool]) -> Requirement:
        return _CustomRequirement(fn)
