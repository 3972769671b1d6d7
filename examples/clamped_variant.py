"""Early Binomial Distribution variant: x clamped to [-1, 1], n uncapped."""
from __future__ import annotations

from dataclasses import replace

from binomialtheory.cost_scaling import Cost
from binomialtheory.definition import TheoryConfig, default_milestones, default_upgrades
from binomialtheory.upgrade import UpgradeDef


def define_theory() -> TheoryConfig:
    upgrades: list[UpgradeDef] = []
    for udef in default_upgrades():
        if udef.key == "n":
            udef = replace(udef, cost=Cost.exponential(1e4, 25), max_level=None)
        upgrades.append(udef)

    # Every milestone visible from the start, as before the unlock chain existed
    milestones = [replace(m, visible_when=None) for m in default_milestones()]

    return TheoryConfig(
        name="Binomial Distribution (clamped)",
        version=9,
        clamp_expansion=True,
        upgrades=upgrades,
        milestones=milestones,
    )
