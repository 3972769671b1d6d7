# binomialtheory: Binomial Distribution incremental-game theory

from binomialtheory.numeric import CONTEXT, precision, to_decimal, parse_decimal
from binomialtheory.ladder import C1_EXP_STEPS, Q1_EXP_STEPS, ladder_lookup
from binomialtheory.values import (
    stepwise_power_sum,
    get_c1,
    get_c2,
    get_n,
    get_q1,
    get_q2,
)
from binomialtheory.cost_scaling import Cost
from binomialtheory.requirement import Requirement, Req
from binomialtheory.currency import Currency, accrue
from binomialtheory.upgrade import PermanentKind, PermanentUpgradeDef, Upgrade, UpgradeDef
from binomialtheory.milestone import (
    LadderMilestone,
    Milestone,
    MilestoneDef,
    ToggleMilestone,
)
from binomialtheory.state import SimulationState
from binomialtheory.integrator import Step, advance, compute_qdot
from binomialtheory.driver import (
    binomial_sum,
    compute_driver,
    expansion_variable,
    power_expansion,
)
from binomialtheory.publication import PublicationResult, PublicationRules
from binomialtheory.definition import TheoryConfig
from binomialtheory.host import TheoryHost
from binomialtheory.theory import BinomialTheory, DerivedQuantities
from binomialtheory.runtime import LocalHost
from binomialtheory.report import SimulationReport, Snapshot
from binomialtheory.simulation import Simulation
from binomialtheory.formatting import format_number, format_text_report

__all__ = [
    # Numeric
    "CONTEXT",
    "precision",
    "to_decimal",
    "parse_decimal",
    # Ladders and values
    "C1_EXP_STEPS",
    "Q1_EXP_STEPS",
    "ladder_lookup",
    "stepwise_power_sum",
    "get_c1",
    "get_c2",
    "get_n",
    "get_q1",
    "get_q2",
    # Cost
    "Cost",
    # Requirements
    "Requirement",
    "Req",
    # Host handles
    "Currency",
    "accrue",
    "PermanentKind",
    "PermanentUpgradeDef",
    "Upgrade",
    "UpgradeDef",
    "LadderMilestone",
    "Milestone",
    "MilestoneDef",
    "ToggleMilestone",
    # Core
    "SimulationState",
    "Step",
    "advance",
    "compute_qdot",
    "binomial_sum",
    "compute_driver",
    "expansion_variable",
    "power_expansion",
    # Publication
    "PublicationResult",
    "PublicationRules",
    # Definition
    "TheoryConfig",
    # Host
    "TheoryHost",
    "LocalHost",
    # Theory
    "BinomialTheory",
    "DerivedQuantities",
    # Simulation
    "SimulationReport",
    "Snapshot",
    "Simulation",
    # Formatting
    "format_number",
    "format_text_report",
]
