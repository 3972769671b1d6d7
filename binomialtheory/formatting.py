from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from binomialtheory.numeric import precision

if TYPE_CHECKING:
    from binomialtheory.report import SimulationReport

# Values at or above this are shown in scientific notation.
_SCIENTIFIC_FROM = Decimal("1e6")


def format_number(value: Decimal, digits: int = 3) -> str:
    """Render a Decimal for display: fixed below 1e6, ``1.234e56`` above."""
    if not value.is_finite():
        return str(value)
    with precision():
        if value.copy_abs() < _SCIENTIFIC_FROM:
            return f"{value:.{digits}f}"
        return f"{value:.{digits}e}".replace("e+", "e")


def get_math(expression: str) -> str:
    return "\\(" + expression + "\\)"


def get_math_to(left: str, right: str) -> str:
    return "\\(" + left + "\\rightarrow " + right + "\\)"


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 30 + f" {report.theory_name} Simulation " + "=" * 30)
    lines.append(f"Duration: {report.total_time:.1f}s (x{report.multiplier} speed)")
    lines.append(f"Ticks: {report.tick_count}")
    lines.append("")

    lines.append("LEVELS:")
    for key, level in report.levels.items():
        lines.append(f"  {key:.<20s} {level}")
    for key, level in report.milestones.items():
        lines.append(f"  {key + ' (milestone)':.<20s} {level}")
    lines.append("")

    lines.append("FORMULA:")
    lines.append(f"  {report.primary_equation}")
    lines.append("")

    final = report.final
    if final is not None:
        lines.append("FINAL STATE:")
        lines.append(f"  t ........ {format_number(final.t)}")
        lines.append(f"  q ........ {format_number(final.q)}")
        lines.append(f"  q dot .... {format_number(final.qdot)}")
        lines.append(f"  x ........ {format_number(final.x)}")
        lines.append(f"  driver ... {format_number(final.driver)}")
        lines.append(f"  currency . {format_number(final.currency)}")
        lines.append(f"  tau ...... {format_number(final.tau)}")
    else:
        lines.append("FINAL STATE: no snapshots recorded")

    return "\n".join(lines)
