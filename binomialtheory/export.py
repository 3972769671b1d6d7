from __future__ import annotations

import csv
import json
from pathlib import Path

from binomialtheory.report import SimulationReport

_FIELDS = ("time", "t", "q", "qdot", "x", "driver", "currency", "tau")


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Export snapshots as {path}_snapshots.csv.

    Decimal columns are written in their exact string form.
    """
    with open(f"{path}_snapshots.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(_FIELDS)
        for s in report.snapshots:
            writer.writerow([str(getattr(s, name)) for name in _FIELDS])


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Export the full simulation report as JSON."""
    data = {
        "theory": report.theory_name,
        "total_time": report.total_time,
        "multiplier": report.multiplier,
        "tick_count": report.tick_count,
        "levels": report.levels,
        "milestones": report.milestones,
        "primary_equation": report.primary_equation,
        "internal_state": report.internal_state,
        "snapshots": [
            {name: str(getattr(s, name)) for name in _FIELDS}
            for s in report.snapshots
        ],
    }
    with open(str(path), "w") as f:
        json.dump(data, f, indent=2)
