from __future__ import annotations

from decimal import Decimal

from binomialtheory.report import SimulationReport


def _log10(value: Decimal) -> float:
    """log10 of a Decimal that may be far outside float range."""
    if value <= 0:
        return float("nan")
    return float(value.log10())


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Generate a 4-panel matplotlib visualization of a simulation run.

    Values are plotted as log10 since they routinely exceed float range.
    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install binomialtheory[viz]"
        )

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{report.theory_name} ({report.total_time:.0f}s)", fontsize=14)

    panels = (
        (axes[0][0], ("currency", "tau"), "Currency and tau"),
        (axes[0][1], ("q", "qdot"), "q and q dot"),
        (axes[1][0], ("driver",), "Driver"),
        (axes[1][1], ("x",), "Expansion variable x"),
    )
    for ax, names, title in panels:
        for name in names:
            series = report.series(name)
            if series:
                times = [time for time, _ in series]
                values = [_log10(v) for _, v in series]
                ax.plot(times, values, label=name)
        ax.set_xlabel("Time (s)")
        ax.set_ylabel("log10")
        ax.set_title(title)
        ax.legend(fontsize=8)
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
    else:
        plt.show()
