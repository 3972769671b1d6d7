"""MCP server wrapping the theory for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from mcp.server.fastmcp import FastMCP

from binomialtheory.definition import TheoryConfig
from binomialtheory.formatting import format_number
from binomialtheory.numeric import precision, to_decimal
from binomialtheory.runtime import LocalHost
from binomialtheory.theory import BinomialTheory

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Seconds per tick while waiting
_WAIT_TICK = Decimal("0.1")


@dataclass
class _TheoryHolder:
    """Holds the active config, host and theory."""

    config: TheoryConfig
    host: LocalHost
    theory: BinomialTheory


def _new_holder(config: TheoryConfig) -> _TheoryHolder:
    host = LocalHost()
    theory = host.load(config)
    return _TheoryHolder(config=config, host=host, theory=theory)


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_theory_info(holder: _TheoryHolder) -> dict[str, Any]:
    cfg = holder.config
    return {
        "id": cfg.id,
        "name": cfg.name,
        "version": cfg.version,
        "authors": cfg.authors,
        "tau_multiplier": cfg.tau_multiplier,
        "clamp_expansion": cfg.clamp_expansion,
        "upgrades": [
            {"id": u.id, "key": u.key, "max_level": u.max_level}
            for u in cfg.upgrades
        ],
        "milestones": [
            {
                "id": m.id,
                "key": m.key,
                "max_level": m.max_level,
                "description": m.description,
            }
            for m in cfg.milestones
        ],
    }


def _tool_get_theory_state(holder: _TheoryHolder) -> dict[str, Any]:
    theory = holder.theory
    derived = theory.derived()
    return {
        "t": format_number(theory.state.t),
        "q": format_number(theory.state.q),
        "qdot": format_number(derived.qdot),
        "x": format_number(derived.x),
        "n": derived.n,
        "driver": format_number(derived.driver),
        "currency": format_number(theory.currency.value),
        "tau": format_number(theory.get_tau()),
        "publication_multiplier": format_number(holder.host.publication_multiplier),
        "upgrades": {
            key: {"level": u.level, "description": u.get_description()}
            for key, u in theory.upgrades.items()
        },
        "milestones": {
            key: {"level": m.level, "available": m.is_available}
            for key, m in theory.milestones.items()
        },
    }


def _tool_set_upgrade_level(holder: _TheoryHolder, key: str, level: int) -> dict[str, Any]:
    try:
        holder.host.set_level(key, level)
    except KeyError:
        return {"error": f"Unknown upgrade: {key!r}"}
    except ValueError as exc:
        return {"error": str(exc)}
    return {"success": True, "key": key, "level": level}


def _tool_set_milestone_level(
    holder: _TheoryHolder, key: str, level: int
) -> dict[str, Any]:
    milestone = holder.theory.milestones.get(key)
    if milestone is None:
        return {"error": f"Unknown milestone: {key!r}"}
    if level > milestone.level and not milestone.is_available:
        return {"success": False, "reason": "Milestone not available yet"}
    try:
        holder.host.set_milestone_level(key, level)
    except ValueError as exc:
        return {"error": str(exc)}
    return {
        "success": True,
        "key": key,
        "level": level,
        "available": {k: m.is_available for k, m in holder.theory.milestones.items()},
    }


def _tool_wait(holder: _TheoryHolder, seconds: float, multiplier: float = 1.0) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}
    if multiplier <= 0:
        return {"error": "Multiplier must be positive"}

    before = holder.theory.currency.value
    with precision():
        full_ticks, remainder = divmod(to_decimal(seconds), _WAIT_TICK)
    for _ in range(int(full_ticks)):
        holder.host.tick(_WAIT_TICK, multiplier)
    if remainder > 0:
        holder.host.tick(remainder, multiplier)

    after = holder.theory.currency.value
    with precision():
        earned = after - before
    return {
        "waited": seconds,
        "t": format_number(holder.theory.state.t),
        "q": format_number(holder.theory.state.q),
        "currency": format_number(after),
        "earned": format_number(earned),
    }


def _tool_get_equations(holder: _TheoryHolder) -> dict[str, Any]:
    theory = holder.theory
    return {
        "primary": theory.get_primary_equation(),
        "secondary": theory.get_secondary_equation(),
        "tertiary": theory.get_tertiary_equation(),
        "publication_multiplier": theory.get_publication_multiplier_formula("\\tau"),
    }


def _tool_get_internal_state(holder: _TheoryHolder) -> dict[str, Any]:
    return {"state": holder.theory.get_internal_state()}


def _tool_set_internal_state(holder: _TheoryHolder, state: str) -> dict[str, Any]:
    holder.theory.set_internal_state(state)
    return {"success": True, "state": holder.theory.get_internal_state()}


def _tool_publish(holder: _TheoryHolder) -> dict[str, Any]:
    result = holder.host.publish()
    return {
        "success": True,
        "tau": format_number(result.tau),
        "previous_multiplier": format_number(result.previous_multiplier),
        "new_multiplier": format_number(result.new_multiplier),
    }


def _tool_new_theory(holder: _TheoryHolder) -> dict[str, Any]:
    fresh = _new_holder(holder.config)
    holder.host = fresh.host
    holder.theory = fresh.theory
    return {"success": True, "message": "Theory reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(config: TheoryConfig) -> FastMCP:
    """Create an MCP server wrapping a theory built from *config*."""
    holder = _new_holder(config)

    mcp = FastMCP(name=f"Theory: {config.name}")

    @mcp.tool()
    def get_theory_info() -> dict[str, Any]:
        """Get static theory overview: metadata, upgrades and milestones."""
        return _tool_get_theory_info(holder)

    @mcp.tool()
    def get_theory_state() -> dict[str, Any]:
        """Get current t, q, derived values, currency, tau and levels."""
        return _tool_get_theory_state(holder)

    @mcp.tool()
    def set_upgrade_level(key: str, level: int) -> dict[str, Any]:
        """Set an upgrade level (c1, c2, n, q1, q2)."""
        return _tool_set_upgrade_level(holder, key, level)

    @mcp.tool()
    def set_milestone_level(key: str, level: int) -> dict[str, Any]:
        """Set a milestone level (c1_exp, sigma, q1_exp, time). Raising requires availability."""
        return _tool_set_milestone_level(holder, key, level)

    @mcp.tool()
    def wait(seconds: float, multiplier: float = 1.0) -> dict[str, Any]:
        """Advance time by the given seconds (max 86400), subdivided into 0.1s ticks."""
        return _tool_wait(holder, seconds, multiplier)

    @mcp.tool()
    def get_equations() -> dict[str, Any]:
        """Get the LaTeX equation panels."""
        return _tool_get_equations(holder)

    @mcp.tool()
    def get_internal_state() -> dict[str, Any]:
        """Get the persisted "t q" state string."""
        return _tool_get_internal_state(holder)

    @mcp.tool()
    def set_internal_state(state: str) -> dict[str, Any]:
        """Restore a "t q" state string."""
        return _tool_set_internal_state(holder, state)

    @mcp.tool()
    def publish() -> dict[str, Any]:
        """Publish: convert currency to tau, update the multiplier, reset."""
        return _tool_publish(holder)

    @mcp.tool()
    def new_theory() -> dict[str, Any]:
        """Reset the theory to its initial state."""
        return _tool_new_theory(holder)

    return mcp
