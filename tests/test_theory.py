"""Tests for the theory: tick, milestones, equations and hooks."""
from decimal import Decimal

import pytest

from binomialtheory.definition import TheoryConfig
from binomialtheory.runtime import LocalHost


def _make_theory(config: TheoryConfig | None = None):
    host = LocalHost()
    theory = host.load(config)
    return host, theory


def _make_producing_theory(config: TheoryConfig | None = None):
    """c1 = 1, q1 = 1, everything else at level 0 (so n = 1)."""
    host, theory = _make_theory(config)
    host.set_level("c1", 1)
    host.set_level("q1", 1)
    return host, theory


# ── Initial state ────────────────────────────────────────────────────


def test_initialization():
    host, theory = _make_theory()
    assert theory.state.t == 0
    assert theory.state.q == 0
    assert theory.currency.value == 0
    assert set(theory.upgrades) == {"c1", "c2", "n", "q1", "q2"}
    assert set(theory.milestones) == {"c1_exp", "sigma", "q1_exp", "time"}


def test_invalid_config():
    config = TheoryConfig(c1_exp_steps=())
    with pytest.raises(ValueError, match="Invalid TheoryConfig"):
        _make_theory(config)


# ── Tick ─────────────────────────────────────────────────────────────


def test_tick_at_level_zero_advances_time_only():
    # q1(0) = 0, so q dot is 0 and c1(0) = 0 produces nothing
    host, theory = _make_theory()
    theory.tick(1, 1)
    assert theory.state.t == 1
    assert theory.state.q == 0
    assert theory.currency.value == 0


def test_tick_with_first_levels():
    host, theory = _make_producing_theory()
    theory.tick(1, 1)
    # q dot = 1, q = 1, x = q / (1 + q dot) = 0.5, driver = (1 + 0.5)^1
    assert theory.state.t == 1
    assert theory.state.q == 1
    assert theory.currency.value == Decimal("1.5")


def test_sigma_toggle_gives_same_result_for_small_order():
    host, theory = _make_producing_theory()
    host.set_milestone_level("sigma", 1)
    theory.tick(1, 1)
    assert theory.currency.value == Decimal("1.5")


def test_time_factor_changes_expansion_variable():
    host, plain = _make_producing_theory()
    plain.tick(1, 1)
    plain.tick(1, 1)
    # second tick: x = q / (1 + q dot) = 2 / 2 -> driver 2
    assert plain.currency.value == Decimal("3.5")

    host, timed = _make_producing_theory()
    host.set_milestone_level("time", 1)
    timed.tick(1, 1)
    timed.tick(1, 1)
    # second tick: x = t q / (1 + q dot) = 4 / 2 -> driver 3
    assert timed.currency.value == Decimal("4.5")


def test_clamp_policy_limits_x():
    host, theory = _make_producing_theory(TheoryConfig(clamp_expansion=True))
    host.set_milestone_level("time", 1)
    theory.tick(1, 1)
    theory.tick(1, 1)
    assert theory.derived().x == 1
    assert theory.currency.value == Decimal("3.5")


def test_multiplier_scales_dt():
    host, theory = _make_producing_theory()
    theory.tick(0.5, 4)
    assert theory.state.t == 2
    assert theory.state.q == 2


def test_non_positive_tick_is_noop():
    host, theory = _make_producing_theory()
    before = host.tertiary_invalidations
    theory.tick(0, 1)
    theory.tick(-3, 1)
    assert theory.state.t == 0
    assert theory.currency.value == 0
    assert host.tertiary_invalidations == before


def test_tick_invalidates_tertiary_equation():
    host, theory = _make_producing_theory()
    before = host.tertiary_invalidations
    for _ in range(3):
        theory.tick(0.1, 1)
    assert host.tertiary_invalidations == before + 3


def test_publication_multiplier_scales_accrual():
    host, theory = _make_producing_theory()
    host._publication_multiplier = Decimal(10)
    theory.tick(1, 1)
    assert theory.currency.value == 15


def test_hidden_exponents():
    host, theory = _make_theory()
    host.set_level("c1", 10)
    host.set_milestone_level("c1_exp", 5)
    vc1, vc2 = theory.c_multiplier()
    assert float(vc1) == pytest.approx(10 ** 1.10)
    assert vc2 == 1

    host.set_level("q1", 10)
    host.set_milestone_level("q1_exp", 3)
    assert float(theory.qdot()) == pytest.approx(10 ** 1.15)


def test_order_from_n_level():
    host, theory = _make_theory()
    assert theory.derived().n == 1
    host.set_level("n", 4)
    assert theory.derived().n == 5


def test_large_values_stay_finite():
    host, theory = _make_theory()
    for key, level in {"c1": 500, "c2": 1000, "n": 4, "q1": 500, "q2": 1000}.items():
        host.set_level(key, level)
    for key, level in {"c1_exp": 5, "sigma": 1, "q1_exp": 3, "time": 1}.items():
        host.set_milestone_level(key, level)
    previous = theory.currency.value
    for _ in range(20):
        theory.tick(1, 1e6)
        assert theory.currency.value.is_finite()
        assert theory.currency.value >= previous
        previous = theory.currency.value
    assert theory.currency.value > 0


def test_monotonic_state_across_ticks():
    host, theory = _make_producing_theory()
    host.set_level("q2", 3)
    prev_t, prev_q = theory.state.t, theory.state.q
    for elapsed, mult in [(0.1, 1), (0.2, 3), (1.5, 1), (0.05, 10)]:
        theory.tick(elapsed, mult)
        assert theory.state.t >= prev_t
        assert theory.state.q >= prev_q
        prev_t, prev_q = theory.state.t, theory.state.q


# ── Milestone availability ───────────────────────────────────────────


def _available(theory):
    return {key: m.is_available for key, m in theory.milestones.items()}


def test_initial_availability():
    host, theory = _make_theory()
    assert _available(theory) == {
        "c1_exp": True,
        "sigma": False,
        "q1_exp": False,
        "time": False,
    }


def test_unlock_chain():
    host, theory = _make_theory()
    host.set_milestone_level("c1_exp", 2)
    assert theory.milestones["sigma"].is_available
    assert not theory.milestones["q1_exp"].is_available

    host.set_milestone_level("sigma", 1)
    assert theory.milestones["q1_exp"].is_available
    assert not theory.milestones["time"].is_available

    host.set_milestone_level("q1_exp", 3)
    assert theory.milestones["time"].is_available


def test_time_factor_rehidden_when_prerequisite_drops():
    host, theory = _make_theory()
    host.set_milestone_level("c1_exp", 2)
    host.set_milestone_level("sigma", 1)
    host.set_milestone_level("q1_exp", 3)
    assert theory.milestones["time"].is_available

    host.set_milestone_level("q1_exp", 2)
    assert not theory.milestones["time"].is_available

    host.set_milestone_level("q1_exp", 3)
    host.set_milestone_level("sigma", 0)
    assert not theory.milestones["time"].is_available
    assert not theory.milestones["q1_exp"].is_available


def test_milestone_change_invalidates_primary_equation():
    host, theory = _make_theory()
    before = host.primary_invalidations
    host.set_milestone_level("c1_exp", 1)
    assert host.primary_invalidations == before + 1


# ── Equations ────────────────────────────────────────────────────────


def test_primary_equation_reflects_toggles():
    host, theory = _make_theory()
    eq = theory.get_primary_equation()
    assert "(1+x)^n" in eq
    assert "\\frac{q}{1+\\dot q}" in eq

    host.set_milestone_level("sigma", 1)
    eq = theory.get_primary_equation()
    assert "\\sum_{k=0}^{n}\\binom{n}{k}x^k" in eq
    assert "(1+x)^n" not in eq

    host.set_milestone_level("time", 1)
    assert "\\frac{tq}{1+\\dot q}" in theory.get_primary_equation()


def test_tertiary_equation():
    host, theory = _make_producing_theory()
    theory.tick(1, 1)
    eq = theory.get_tertiary_equation()
    assert "q=1.000" in eq
    assert "x=0.500" in eq
    assert "t=" not in eq

    host.set_milestone_level("time", 1)
    eq = theory.get_tertiary_equation()
    assert "t=1.000" in eq


def test_tertiary_equation_scientific_for_large_values():
    host, theory = _make_theory()
    theory.set_internal_state("0 1.5e20")
    assert "q=1.500e20" in theory.get_tertiary_equation()


def test_secondary_equation():
    host, theory = _make_theory()
    assert theory.get_secondary_equation() == "\\tau=\\rho^{0.4}"


def test_upgrade_descriptions():
    host, theory = _make_theory()
    c1, c2, n = theory.upgrades["c1"], theory.upgrades["c2"], theory.upgrades["n"]

    host.set_level("c1", 11)
    assert c1.get_description() == "\\(c_1=12\\)"

    host.set_level("c2", 3)
    assert c2.get_description() == "\\(c_2=2^{3}\\)"
    assert c2.get_info(2) == "\\(c_2=2^{3}\\rightarrow c_2=2^{5}\\)"

    host.set_level("n", 2)
    assert n.get_description() == "\\(n=3\\)"


# ── Publication hooks ────────────────────────────────────────────────


def test_tau_hooks():
    host, theory = _make_theory()
    theory.currency.value = Decimal("1e10")
    assert float(theory.get_tau()) == pytest.approx(1e4)
    value, symbol = theory.get_currency_from_tau(Decimal("1e4"))
    assert float(value) == pytest.approx(1e10)
    assert symbol == "\\rho"
    assert theory.get_publication_multiplier(Decimal(0)) == 1
    assert theory.get_publication_multiplier_formula("\\tau") == "{\\tau}^{0.375}"


def test_2d_graph_value():
    host, theory = _make_theory()
    assert theory.get_2d_graph_value() == 0.0
    theory.currency.value = Decimal(999)
    assert theory.get_2d_graph_value() == pytest.approx(3.0)


# ── Persistence hooks ────────────────────────────────────────────────


def test_internal_state_round_trip():
    host, theory = _make_producing_theory()
    for _ in range(5):
        theory.tick(0.3, 1.7)
    saved = theory.get_internal_state()

    host2, restored = _make_theory()
    restored.set_internal_state(saved)
    assert restored.state.t == theory.state.t
    assert restored.state.q == theory.state.q


def test_post_publish_zeroes_state():
    host, theory = _make_theory()
    theory.set_internal_state("3.5 10")
    theory.post_publish()
    assert theory.state.t == 0
    assert theory.state.q == 0


def test_display_beyond_float_and_default_context_range():
    host, theory = _make_theory()
    theory.set_internal_state("0 1e2000000")
    eq = theory.get_tertiary_equation()
    assert "q=1.000e2000000" in eq
    assert "x=1.000e2000000" in eq
