"""Tests for state module (persistence of t and q)."""
from decimal import Decimal

from binomialtheory.state import SimulationState


def test_initialization():
    state = SimulationState()
    assert state.t == 0
    assert state.q == 0
    assert state.serialize() == "0 0"


def test_deserialize_then_serialize():
    state = SimulationState()
    state.deserialize("3.5 10")
    assert state.t == Decimal("3.5")
    assert state.q == Decimal(10)
    assert state.serialize() == "3.5 10"


def test_round_trip_is_exact():
    original = SimulationState(
        t=Decimal("12345.678901234567890123456789"),
        q=Decimal("1.234567890123456789E+500"),
    )
    restored = SimulationState()
    restored.deserialize(original.serialize())
    assert restored.t == original.t
    assert restored.q == original.q
    assert str(restored.q) == str(original.q)


def test_single_token_leaves_q_untouched():
    state = SimulationState(t=Decimal(1), q=Decimal(2))
    state.deserialize("7")
    assert state.t == 7
    assert state.q == 2


def test_empty_or_none_leaves_state_untouched():
    state = SimulationState(t=Decimal(1), q=Decimal(2))
    state.deserialize("")
    state.deserialize(None)
    state.deserialize("   ")
    assert state.t == 1
    assert state.q == 2


def test_unparseable_token_is_skipped():
    state = SimulationState(t=Decimal(1), q=Decimal(2))
    state.deserialize("abc 5")
    assert state.t == 1
    assert state.q == 5


def test_non_finite_and_negative_tokens_are_skipped():
    state = SimulationState(t=Decimal(1), q=Decimal(2))
    state.deserialize("NaN -4")
    assert state.t == 1
    assert state.q == 2


def test_extra_whitespace_and_tokens():
    state = SimulationState()
    state.deserialize("  3   4  99")
    assert state.t == 3
    assert state.q == 4


def test_reset_on_publish():
    state = SimulationState(t=Decimal("1e50"), q=Decimal("42"))
    state.reset_on_publish()
    assert state.t == 0
    assert state.q == 0
