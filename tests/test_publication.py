"""Tests for publication module."""
from decimal import Decimal

import pytest

from binomialtheory.publication import PublicationRules


def test_tau_from_currency():
    rules = PublicationRules(4)
    assert float(rules.tau_from_currency(Decimal("1e10"))) == pytest.approx(1e4)


def test_tau_of_zero_currency():
    assert PublicationRules(4).tau_from_currency(Decimal(0)) == 0


def test_currency_from_tau_inverts_tau():
    rules = PublicationRules(4)
    currency = Decimal("1e40")
    tau = rules.tau_from_currency(currency)
    back = rules.currency_from_tau(tau)
    assert float(back.log10()) == pytest.approx(40.0)


def test_currency_from_tau_floors_at_one():
    assert PublicationRules(4).currency_from_tau(Decimal("0.5")) == 1


def test_publication_multiplier():
    rules = PublicationRules(4)
    assert rules.publication_multiplier(Decimal(0)) == 1
    # 256^0.375 = 2^3
    assert float(rules.publication_multiplier(Decimal(256))) == pytest.approx(8.0)


def test_multiplier_formula():
    assert PublicationRules(4).multiplier_formula("\\tau") == "{\\tau}^{0.375}"
    assert PublicationRules(2).multiplier_formula("\\tau") == "{\\tau}^{0.75}"


def test_other_tau_multiplier():
    rules = PublicationRules(1)
    assert float(rules.tau_from_currency(Decimal("1e10"))) == pytest.approx(10.0)
