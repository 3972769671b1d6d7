"""LaTeX producers for the equation panels and upgrade descriptions."""
from __future__ import annotations

from decimal import Decimal

from binomialtheory.formatting import format_number


def primary_equation(sigma_enabled: bool, time_enabled: bool) -> str:
    s = "\\begin{matrix}"
    if sigma_enabled:
        s += "\\dot{\\rho} = c_1\\,c_2\\,\\sum_{k=0}^{n}\\binom{n}{k}x^k"
    else:
        s += "\\dot{\\rho} = c_1\\,c_2\\,(1+x)^n"
    s += ",\\quad x = "
    s += "\\frac{tq}{1+\\dot q}" if time_enabled else "\\frac{q}{1+\\dot q}"
    s += ",\\quad \\dot q = q_1\\,q_2"
    s += "\\end{matrix}"
    return s


def secondary_equation(tau_symbol: str, currency_symbol: str, tau_exponent: Decimal) -> str:
    return f"{tau_symbol}={currency_symbol}^{{{tau_exponent.normalize():f}}}"


def tertiary_equation(t: Decimal, q: Decimal, x: Decimal, time_enabled: bool) -> str:
    s = "\\begin{matrix}"
    if time_enabled:
        s += "t=" + format_number(t) + ",\\; "
    s += "q=" + format_number(q)
    s += ",\\; x=" + format_number(x)
    s += "\\end{matrix}"
    return s


def stepwise_description(symbol: str, value: Decimal) -> str:
    return f"{symbol}={format_number(value, 0)}"


def power_of_two_description(symbol: str, level: int) -> str:
    return f"{symbol}=2^{{{level}}}"


def order_description(n: int) -> str:
    return f"n={n}"
