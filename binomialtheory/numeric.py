from __future__ import annotations

import operator
from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    localcontext,
)
from typing import Callable

# 40 significant digits, exponent range of roughly 1e±999999999999999999.
CONTEXT = Context(
    prec=40,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero],
)

ZERO = Decimal(0)
ONE = Decimal(1)
TWO = Decimal(2)
TEN = Decimal(10)

Number = int | float | str | Decimal

_OPS: dict[str, Callable[[object, object], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
    "==": operator.eq,
    "!=": operator.ne,
}


def precision():
    """Context manager that evaluates Decimal arithmetic in CONTEXT."""
    return localcontext(CONTEXT)


def to_decimal(value: Number) -> Decimal:
    """Convert a host-provided number into a Decimal.

    Floats go through repr() so that 0.1 becomes Decimal("0.1") rather than
    its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def parse_decimal(token: str) -> Decimal | None:
    """Parse a persisted token. Returns None if it is not a finite number."""
    try:
        value = Decimal(token.strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def compare(left: object, op: str, right: object) -> bool:
    """Compare two values using a string operator."""
    fn = _OPS.get(op)
    if fn is None:
        raise ValueError(f"Unknown operator: {op!r}. Expected one of {list(_OPS)}")
    return fn(left, right)
