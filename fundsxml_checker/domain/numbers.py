"""Explicit numeric parsing for values taken from FundsXML text nodes."""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

# Plain decimal literal: optional sign, digits with optional fraction, optional exponent.
_DECIMAL_LITERAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_decimal(value: object) -> Decimal | None:
    """Return the finite decimal written in ``value`` or ``None`` when it is not one."""
    if value is None:
        return None
    s = str(value).strip()
    if not s or not _DECIMAL_LITERAL.fullmatch(s):
        return None
    try:
        result = Decimal(s)
    except InvalidOperation:
        return None
    if not result.is_finite():
        return None
    return result


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
