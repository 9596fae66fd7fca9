"""String-to-value coercion for INI values.

bitcoin.conf carries every value as text. Schema keys are coerced to
their declared kind; keys with no schema entry go through
:func:`coerce_display`, which tries bool, int, float, then string.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

from nodecfg.domain.types import ValueKind

_TRUE = frozenset({"true", "yes", "on", "1"})
_FALSE = frozenset({"false", "no", "off", "0"})

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def parse_bool(raw: str) -> bool:
    """Parse a boolean literal (case-insensitive).

    Raises:
        ValueError: If *raw* is not a recognized literal.
    """
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    msg = f"{raw!r} is not a boolean"
    raise ValueError(msg)


def parse_int(raw: str) -> int:
    """Parse a signed 64-bit decimal integer.

    Stricter than ``int()``: no underscores, no surrounding whitespace
    inside the digits.
    """
    text = raw.strip()
    if not _INT_RE.match(text):
        msg = f"{raw!r} is not an integer"
        raise ValueError(msg)
    value = int(text)
    if not _I64_MIN <= value <= _I64_MAX:
        msg = f"{raw!r} is out of range"
        raise ValueError(msg)
    return value


def parse_float(raw: str) -> float:
    """Parse a finite decimal number."""
    text = raw.strip()
    if not _FLOAT_RE.match(text):
        msg = f"{raw!r} is not a number"
        raise ValueError(msg)
    value = float(text)
    if not math.isfinite(value):
        msg = f"{raw!r} is out of range"
        raise ValueError(msg)
    return value


def format_bool(value: bool) -> str:
    return "1" if value else "0"


def format_float(value: float) -> str:
    """Shortest round-trip form in plain notation, never exponent notation.

    Integral values drop the ``.0``: ``1000.0`` displays as ``1000``.
    """
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def coerce_display(raw: str) -> str:
    """Best-effort display form for a value with no declared kind.

    Tries bool, then int, then float, then falls back to the raw string.
    The first successful parse wins, so ``"1"`` displays as a boolean.
    """
    try:
        return format_bool(parse_bool(raw))
    except ValueError:
        pass
    try:
        return str(parse_int(raw))
    except ValueError:
        pass
    try:
        return format_float(parse_float(raw))
    except ValueError:
        return raw


def coerce_to_kind(raw: str, kind: ValueKind) -> str:
    """Coerce *raw* to *kind* and return its normalized display form.

    Raises:
        ValueError: If *raw* does not parse as *kind*, or is a negative
            integer (daemon counters and sizes are unsigned).
    """
    if kind is ValueKind.BOOL:
        return format_bool(parse_bool(raw))
    if kind is ValueKind.INT:
        value = parse_int(raw)
        if value < 0:
            msg = f"{raw!r} must not be negative"
            raise ValueError(msg)
        return str(value)
    if kind is ValueKind.FLOAT:
        return format_float(parse_float(raw))
    return raw
