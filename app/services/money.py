"""Money / rounding helpers.

Centralized so the session, the JSON views and the HTML page use identical
rounding and display semantics.
"""

from __future__ import annotations
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Union

AmountLike = Union[int, float, str, None]


def _quantize(value: float, places: str) -> Decimal:
    d = Decimal(str(value))
    # default context holds 28 digits; large amounts need room for the fraction
    with localcontext() as ctx:
        ctx.prec = max(28, d.adjusted() + 4)
        return d.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def round2(value: float) -> float:
    return float(_quantize(value, "0.01"))


def parse_amount(raw: AmountLike) -> float:
    """Coerce user input into a non-negative finite amount.

    Blank, unparseable, non-finite and negative input all read as 0.
    Thousands separators and surrounding whitespace are ignored.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = raw.strip().replace(",", "")
        if not text:
            return 0.0
        try:
            value = float(Decimal(text))
        except (InvalidOperation, ValueError):
            return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def format_amount(value: float, *, converted: bool = True) -> str:
    """Render ``value`` with comma thousands separators.

    Converted amounts always carry two decimals (``5,600.00``); plain input
    amounts keep up to three fractional digits with trailing zeros dropped.
    """
    if converted:
        return f"{round2(value):,.2f}"
    text = f"{_quantize(value, '0.001'):,.3f}"
    return text.rstrip("0").rstrip(".")
