"""Pydantic models for the currency converter API."""

from .constants import CURRENCIES, CURRENCY_TABLE  # re-export
from .session import AmountIn, CurrencyOut, CurrencySelectIn, ErrorOut, SessionView

__all__ = [
    "CURRENCIES",
    "CURRENCY_TABLE",
    "AmountIn",
    "CurrencyOut",
    "CurrencySelectIn",
    "ErrorOut",
    "SessionView",
]
