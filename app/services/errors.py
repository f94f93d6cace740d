"""Conversion error taxonomy.

Every error is terminal for the operation that raised it and none of them
invalidate the session: callers surface ``message`` and let the user retry.
"""

from __future__ import annotations


class ConversionError(Exception):
    code: str = "conversion_error"
    message: str = "Conversion failed."

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class InvalidAmountError(ConversionError):
    """Amount to convert is zero or missing."""

    code = "invalid_amount"
    message = "Please enter a valid amount."


class OfflineError(ConversionError):
    """No network connectivity; session state is left untouched."""

    code = "offline"
    message = "No internet connection!"


class ServiceError(ConversionError):
    """Rate service failed or returned unusable data."""

    code = "service_error"
    message = "Error fetching exchange rate!"


__all__ = [
    "ConversionError",
    "InvalidAmountError",
    "OfflineError",
    "ServiceError",
]
