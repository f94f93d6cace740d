from __future__ import annotations

"""Conversion session: the state behind one converter widget.

A session holds the selected (source, target) pair, the last fetched rate and
the entered amount. The converted amount is never stored; it is derived from
the amount and the rate on every read.

Rate validity is tied to the pair the rate was fetched for (``_rate_pair``).
Each fetch remembers the pair it was issued for and its response is dropped
when the selection has moved on in the meantime, so a slow response for an old
pair can never be shown against a new one.
"""
import logging
import uuid
from enum import Enum
from typing import Optional

from app.core.logging import session_context
from app.services.connectivity import AlwaysOnlineProbe, ConnectivityProbe
from app.services.errors import (
    ConversionError,
    InvalidAmountError,
    OfflineError,
    ServiceError,
)
from app.services.money import AmountLike, format_amount, parse_amount, round2
from app.services.rates.base import Pair, RateProvider, RateQuote

logger = logging.getLogger("app.session")

LOADING_TEXT = "Fetching exchange rate, please wait..."


class CurrencyRole(str, Enum):
    SOURCE = "source"
    TARGET = "target"


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class ConversionSession:
    def __init__(
        self,
        provider: RateProvider,
        *,
        source: str = "USD",
        target: str = "PHP",
        probe: Optional[ConnectivityProbe] = None,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self.source_currency = source.upper()
        self.target_currency = target.upper()
        self.input_amount = 0.0
        self.last_error: Optional[ConversionError] = None
        self.last_quote: Optional[RateQuote] = None
        self._provider = provider
        self._probe: ConnectivityProbe = probe or AlwaysOnlineProbe()
        self._rate = 0.0
        self._rate_pair: Optional[Pair] = None
        self._pending = 0

    # Derived state ---------------------------------------------
    @property
    def pair(self) -> Pair:
        return (self.source_currency, self.target_currency)

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def rate_valid(self) -> bool:
        return self._rate_pair is not None and self._rate_pair == self.pair

    @property
    def output_amount(self) -> float:
        if not self.rate_valid:
            return 0.0
        return round2(self.input_amount * self._rate)

    @property
    def loading(self) -> bool:
        return self._pending > 0

    @property
    def status(self) -> SessionStatus:
        if self._pending:
            return SessionStatus.LOADING
        if self.last_error is not None:
            return SessionStatus.ERROR
        if self.rate_valid:
            return SessionStatus.READY
        return SessionStatus.IDLE

    @property
    def display_text(self) -> str:
        status = self.status
        if status is SessionStatus.LOADING:
            return LOADING_TEXT
        if status is SessionStatus.ERROR:
            return self.last_error.message  # type: ignore[union-attr]
        amount = format_amount(self.input_amount, converted=False)
        if status is SessionStatus.READY:
            return (
                f"{amount} {self.source_currency} = "
                f"{format_amount(self.output_amount)} {self.target_currency}"
            )
        return f"{amount} {self.source_currency} = ? {self.target_currency} (exchange rate not fetched yet)"

    # Operations -------------------------------------------------
    def select_currency(self, role: CurrencyRole, code: str) -> None:
        code = code.upper()
        if CurrencyRole(role) is CurrencyRole.SOURCE:
            self.source_currency = code
        else:
            self.target_currency = code
        self._rate_pair = None
        self.input_amount = 0.0
        self.last_error = None
        logger.debug("selected %s=%s", CurrencyRole(role).value, code)

    def swap(self) -> None:
        carried = self.output_amount
        was_valid = self.rate_valid
        self.source_currency, self.target_currency = (
            self.target_currency,
            self.source_currency,
        )
        if was_valid:
            self._rate = 1 / self._rate
            self._rate_pair = self.pair
        self.input_amount = carried
        self.last_error = None

    def set_input_amount(self, amount: AmountLike) -> float:
        self.input_amount = parse_amount(amount)
        self.last_error = None
        return self.output_amount

    async def request_rate(self) -> Optional[RateQuote]:
        """Fetch the rate for the current pair.

        Returns the applied quote, or None when the selection changed while the
        fetch was in flight and the response was dropped.
        """
        with session_context(self.session_id):
            if self.input_amount <= 0:
                self.last_error = InvalidAmountError()
                raise self.last_error
            if not await self._probe.is_online():
                self.last_error = OfflineError()
                raise self.last_error

            requested = self.pair
            self._pending += 1
            try:
                rate = await self._provider.get_pair_rate(*requested)
            except ConversionError as e:
                if requested == self.pair:
                    self.last_error = e
                logger.warning("rate fetch failed for %s/%s: %s", *requested, e.detail)
                raise
            except Exception as e:
                logger.exception("rate fetch crashed for %s/%s", *requested)
                err = ServiceError(str(e))
                if requested == self.pair:
                    self.last_error = err
                raise err from e
            finally:
                self._pending -= 1

            if requested != self.pair:
                logger.info(
                    "discarding stale rate for %s/%s; selection is now %s/%s",
                    *requested,
                    *self.pair,
                )
                return None

            quote = RateQuote(source=requested[0], target=requested[1], rate=rate)
            self._rate = rate
            self._rate_pair = requested
            self.last_quote = quote
            self.last_error = None
            logger.info("rate %s/%s = %s", requested[0], requested[1], rate)
            return quote
