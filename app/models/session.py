from __future__ import annotations
from dataclasses import asdict
from typing import Optional, Union, TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

from app.services.money import format_amount
from .constants import CURRENCIES

if TYPE_CHECKING:  # pragma: no cover
    from app.services.rates.assets import AssetResolver
    from app.services.session import ConversionSession


class CurrencySelectIn(BaseModel):
    code: str = Field(..., description="Currency code (e.g. USD, PHP)")

    @field_validator("code")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in CURRENCIES:
            raise ValueError("unsupported currency")
        return v


class AmountIn(BaseModel):
    amount: Union[float, str, None] = Field(
        None, description="Amount of source currency; blank or invalid reads as 0"
    )


class CurrencyOut(BaseModel):
    code: str
    name: str
    flag: str
    flag_url: str


class ErrorOut(BaseModel):
    code: str
    message: str


class SessionView(BaseModel):
    session_id: str
    source_currency: str
    target_currency: str
    source: Optional[CurrencyOut] = None
    target: Optional[CurrencyOut] = None
    input_amount: float
    output_amount: Optional[float] = None
    output_text: Optional[str] = None
    rate: Optional[float] = None
    rate_valid: bool
    status: str
    error: Optional[ErrorOut] = None
    display_text: str

    @classmethod
    def from_session(
        cls, session: "ConversionSession", assets: "AssetResolver"
    ) -> "SessionView":
        src = assets.resolve(session.source_currency)
        tgt = assets.resolve(session.target_currency)
        valid = session.rate_valid
        err = session.last_error
        return cls(
            session_id=session.session_id,
            source_currency=session.source_currency,
            target_currency=session.target_currency,
            source=CurrencyOut(**asdict(src)) if src else None,
            target=CurrencyOut(**asdict(tgt)) if tgt else None,
            input_amount=session.input_amount,
            output_amount=session.output_amount if valid else None,
            output_text=format_amount(session.output_amount) if valid else None,
            rate=session.rate if valid else None,
            rate_valid=valid,
            status=session.status.value,
            error=ErrorOut(code=err.code, message=err.message) if err else None,
            display_text=session.display_text,
        )
