from __future__ import annotations
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RateQuote(BaseModel):
    """One quote as emitted upstream. Numeric-looking values stay as text."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str = ""
    codein: str = ""
    name: str = ""
    high: str = ""
    low: str = ""
    var_bid: str = Field("", alias="varBid")
    pct_change: str = Field("", alias="pctChange")
    bid: str = ""
    ask: str = ""
    timestamp: str = ""
    create_date: str = ""


class UpstreamRatePayload(BaseModel):
    # Well-formed JSON without the pair decodes to an empty quote, not an error.
    usd_brl: RateQuote = Field(default_factory=RateQuote, alias="USDBRL")

    @field_validator("usd_brl", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class PersistedRateRecord(RateQuote):
    id: int
