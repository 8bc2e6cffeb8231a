"""Pydantic domain models for the quote server and client."""

from .rates import PersistedRateRecord, RateQuote, UpstreamRatePayload

__all__ = [
    "RateQuote",
    "UpstreamRatePayload",
    "PersistedRateRecord",
]
