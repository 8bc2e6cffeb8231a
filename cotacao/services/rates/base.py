from __future__ import annotations

"""Rate provider abstraction.

A provider owns one upstream source and knows how to turn its response into a
RateQuote within the deadline handed to it.
"""
from abc import ABC, abstractmethod

from cotacao.core.deadline import Deadline
from cotacao.models import RateQuote


class RateProvider(ABC):
    pair: str = "USD-BRL"

    @abstractmethod
    async def fetch_quote(self, deadline: Deadline) -> RateQuote:
        """Return the current quote for ``pair`` or raise a CotacaoError."""
        raise NotImplementedError
