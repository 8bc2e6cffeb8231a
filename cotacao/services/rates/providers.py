from __future__ import annotations

"""USD-BRL provider backed by economia.awesomeapi.com.br."""
import logging

import httpx
from pydantic import ValidationError

from cotacao.core.deadline import Deadline
from cotacao.core.errors import DecodeError, DeadlineExceeded, TransportError
from cotacao.models import RateQuote, UpstreamRatePayload
from cotacao.services import http_client

from .base import RateProvider

logger = logging.getLogger("cotacao.server")


class AwesomeApiRateProvider(RateProvider):
    """Reads ``{"USDBRL": {...}}``; a body without the pair yields an empty quote."""

    def __init__(self, url: str, client: httpx.AsyncClient | None = None):
        self.url = url
        self._client = client

    async def fetch_quote(self, deadline: Deadline) -> RateQuote:  # type: ignore[override]
        try:
            response = await http_client.get(self.url, deadline, client=self._client)
        except DeadlineExceeded as e:
            raise TransportError(f"GET {self.url} failed: {e}") from e
        logger.debug(
            "upstream answered %s with %d bytes",
            response.status_code,
            len(response.content),
        )
        try:
            payload = UpstreamRatePayload.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"invalid exchange rate payload: {e}") from e
        return payload.usd_brl
