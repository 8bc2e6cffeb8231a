from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, List

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response

from cotacao.core.config import PERSISTENCE_TIMEOUT, UPSTREAM_TIMEOUT, Settings
from cotacao.core.deadline import Deadline
from cotacao.core.errors import DeadlineExceeded, PersistenceWriteError
from cotacao.db.dal import RateStore
from cotacao.models import PersistedRateRecord
from cotacao.services.rates.base import RateProvider
from cotacao.services.rates.providers import AwesomeApiRateProvider

"""Quote router: GET /cotacao and the persisted history.

Per request: CheckCancelled -> Fetching (200ms) -> Persisting (10ms) -> Responded.
Each stage mints its own deadline; none inherits the inbound request's budget.
A failed or timed-out insert is logged and ignored, the caller still gets the
bid. A failure to open the store is not ignored: the caller gets a 500.
"""

router = APIRouter(tags=["cotacao"])
logger = logging.getLogger("cotacao.server")

RateStoreFactory = Callable[[Path], RateStore]


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_provider(settings: Settings = Depends(get_app_settings)) -> RateProvider:
    return AwesomeApiRateProvider(settings.upstream_url)


def get_rate_store_factory() -> RateStoreFactory:
    return RateStore.open


async def client_gone(request: Request) -> bool:
    return await request.is_disconnected()


@router.get(
    "/cotacao",
    response_class=PlainTextResponse,
    summary="Current USD-BRL bid as plain text",
)
async def get_cotacao(
    settings: Settings = Depends(get_app_settings),
    provider: RateProvider = Depends(get_rate_provider),
    open_store: RateStoreFactory = Depends(get_rate_store_factory),
    cancelled: bool = Depends(client_gone),
):
    if cancelled:
        logger.info("request abandoned: client already disconnected")
        return Response()

    quote = await provider.fetch_quote(Deadline.after(UPSTREAM_TIMEOUT))
    logger.info("fetched %s%s bid=%s", quote.code, quote.codein, quote.bid)

    store = await asyncio.to_thread(open_store, settings.db_path)
    try:
        await Deadline.after(PERSISTENCE_TIMEOUT).run(
            asyncio.to_thread(store.save, quote)
        )
    except (DeadlineExceeded, PersistenceWriteError) as e:
        # Insert errors never reach the caller; the fetched bid is still returned.
        logger.warning("failed to save exchange rate, ignoring: %s", e)

    return PlainTextResponse(quote.bid)


@router.get(
    "/cotacao/history",
    response_model=List[PersistedRateRecord],
    summary="Most recently persisted quotes, newest first",
)
async def list_history(
    limit: int = Query(10, ge=1, le=100),
    settings: Settings = Depends(get_app_settings),
    open_store: RateStoreFactory = Depends(get_rate_store_factory),
):
    store = await asyncio.to_thread(open_store, settings.db_path)
    try:
        return await asyncio.to_thread(store.latest, limit)
    finally:
        store.close()
