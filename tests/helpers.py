from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import httpx

from cotacao.core.config import Settings
from cotacao.services.rates.providers import AwesomeApiRateProvider

UPSTREAM_URL = "https://upstream.test/json/last/USD-BRL"

UPSTREAM_BODY: Dict[str, Any] = {
    "USDBRL": {
        "code": "USD",
        "codein": "BRL",
        "name": "Dólar Americano/Real Brasileiro",
        "high": "5.4512",
        "low": "5.4021",
        "varBid": "0.0134",
        "pctChange": "0.25",
        "bid": "5.43",
        "ask": "5.4310",
        "timestamp": "1700000000",
        "create_date": "2023-11-14 19:13:20",
    }
}


def make_settings(tmp_path: Path, **overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "db_path": tmp_path / "exchange_rates.db",
        "artifact_path": tmp_path / "cotacao.txt",
        "upstream_url": UPSTREAM_URL,
        "server_url": "http://testserver/cotacao",
    }
    values.update(overrides)
    settings = Settings(_env_file=None, **values)
    settings.init_post_load()
    return settings


def json_handler(body: Dict[str, Any] = UPSTREAM_BODY) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=json.dumps(body).encode("utf-8"))

    return handler


def mock_provider(handler: Callable[..., Any]) -> AwesomeApiRateProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AwesomeApiRateProvider(UPSTREAM_URL, client=client)


