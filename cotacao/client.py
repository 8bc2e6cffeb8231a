from __future__ import annotations

"""Quote client: one deadline-bound call to the server, then a local artifact.

The whole run shares a single 300ms deadline. If it has already elapsed no
request is made. The artifact is only written after a complete 200 response
and always holds exactly one bid, overwritten on every successful run.
"""
import asyncio
import logging
from pathlib import Path

import httpx

from cotacao.core.config import CLIENT_TIMEOUT, Settings, get_settings
from cotacao.core.deadline import Deadline
from cotacao.core.errors import (
    ArtifactWriteError,
    CotacaoError,
    UnexpectedStatus,
)
from cotacao.core.logging import init_logging
from cotacao.services import http_client

logger = logging.getLogger("cotacao.client")

ARTIFACT_LABEL = "Dólar: "


async def fetch_exchange_rate(
    url: str, deadline: Deadline, *, client: httpx.AsyncClient | None = None
) -> bytes:
    """Return the raw body of a 200 answer from the quote server."""
    response = await http_client.get(url, deadline, client=client)
    if response.status_code != httpx.codes.OK:
        raise UnexpectedStatus(response.status_code)
    return response.content


def write_artifact(path: Path, body: bytes) -> None:
    try:
        path.touch(exist_ok=True)
        path.write_bytes(ARTIFACT_LABEL.encode("utf-8") + body)
    except OSError as e:
        raise ArtifactWriteError(f"cannot write {path}: {e}") from e


async def run(
    settings: Settings,
    *,
    timeout: float = CLIENT_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> bool:
    """Fetch the bid and store it; returns True only when the artifact was written."""
    deadline = Deadline.after(timeout)
    if deadline.expired():
        logger.warning("execution time exceeded")
        return False

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=None) as own_client:
                body = await fetch_exchange_rate(
                    settings.server_url, deadline, client=own_client
                )
        else:
            body = await fetch_exchange_rate(settings.server_url, deadline, client=client)
    except CotacaoError as e:
        logger.error("failed to get exchange rate: %s", e)
        return False

    try:
        write_artifact(settings.artifact_path, body)
    except ArtifactWriteError as e:
        logger.error("failed to create exchange rate file: %s", e)
        return False
    logger.info("exchange rate written to %s", settings.artifact_path)
    return True


def main() -> None:
    """Console entry point. Failures are logged, the exit status stays 0."""
    settings = get_settings()
    init_logging(debug=settings.debug, role="client")
    asyncio.run(run(settings))


if __name__ == "__main__":
    main()
