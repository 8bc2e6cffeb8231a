from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette import status
import logging

logger = logging.getLogger("cotacao.errors")


class CotacaoError(Exception):
    """Base error; ``status_code`` is what the server answers with."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


class DeadlineExceeded(CotacaoError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, budget: float):
        super().__init__(f"deadline of {budget * 1000:.0f}ms exceeded")
        self.budget = budget


class TransportError(CotacaoError):
    """DNS, connect, read or timeout failure at the HTTP layer."""

    status_code = status.HTTP_400_BAD_REQUEST


class RequestBuildError(CotacaoError):
    pass


class ResponseReadError(CotacaoError):
    pass


class UnexpectedStatus(CotacaoError):
    def __init__(self, code: int):
        super().__init__(f"unexpected status code {code}")
        self.code = code


class DecodeError(CotacaoError):
    pass


class PersistenceSetupError(CotacaoError):
    pass


class PersistenceWriteError(CotacaoError):
    pass


class ArtifactWriteError(CotacaoError):
    pass


def cotacao_error_handler(request: Request, exc: CotacaoError):  # type: ignore
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=exc.status_code)


def not_found_handler(request: Request, exc):  # type: ignore
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "not_found" if exc.status_code == 404 else "http_error",
            "detail": f"No route for {request.method} {request.url.path}"
            if exc.status_code == 404
            else exc.detail,
        },
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
