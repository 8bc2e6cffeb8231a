from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import cotacao


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    The store is not touched here; every request opens and migrates its own.
    """
    settings = settings_override or get_settings()
    if settings.db_path is None:
        settings.init_post_load()
    # Initialize logging early
    init_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(errors.CotacaoError, errors.cotacao_error_handler)
    app.add_exception_handler(StarletteHTTPException, errors.not_found_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(cotacao.router)

    return app


def serve() -> None:
    """Console entry point: run the quote server with uvicorn."""
    import logging
    import uvicorn

    settings = get_settings()
    app = create_app(settings)
    logging.getLogger("cotacao.server").info(
        "server starting on %s:%d", settings.server_host, settings.server_port
    )
    uvicorn.run(
        app, host=settings.server_host, port=settings.server_port, log_config=None
    )


if __name__ == "__main__":
    serve()
