from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ledger_feed.api.routes import enrich, model
from ledger_feed.classifiers.store import get_model_store
from ledger_feed.core import settings
from ledger_feed.errors import EnrichmentError, ModelUnavailableError
from ledger_feed.logger import get_logger, setup_logging

logger = get_logger(__name__)


async def enrichment_error_handler(request: Request, exc: EnrichmentError) -> JSONResponse:
    logger.warning("[API] %s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.kind, "detail": exc.message},
    )


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        store = get_model_store()
        app.state.model_store = store

        if settings.get_env_bool("MODEL_EAGER_LOAD", True):
            try:
                store.get()
            except ModelUnavailableError as exc:
                # Requests answer 503 until a later load succeeds
                logger.error("[MODEL] Eager load failed: %s", exc.message)

        logger.info("Services initialized.")
        yield
        logger.info("Service shutting down.")

    app = FastAPI(title="Ledger Feed", lifespan=lifespan)
    app.add_exception_handler(EnrichmentError, enrichment_error_handler)

    app.include_router(enrich.router)
    app.include_router(model.router)

    return app


app = create_app()
