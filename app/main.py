import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import api_router
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging
from app.db.kv_store import SqlKeyValueStore
from app.db.session import create_db_engine, create_session_factory, init_db
from app.services.pipeline.scorer import CommonWordIndex
from app.services.pipeline.trials import TrialStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    # Startup: the word list is required, a load failure stops the app
    app.state.word_index = CommonWordIndex.from_file(settings.common_words_path)
    app.state.trial_store = TrialStore(
        max_trials=settings.max_trials,
        eviction_batch=settings.trial_eviction_batch,
    )
    # Held by every request that reads or changes the trial store
    app.state.trial_lock = asyncio.Lock()

    engine = create_db_engine(settings.database_url)
    init_db(engine)
    app.state.kv_store = SqlKeyValueStore(create_session_factory(engine))
    logger.info("%s started (%s)", settings.app_name, settings.app_env)

    try:
        yield
    finally:
        # Shutdown
        engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Classical cipher workbench API. "
            "Encrypt and decrypt with six historical ciphers and recover "
            "substitution keywords by trying every permutation."
        ),
        version="0.1.0",
        debug=settings.debug,
        openapi_url=f"{settings.api_v1_prefix}/openapi.json",
        docs_url=f"{settings.api_v1_prefix}/docs",
        redoc_url=f"{settings.api_v1_prefix}/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API router
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    return app


app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
