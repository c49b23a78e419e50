import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seamless_wallet import __version__
from seamless_wallet.core.config import get_settings
from seamless_wallet.core.container import get_container
from seamless_wallet.infrastructure.database import init_db
from seamless_wallet.interfaces.http.routers import create_api_router

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    if not settings.agents:
        logger.warning("No partner agents configured; balance and settlement callbacks will be rejected")
    yield
    if get_container.cache_info().currsize:
        await get_container().aclose()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Session, game launch and wager settlement service for a seamless wallet",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", summary="Liveness check")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
