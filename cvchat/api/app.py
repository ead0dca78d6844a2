from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cvchat.api.errors import register_error_handlers
from cvchat.api.routes import router as cv_router
from cvchat.api.services import AppServices
from cvchat.config.settings import Settings

API_PREFIX = "/api/pdf"


def create_app(
    services: AppServices,
    settings: Settings,
    on_shutdown: Callable[[], None] | None = None,
) -> FastAPI:
    """Build the FastAPI application around already-constructed services."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if on_shutdown is not None:
            on_shutdown()

    debug = settings.app_env == "dev"
    app = FastAPI(
        title="cvchat",
        description="CV upload and prompt generation API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if debug else None,
        redoc_url="/redoc" if debug else None,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(cv_router, prefix=API_PREFIX)

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app
