"""FastAPI application entrypoint. No business logic; only wiring, logging and error handlers."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from userdesk import __version__
from userdesk.api.v1 import router as v1_router
from userdesk.core.config import Settings, get_settings
from userdesk.core.errors import register_exception_handlers


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application from explicit settings (defaults to the environment)."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Userdesk API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; points at the API docs."""
        return {"message": "Userdesk API", "docs": "/docs"}

    return app


app = create_app()
