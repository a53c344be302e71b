import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from outfit_draw import __version__
from outfit_draw.app_logging import configure_logging
from outfit_draw.context import AppContext
from outfit_draw.errors import register_exception_handlers
from outfit_draw.routers import auth_router, google_router, records_router


def create_app(context: AppContext) -> FastAPI:
    """Create a FastAPI app wired to the given context."""
    settings = context.settings
    configure_logging(settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.
        Creates tables on startup, releases connections on shutdown.
        """
        await app.state.context.startup()
        logger.info("Outfit Draw started in %s mode", settings.auth_mode)
        yield
        await app.state.context.close_resources()

    app = FastAPI(
        title="Outfit Draw",
        description="Outfit of the day picker with photo journaling",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = context

    # Wide open CORS is only for local development
    if settings.debug:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    if settings.auth_mode == "google":
        app.include_router(google_router.router)
    else:
        app.include_router(auth_router.router)
        app.include_router(records_router.router)

    @app.get("/health")
    async def health():
        """
        Health check endpoint.
        """
        return {
            "status": "ok",
            "version": __version__,
        }

    return app


if __name__ == "__main__":
    import uvicorn

    from outfit_draw.config import get_settings

    uvicorn.run(
        "outfit_draw.asgi:app",
        host="0.0.0.0",
        port=3000,
        reload=get_settings().debug,
    )
