"""FastAPI application for the uikit daemon.

Serves bundles of registered UI components. The bundler is created once per
process in the lifespan handler; its backend is probed lazily on the first
build.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from uikit_library.bundler import create_bundler
from uikit_library.components import ComponentRegistry
from uikit_library.config import BundlerSettings
from uikit_library.config import load_config

from . import __version__
from .routers import components_router
from .routers import status_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(settings: BundlerSettings | None = None) -> FastAPI:
    """Create the daemon application.

    Args:
        settings: Bundler settings (loaded from config when omitted)

    Returns:
        Configured FastAPI application
    """
    config = settings if settings is not None else load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the bundler and register configured components."""
        logger.info(f"Starting uikitd on {config.host}:{config.port} (mode={config.mode.value})")

        bundler = create_bundler(config)
        registry = ComponentRegistry(bundler, components_dir=config.components_dir)
        for name, entry_path in config.components.items():
            try:
                registry.register(name, entry_path)
            except (ValueError, FileNotFoundError) as e:
                # Don't fail startup, just log the error
                logger.error(f"Failed to register component {name}: {e}")

        app.state.bundler = bundler
        app.state.registry = registry

        yield

        logger.info("Shutting down uikitd")
        try:
            await bundler.aclose()
        except Exception as e:
            logger.error(f"Failed to shut down compiler backend: {e}")

    app = FastAPI(
        title="uikitd",
        description="Bundles UI components into self-contained scripts for sandboxed embedding",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(components_router)
    app.include_router(status_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint.

        Returns:
            API information
        """
        return {
            "name": "uikitd",
            "version": __version__,
            "description": "Component bundling daemon",
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app
