"""Main FastAPI application for releasesd.

This module creates and configures the FastAPI application that exposes
the release cache via a REST API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from release_library.auth import CredentialResolver
from release_library.cache import CooldownSchedule
from release_library.cache import RefreshScheduler
from release_library.cache import ReleaseCacheStore
from release_library.cache import VersionAggregator
from release_library.cache import build_repository_keys
from release_library.config import ReleaseSettings
from release_library.config import load_config
from release_library.sources import GitHubReleaseSource
from release_library.sources import ReleaseSource

from . import __version__
from .routers import cache_router
from .routers import releases_router
from .routers import status_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(settings: ReleaseSettings | None = None, source: ReleaseSource | None = None) -> FastAPI:
    """Create the releasesd application.

    Args:
        settings: Settings to use (default: load_config() at startup)
        source: Release source to use (default: GitHub client built at startup)

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the cache services on startup, stop refreshing on shutdown."""
        config = settings or load_config()
        logger.info(f"Starting releasesd on {config.host}:{config.port}")

        token = CredentialResolver(config.token_file, config.token_env_var).resolve()
        release_source = source
        owned_source: GitHubReleaseSource | None = None
        if release_source is None:
            owned_source = GitHubReleaseSource(
                owner=config.github_owner,
                token=token,
                api_url=config.github_api_url,
                timeout=config.fetch_timeout_seconds,
            )
            release_source = owned_source

        store = ReleaseCacheStore(
            source=release_source,
            repository_keys=build_repository_keys(config.min_version, config.max_version, config.product_prefix),
            fetch_timeout=config.fetch_timeout_seconds,
        )
        refresh_scheduler = RefreshScheduler(store, CooldownSchedule.for_token(token))

        app.state.settings = config
        app.state.authenticated = token is not None
        app.state.cache_store = store
        app.state.aggregator = VersionAggregator(store)
        app.state.refresh_scheduler = refresh_scheduler

        if config.disable_refresh:
            logger.info("Scheduled cache refresh disabled")
        else:
            await refresh_scheduler.start()

        yield

        logger.info("Shutting down releasesd")
        if refresh_scheduler.running:
            await refresh_scheduler.stop()
        if owned_source is not None:
            await owned_source.aclose()

    app = FastAPI(
        title="releasesd",
        description="Cached GitHub release metadata for current and legacy binary repositories",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(status_router)
    app.include_router(cache_router)
    app.include_router(releases_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint.

        Returns:
            Welcome message with API information
        """
        return {
            "name": "releasesd",
            "version": __version__,
            "description": "Cached GitHub release metadata",
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app


app = create_app()
