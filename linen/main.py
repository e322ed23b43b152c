import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Explicitly load .env files at startup
# Load order (later files override earlier):
# 1. project .env (project defaults)
# 2. project .env.local (local overrides)
project_root = Path(__file__).parent.parent
env_file = project_root / ".env"
env_local = project_root / ".env.local"

if env_file.exists():
    load_dotenv(env_file, override=True)

if env_local.exists():
    load_dotenv(env_local, override=True)

from .api.health import create_health_router, set_start_time
from .api.weekly_recap import create_weekly_recap_router
from .api.weekly_theme import create_weekly_theme_router
from .core.clock import get_clock
from .core.config import get_settings
from .core.database import close_database, get_db_session, init_database
from .infrastructure.repositories import SqlAlchemyThemeRepository
from .middleware.error_handler import ErrorHandlerMiddleware
from .middleware.request_id import RequestIdMiddleware
from .services.theme_service import ThemeService
from .utils.logging import setup_logging
from .version import __version__

settings = get_settings()
setup_logging(log_level=settings.log_level, log_to_file=True)
logger = logging.getLogger(__name__)


async def auto_seed_themes() -> None:
    """Seed the rotation table on startup when it is empty."""
    async with get_db_session() as session:
        service = ThemeService(SqlAlchemyThemeRepository(session), get_clock())
        result = await service.seed_rotation()
    if result.already_seeded:
        logger.info("Auto-seed skipped: weekly themes already present")
    else:
        logger.info(
            f"Auto-seeded {result.themes_created} weekly themes from {result.start_date}"
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(f"Linen recap service {__version__} starting up ({settings.environment})")
    set_start_time()

    try:
        await init_database()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    if settings.auto_seed_themes:
        try:
            await auto_seed_themes()
        except Exception as e:
            # Themes can still be seeded through the admin endpoint
            logger.error(f"Auto-seed of weekly themes failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down")
    await close_database()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware and routers."""
    application = FastAPI(
        title="Linen Weekly Recap",
        description="Liturgical weekly themes and AI-generated weekly practice recaps",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware added last runs first: request id, then error handling, then CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(ErrorHandlerMiddleware)
    application.add_middleware(RequestIdMiddleware)

    application.include_router(create_health_router())
    application.include_router(create_weekly_theme_router())
    application.include_router(create_weekly_recap_router())

    @application.get("/")
    async def root() -> Dict[str, str]:
        """Root endpoint for API info"""
        return {"message": "Linen Weekly Recap API", "version": __version__, "status": "running"}

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run("linen.main:app", host=host, port=port, reload=settings.debug, log_level="info")
