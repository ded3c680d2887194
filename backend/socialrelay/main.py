"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager
from typing import Optional
import logging
import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from socialrelay.api.router import api_router, auth_router
from socialrelay.core.config import Settings, settings as default_settings
from socialrelay.core.errors import ConfigurationError
from socialrelay.core.providers import all_provider_configs
from socialrelay.core.store import ConnectionRegistry, PendingAuthorizationStore
from socialrelay.services.captions import CaptionGenerator

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings: Settings = app.state.settings
    logger.info("Starting application...")
    try:
        settings.validate_required()
    except ConfigurationError as e:
        logger.error(f"ERROR: {e}")
        logger.error("Please check the .env file")
        raise

    for provider, config in all_provider_configs(settings).items():
        if settings.is_provider_configured(provider.value):
            logger.info(f"{config.display_name} OAuth configured, redirect URI {config.redirect_uri}")
        else:
            logger.warning(f"{config.display_name} OAuth is not configured; its login route will return 503")

    app.state.http_client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
    app.state.caption_generator = CaptionGenerator.from_settings(settings)
    logger.info(f"Using {settings.COMPLETION_MODEL} for caption generation")
    logger.info("Application started successfully")
    yield
    logger.info("Shutting down application...")
    await app.state.http_client.aclose()
    await app.state.caption_generator.close()
    logger.info("Application shut down successfully")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="SocialRelay API - OAuth relay for LinkedIn and Twitter with AI caption generation",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )
    app.state.settings = settings
    app.state.pending_store = PendingAuthorizationStore(ttl_seconds=settings.PENDING_ATTEMPT_TTL_SECONDS)
    app.state.connections = ConnectionRegistry()

    # CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router, prefix="/auth")
    app.include_router(api_router, prefix="/api")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "socialrelay.main:app",
        host="0.0.0.0",
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
    )
