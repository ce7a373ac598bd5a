from fastapi import FastAPI, Request, Response
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import uvicorn
from . import __version__
from .config import get_settings
from .core.errors import RelayError
from .routes import relay_router
from .utils.logger import get_logger

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load configuration once at startup so missing secrets fail fast."""
    settings = get_settings()
    logger.info(f"Starting tweet_gyazo in {settings.ENVIRONMENT} environment")
    logger.debug(f"Twitter status endpoint: {settings.TWITTER_STATUS_SHOW_URL}")
    logger.debug(f"Gyazo upload endpoint: {settings.GYAZO_UPLOAD_URL}")
    logger.debug(f"HTTP timeout: {settings.HTTP_TIMEOUT}s")

    yield

    logger.info("Shutting down tweet_gyazo")

app = FastAPI(
    title="tweet_gyazo",
    description="Relay the photos of a tweet to Gyazo",
    version=__version__,
    lifespan=lifespan
)

app.include_router(relay_router, tags=["relay"])

@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

# Error handlers
@app.exception_handler(RelayError)
async def relay_exception_handler(request: Request, exc: RelayError):
    """Answer relay failures with an empty body."""
    logger.error(f"{exc.__class__.__name__}: {str(exc)}")
    return Response(status_code=exc.status_code)

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled error occurred: {str(exc)}", exc_info=exc)
    return Response(status_code=500)

# Run the application
if __name__ == "__main__":
    settings = get_settings()
    log_config = uvicorn.config.LOGGING_CONFIG
    log_config["formatters"]["access"]["fmt"] = settings.LOG_FORMAT

    uvicorn.run(
        "tweet_gyazo.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "development",
        workers=None if settings.ENVIRONMENT == "development" else settings.WORKERS,
        log_level=settings.LOG_LEVEL.lower(),
        log_config=log_config
    )
