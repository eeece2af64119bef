import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from seoreport.config import get_settings
from seoreport.dependencies import build_providers
from seoreport.ratelimit import limiter
from seoreport.routers.analyze import router as analyze_router
from seoreport.routers.conversation import router as conversation_router
from seoreport.routers.export import router as export_router
from seoreport.routers.reports import router as reports_router
from seoreport.services.fetcher import PageFetcher
from seoreport.services.store import ReportStore

settings = get_settings()

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": settings.log_level.upper(), "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared fetch client, report store and assistant providers."""
    app.state.fetcher = PageFetcher.from_settings(settings)
    app.state.store = ReportStore(settings.database_path)
    app.state.store.init_db()
    app.state.providers = build_providers(settings)
    logger.info("Started with %d assistant provider(s)", len(app.state.providers))
    try:
        yield
    finally:
        await app.state.fetcher.aclose()


app = FastAPI(
    title="SEO Report API",
    description="Fetches a single page and returns a scored, structured SEO report.",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "An unexpected error occurred."},
    )


app.include_router(analyze_router)
app.include_router(export_router)
app.include_router(conversation_router)
app.include_router(reports_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "SEO Report API is running"}
