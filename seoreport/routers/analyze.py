import logging
import sqlite3

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from seoreport.config import Settings, get_settings
from seoreport.dependencies import get_fetcher, get_store
from seoreport.errors import SEOReportError
from seoreport.models.request import AnalyzeRequest
from seoreport.models.response import AnalyzeResponse, ErrorResponse
from seoreport.ratelimit import limiter
from seoreport.services.fetcher import PageFetcher
from seoreport.services.pipeline import analyze_url
from seoreport.services.store import ReportStore

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {
    status: {"model": ErrorResponse} for status in (400, 404, 408, 500, 502)
}


@router.post(
    "/analyze-seo",
    response_model=AnalyzeResponse,
    responses=_ERROR_RESPONSES,
    summary="Analyze the on-page SEO of a single URL",
)
@limiter.limit(get_settings().analyze_rate_limit)
async def analyze_seo(
    request: Request,
    body: AnalyzeRequest,
    fetcher: PageFetcher = Depends(get_fetcher),
    store: ReportStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> AnalyzeResponse | JSONResponse:
    """Fetch *url*, score it, store the report and return it.

    Failures are returned as ``{"success": false, "error": ...}``:

    * ``400`` – the URL is malformed or not allowed.
    * ``404`` – the target site answered 404.
    * ``408`` – the target site did not answer in time.
    * ``502`` – the target site answered with a server error.
    * ``500`` – anything else.
    """
    url = body.url.strip()
    logger.info("Analysis request received", extra={"url": url})

    try:
        report = await analyze_url(url, fetcher, penalties=settings.section_penalties)
    except SEOReportError as exc:
        logger.warning("Analysis of %s failed (%s): %s", url, exc.status_code, exc.message)
        return _error_response(exc.status_code, exc.message)

    try:
        await run_in_threadpool(store.save, report)
    except sqlite3.Error:
        logger.exception("Could not store report for %s", url)

    return AnalyzeResponse(analysis=report)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )
