import logging

from fastapi import APIRouter, Request
from fastapi.responses import Response

from seoreport.models.request import ExportRequest
from seoreport.ratelimit import limiter
from seoreport.services.normalizer import report_filename
from seoreport.services.renderer import render_pdf

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/export-pdf",
    summary="Render a report as a PDF document",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
@limiter.limit("20/minute")
def export_pdf(request: Request, body: ExportRequest) -> Response:
    report = body.analysis
    pdf_bytes = render_pdf(report)
    filename = report_filename(report.url, report.timestamp)
    logger.info("Rendered PDF for %s (%d bytes)", report.url, len(pdf_bytes))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
