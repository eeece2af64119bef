from fastapi import APIRouter, Depends, HTTPException, Query

from seoreport.dependencies import get_store
from seoreport.models.response import StoredReportList, StoredReportSummary
from seoreport.services.store import ReportStore

router = APIRouter()


@router.get("/reports", response_model=StoredReportList, summary="List stored reports")
def list_reports(
    limit: int = Query(default=20, ge=1, le=100),
    store: ReportStore = Depends(get_store),
) -> StoredReportList:
    rows = store.list_recent(limit)
    return StoredReportList(reports=[StoredReportSummary(**row) for row in rows])


@router.get("/reports/{report_id}", summary="Fetch a stored report")
def get_report(report_id: int, store: ReportStore = Depends(get_store)) -> dict:
    """Return the stored report JSON exactly as it was saved."""
    report = store.get(report_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return report
