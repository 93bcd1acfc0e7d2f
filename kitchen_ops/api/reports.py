"""
Operation report API endpoints - dashboard listing and CSV export
"""
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from pydantic import BaseModel

from kitchen_ops.services.export_service import operation_reports_to_csv
from kitchen_ops.store.entity_store import EntityStore, OPERATION_REPORT, NEWEST_FIRST
from kitchen_ops.store.sqlalchemy_store import get_store

router = APIRouter()


class OperationReportResponse(BaseModel):
    id: str
    report_id: str
    report_type: str
    location_id: Optional[str] = None
    staff_name: Optional[str] = None
    staff_email: Optional[str] = None
    report_date: Optional[date] = None
    completion_percentage: int = 0
    status: Optional[str] = None
    source_entity_id: Optional[str] = None
    source_entity_type: Optional[str] = None
    checklist_items: List[Dict[str, Any]] = []


async def _query_reports(
    store: EntityStore,
    report_type: Optional[str],
    location_id: Optional[str],
    limit: int,
) -> List[Dict[str, Any]]:
    query = {}
    if report_type:
        query["report_type"] = report_type
    if location_id:
        query["location_id"] = location_id
    return await store.filter(OPERATION_REPORT, query, NEWEST_FIRST, limit)


@router.get("/", response_model=List[OperationReportResponse])
async def list_reports(
    report_type: Optional[str] = None,
    location_id: Optional[str] = None,
    limit: int = 100,
    store: EntityStore = Depends(get_store),
):
    """List operation reports, newest first"""
    return await _query_reports(store, report_type, location_id, limit)


@router.get("/export.csv")
async def export_reports_csv(
    report_type: Optional[str] = None,
    location_id: Optional[str] = None,
    limit: int = 1000,
    store: EntityStore = Depends(get_store),
):
    """Download the report listing as CSV"""
    reports = await _query_reports(store, report_type, location_id, limit)
    return Response(
        content=operation_reports_to_csv(reports),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="operation_reports.csv"'},
    )
