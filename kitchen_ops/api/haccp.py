"""
HACCP plan API endpoints - read access to generated plans
"""
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from kitchen_ops.config import get_settings
from kitchen_ops.store.entity_store import EntityStore, HACCP_PLAN, NEWEST_FIRST
from kitchen_ops.store.sqlalchemy_store import get_store

router = APIRouter()
settings = get_settings()


class HACCPPlanSummary(BaseModel):
    id: str
    location_id: str
    location_name: Optional[str] = None
    version: str
    is_active: bool
    verified_by: Optional[str] = None
    verified_date: Optional[date] = None
    last_updated: Optional[datetime] = None
    ccps_identified: int = 0
    compliance_status: Optional[str] = None
    scope: Optional[str] = None


class HACCPPlanResponse(HACCPPlanSummary):
    hazard_analysis_complete: bool = False
    linked_menu_items: List[str] = []
    notes: Optional[str] = None


@router.get("/plans", response_model=List[HACCPPlanSummary])
async def list_plans(
    location_id: Optional[str] = None,
    limit: int = 50,
    store: EntityStore = Depends(get_store),
):
    """List plan versions, newest first; optionally for one location"""
    if location_id:
        return await store.filter(HACCP_PLAN, {"location_id": location_id}, NEWEST_FIRST, limit)
    return await store.list(HACCP_PLAN, NEWEST_FIRST, limit)


@router.get("/plans/active", response_model=HACCPPlanResponse)
async def get_active_plan(
    location_id: Optional[str] = None,
    store: EntityStore = Depends(get_store),
):
    """The current authoritative plan for a location"""
    plans = await store.filter(
        HACCP_PLAN,
        {"location_id": location_id or settings.DEFAULT_LOCATION_ID, "is_active": True},
        NEWEST_FIRST,
        1,
    )
    if not plans:
        raise HTTPException(status_code=404, detail="No active HACCP plan for this location")
    return plans[0]


@router.get("/plans/{plan_id}", response_model=HACCPPlanResponse)
async def get_plan(plan_id: str, store: EntityStore = Depends(get_store)):
    plan = await store.get(HACCP_PLAN, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="HACCP plan not found")
    return plan
