"""
Backend function endpoints - request/response handlers invoked by the frontend
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from kitchen_ops.services.haccp_plan_generator import HACCPPlanGenerator
from kitchen_ops.store.entity_store import EntityStore
from kitchen_ops.store.sqlalchemy_store import get_store

router = APIRouter()


@router.post("/generateHACCPPlan")
async def generate_haccp_plan(
    request: Request,
    store: EntityStore = Depends(get_store),
):
    """
    Generate a new HACCP plan version for a location.

    Body: {"user_email": str, "location_id"?: str, "location_name"?: str}.
    The raw body is handed over as-is so malformed JSON gets the
    generator's own 400 envelope rather than FastAPI's validation error.
    """
    raw_body = await request.body()
    result = await HACCPPlanGenerator(store).generate_plan(raw_body)
    return JSONResponse(status_code=result.status_code, content=result.to_body())
