"""
Checklist API endpoints - AI drafting and publishing
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from kitchen_ops.agents.checklist_generator.agent import ChecklistGeneratorAgent, ChecklistSpec
from kitchen_ops.services.claude_service import AIServiceUnavailable
from kitchen_ops.store.entity_store import EntityStore, EntityStoreError
from kitchen_ops.store.sqlalchemy_store import get_store
from kitchen_ops.utils.logger import get_logger
from kitchen_ops.utils.validators import validate_email

logger = get_logger(__name__)
router = APIRouter()


class PublishRequest(BaseModel):
    draft: Dict[str, Any]
    user_email: str
    user_name: Optional[str] = None
    publish: bool = True


def get_checklist_agent() -> ChecklistGeneratorAgent:
    return ChecklistGeneratorAgent()


@router.post("/generate")
async def generate_checklist(
    spec: ChecklistSpec,
    agent: ChecklistGeneratorAgent = Depends(get_checklist_agent),
):
    """Draft a checklist with AI; the draft is returned for review, not saved"""
    try:
        return await agent.generate_checklist(spec)
    except AIServiceUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ValueError as e:
        logger.warning(f"Checklist generation failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/publish")
async def publish_checklist(
    data: PublishRequest,
    store: EntityStore = Depends(get_store),
    agent: ChecklistGeneratorAgent = Depends(get_checklist_agent),
):
    """Save a reviewed draft as a checklist template"""
    try:
        user_email = validate_email(data.user_email)
        return await agent.publish(
            store, data.draft, user_email=user_email, user_name=data.user_name, publish=data.publish
        )
    except (ValueError, EntityStoreError) as e:
        raise HTTPException(status_code=400, detail=str(e))
