"""
Checklist Generator Agent - drafts operational checklists with Claude
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from kitchen_ops.agents.base_agent import BaseAgent
from kitchen_ops.agents.checklist_generator.prompts import (
    SYSTEM_PROMPT,
    CHECKLIST_PROMPT,
    CHECKLIST_RESPONSE_FORMAT,
)
from kitchen_ops.store.entity_store import EntityStore, CHECKLIST_MASTER
from kitchen_ops.utils.logger import get_logger

logger = get_logger(__name__)

PURPOSES = {"opening", "closing", "hygiene", "audit", "ccp", "equipment", "safety", "custom"}
STATIONS = {"kitchen", "foh", "bar", "all", "custom"}


class ChecklistSpec(BaseModel):
    purpose: str = "opening"
    custom_purpose: Optional[str] = None
    station: str = "all"
    custom_station: Optional[str] = None
    business_type: str = "restaurant"
    time_of_day: str = "morning"
    compliance_level: str = "eho"
    special_focus: List[str] = []

    @property
    def resolved_purpose(self) -> str:
        if self.purpose == "custom":
            return self.custom_purpose or "custom"
        return self.purpose

    @property
    def resolved_station(self) -> str:
        if self.station == "custom":
            return self.custom_station or "custom"
        return self.station


class ChecklistGeneratorAgent(BaseAgent):
    """Builds checklist drafts from a short spec and publishes reviewed drafts"""

    def __init__(self, claude=None):
        super().__init__(name="ChecklistGeneratorAgent", claude=claude)

    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        action = context.get("action", "generate")

        if action == "generate":
            return await self.generate_checklist(ChecklistSpec(**context.get("spec", {})))
        elif action == "publish":
            return await self.publish(
                context["store"],
                context["draft"],
                user_email=context["user_email"],
                user_name=context.get("user_name"),
                publish=context.get("publish", True),
            )

        return {"error": f"Unknown action: {action}"}

    async def generate_checklist(self, spec: ChecklistSpec) -> Dict[str, Any]:
        """Ask Claude for the sections and wrap them in an unsaved checklist draft"""
        if spec.purpose not in PURPOSES:
            raise ValueError(f"Invalid purpose. Must be one of: {sorted(PURPOSES)}")
        if spec.station not in STATIONS:
            raise ValueError(f"Invalid station. Must be one of: {sorted(STATIONS)}")

        prompt = CHECKLIST_PROMPT.format(
            purpose=spec.resolved_purpose,
            station=spec.resolved_station,
            business_type=spec.business_type,
            time_of_day=spec.time_of_day,
            compliance_level=spec.compliance_level,
            special_focus=", ".join(spec.special_focus) or "None",
        )

        result = await self.generate_structured_response(
            prompt=prompt,
            system_prompt=SYSTEM_PROMPT,
            response_format=CHECKLIST_RESPONSE_FORMAT,
        )
        sections = result.get("sections") or []
        logger.info(f"Generated {spec.resolved_purpose} checklist with {len(sections)} sections")

        purpose = spec.resolved_purpose
        return {
            "checklist_name": f"{purpose[:1].upper()}{purpose[1:]} Checklist",
            "checklist_category": "custom" if spec.purpose == "custom" else spec.purpose,
            "assigned_station": spec.resolved_station,
            "business_type": spec.business_type,
            "compliance_level": spec.compliance_level,
            "special_focus": list(spec.special_focus),
            "sections": sections,
            "created_by_ai": True,
            "ai_model": self.model_name,
            "version": "1.0",
        }

    async def publish(
        self,
        store: EntityStore,
        draft: Dict[str, Any],
        user_email: str,
        user_name: Optional[str] = None,
        publish: bool = True,
    ) -> Dict[str, Any]:
        """Persist a (possibly edited) draft as a ChecklistMaster record"""
        record = await store.create(CHECKLIST_MASTER, {
            **draft,
            "is_published": publish,
            "created_by_name": f"{user_name or user_email} (AI)",
            "created_by_email": user_email,
        })
        logger.info(f"Saved checklist {record['id']} (published={publish})")
        return record
