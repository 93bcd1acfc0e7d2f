"""
HACCP plan generator.

Pulls menu items, critical control points, hazards and assets, renders an
inspector-ready HACCP document, stores it as the single active plan for the
location (archiving earlier versions), and files an operation report so the
plan shows up on the reports dashboard.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel

from kitchen_ops.config import Settings, get_settings
from kitchen_ops.services.best_effort import fetch_or_default, best_effort_batch_update
from kitchen_ops.services.haccp_document import build_haccp_document
from kitchen_ops.store.entity_store import (
    EntityStore, NEWEST_FIRST,
    MENU_ITEM, CRITICAL_CONTROL_POINT, HAZARD, ASSET, HACCP_PLAN, OPERATION_REPORT,
)
from kitchen_ops.utils.helpers import safe_json_parse, epoch_millis, name_from_email
from kitchen_ops.utils.logger import get_logger
from kitchen_ops.utils.validators import FIRST_PLAN_VERSION, InvalidVersionFormat, next_version

logger = get_logger(__name__, tag="HACCP")

GENERATION_FAILED = "Failed to generate HACCP plan"
SUCCESS_MESSAGE = "HACCP plan generated successfully"


class ErrorKind(str, Enum):
    MALFORMED_REQUEST = "malformed_request"
    MISSING_FIELD = "missing_field"
    INVALID_VERSION_FORMAT = "invalid_version_format"
    PERSISTENCE_FAILURE = "persistence_failure"


# Caller mistakes; everything else is on our side
REQUEST_ERRORS = {ErrorKind.MALFORMED_REQUEST, ErrorKind.MISSING_FIELD}


class RequestError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class GeneratePlanRequest(BaseModel):
    user_email: str
    location_id: str
    location_name: str


class GeneratePlanOk(BaseModel):
    haccp_plan_id: str
    report_id: str
    version: str
    message: str = SUCCESS_MESSAGE
    warnings: List[str] = []

    @property
    def success(self) -> bool:
        return True

    @property
    def status_code(self) -> int:
        return 200

    def to_body(self) -> Dict[str, Any]:
        return {
            "success": True,
            "haccpPlanId": self.haccp_plan_id,
            "reportId": self.report_id,
            "version": self.version,
            "message": self.message,
        }


class GeneratePlanErr(BaseModel):
    kind: ErrorKind
    error: str
    details: Optional[str] = None

    @property
    def success(self) -> bool:
        return False

    @property
    def status_code(self) -> int:
        return 400 if self.kind in REQUEST_ERRORS else 500

    def to_body(self) -> Dict[str, Any]:
        body = {"success": False, "error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


GeneratePlanResult = Union[GeneratePlanOk, GeneratePlanErr]

_UNPARSEABLE = object()


def parse_request(
    body: Union[str, bytes, Mapping[str, Any], None],
    default_location_id: str = "default",
    default_location_name: str = "Main",
) -> GeneratePlanRequest:
    """
    Turn a raw request body (JSON text or an already parsed mapping) into a request.

    Raises:
        RequestError: MALFORMED_REQUEST if the body is not a JSON object,
            MISSING_FIELD if user_email is absent or blank
    """
    data = body
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError:
            data = _UNPARSEABLE
    if isinstance(data, str):
        data = safe_json_parse(data, default=_UNPARSEABLE)

    if not isinstance(data, Mapping):
        raise RequestError(ErrorKind.MALFORMED_REQUEST, "Invalid request format")

    user_email = data.get("user_email")
    if not isinstance(user_email, str) or not user_email.strip():
        raise RequestError(ErrorKind.MISSING_FIELD, "Missing user_email")

    return GeneratePlanRequest(
        user_email=user_email.strip(),
        location_id=str(data.get("location_id") or default_location_id),
        location_name=str(data.get("location_name") or default_location_name),
    )


class HACCPPlanGenerator:
    """Generates and stores a new HACCP plan version for one location"""

    def __init__(
        self,
        store: EntityStore,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.clock = clock or datetime.utcnow

    async def generate_plan(self, body) -> GeneratePlanResult:
        """Never raises; every outcome is returned as an Ok or Err result"""
        logger.info("Generation request received")

        try:
            request = parse_request(
                body,
                default_location_id=self.settings.DEFAULT_LOCATION_ID,
                default_location_name=self.settings.DEFAULT_LOCATION_NAME,
            )
        except RequestError as e:
            logger.error(f"Rejected request: {e.message}")
            return GeneratePlanErr(kind=e.kind, error=e.message)

        try:
            return await self._generate(request)
        except InvalidVersionFormat as e:
            logger.error(f"Cannot compute next version: {e}")
            return GeneratePlanErr(
                kind=ErrorKind.INVALID_VERSION_FORMAT,
                error=GENERATION_FAILED,
                details=str(e),
            )
        except Exception as e:
            logger.exception(f"CRITICAL ERROR: {e}")
            return GeneratePlanErr(
                kind=ErrorKind.PERSISTENCE_FAILURE,
                error=GENERATION_FAILED,
                details=str(e) or "Unknown error",
            )

    async def _generate(self, request: GeneratePlanRequest) -> GeneratePlanOk:
        settings = self.settings
        store = self.store
        warnings: List[str] = []

        logger.info("Fetching data...")
        menu_items = await fetch_or_default(
            "MenuItem",
            lambda: store.list(MENU_ITEM, NEWEST_FIRST, settings.HACCP_MENU_ITEM_LIMIT),
            [], warnings,
        )
        ccps = await fetch_or_default(
            "CCP",
            lambda: store.list(CRITICAL_CONTROL_POINT, NEWEST_FIRST, settings.HACCP_CCP_LIMIT),
            [], warnings,
        )
        hazards = await fetch_or_default(
            "Hazard",
            lambda: store.list(HAZARD, NEWEST_FIRST, settings.HACCP_HAZARD_LIMIT),
            [], warnings,
        )
        assets = await fetch_or_default(
            "Asset",
            lambda: store.list(ASSET, NEWEST_FIRST, settings.HACCP_ASSET_LIMIT),
            [], warnings,
        )
        logger.info(
            f"Data fetched: menuItems={len(menu_items)} ccpData={len(ccps)} "
            f"hazards={len(hazards)} assets={len(assets)}"
        )

        existing_plans = await fetch_or_default(
            "Existing plans",
            lambda: store.filter(
                HACCP_PLAN,
                {"location_id": request.location_id},
                NEWEST_FIRST,
                settings.HACCP_EXISTING_PLAN_LIMIT,
            ),
            [], warnings,
        )

        # A plan stored without a version counts as "1.0"
        if existing_plans:
            version = next_version(existing_plans[0].get("version") or FIRST_PLAN_VERSION)
        else:
            version = next_version(None)
        logger.info(f"Generated new version: {version}")

        now = self.clock()
        document = build_haccp_document(
            location_name=request.location_name,
            menu_items=menu_items,
            ccps=ccps,
            hazards=hazards,
            assets=assets,
            version=version,
            generated_at=now,
        )

        # Archive, never delete, earlier versions
        if existing_plans:
            logger.info(f"Archiving {len(existing_plans)} previous versions")
            outcome = await best_effort_batch_update(
                store,
                HACCP_PLAN,
                [plan["id"] for plan in existing_plans if plan.get("id")],
                {"is_active": False},
            )
            warnings.extend(outcome.warnings(HACCP_PLAN))

        logger.info("Creating HACCP plan record...")
        linked_menu_items = [
            item["id"]
            for item in menu_items[:settings.HACCP_LINKED_MENU_ITEM_LIMIT]
            if isinstance(item.get("id"), str) and item["id"]
        ]
        plan = await store.create(HACCP_PLAN, {
            "location_id": request.location_id,
            "location_name": request.location_name,
            "version": version,
            "last_updated": now,
            "verified_by": request.user_email,
            "verified_date": now.date(),
            "is_active": True,
            "scope": (
                f"{len(menu_items)} menu items, {len(ccps)} CCPs, "
                f"{len(hazards)} identified hazards"
            ),
            "hazard_analysis_complete": True,
            "ccps_identified": len(ccps),
            "linked_menu_items": linked_menu_items,
            "compliance_status": "implemented",
            "notes": document,
        })
        logger.info(f"HACCP plan created: {plan['id']}")

        logger.info("Creating operation report...")
        report = await store.create(OPERATION_REPORT, {
            "report_id": f"HACCP-{version}-{epoch_millis(now)}",
            "report_type": "HACCP",
            "location_id": request.location_id,
            "staff_id": request.user_email,
            "staff_name": name_from_email(request.user_email),
            "staff_email": request.user_email,
            "report_date": now.date(),
            "completion_percentage": 100,
            "status": "completed",
            "source_entity_id": plan["id"],
            "source_entity_type": HACCP_PLAN,
            "timestamp": now,
            "checklist_items": [
                {
                    "item_id": "haccp_version",
                    "item_name": "HACCP Version",
                    "answer": version,
                },
                {
                    "item_id": "ccp_identified",
                    "item_name": "Critical Control Points Identified",
                    "answer": f"{len(ccps)} CCPs",
                },
                {
                    "item_id": "hazard_analysis",
                    "item_name": "Hazard Analysis Complete",
                    "answer": "Yes",
                },
            ],
        })
        logger.info(f"Report created: {report['id']}")

        if warnings:
            logger.warning(f"Completed with {len(warnings)} warning(s)")

        return GeneratePlanOk(
            haccp_plan_id=plan["id"],
            report_id=report["id"],
            version=version,
            warnings=warnings,
        )
