"""
HACCP plan document assembly.

Renders the inspector-facing plain-text HACCP document from already
fetched records. No data access happens here.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

SECTION_TITLES = [
    "1. BUSINESS INFORMATION",
    "2. PROCESS FLOW OVERVIEW",
    "3. HAZARD ANALYSIS",
    "4. CRITICAL CONTROL POINTS",
    "5. CORRECTIVE ACTIONS",
    "6. MONITORING PROCEDURES",
    "7. VERIFICATION PROCEDURES",
    "8. RECORD-KEEPING PROCEDURES",
]

# Used when no hazard of that type is on record
FALLBACK_HAZARDS = {
    "biological": [
        "• Bacterial contamination (high risk)",
        "• Viral pathogens (medium risk)",
        "• Parasites (low risk)",
    ],
    "chemical": [
        "• Pesticide residues (low risk)",
        "• Allergen cross-contamination (high risk)",
        "• Cleaning agent residues (medium risk)",
    ],
    "physical": [
        "• Glass/metal fragments (high risk)",
        "• Wood splinters (medium risk)",
        "• Plastic contamination (low risk)",
    ],
}

HAZARD_SUBSECTIONS = [
    ("3.1 Biological Hazards", "biological"),
    ("3.2 Chemical Hazards", "chemical"),
    ("3.3 Physical Hazards", "physical"),
]

PROCESS_FLOW = [
    "DELIVERY → STORAGE → PREPARATION → COOKING → HOLDING → SERVING",
    "",
    "Key Process Stages:",
    "• Delivery: Incoming goods inspection",
    "• Storage: Maintain correct temperatures",
    "• Preparation: Cross-contamination prevention",
    "• Cooking: Time and temperature monitoring",
    "• Holding: Hot/cold holding maintenance",
    "• Serving: Final safety checks",
]

CORRECTIVE_ACTIONS = [
    "When a CCP deviation occurs:",
    "",
    "IMMEDIATE ACTIONS:",
    "1. Stop operation of affected process immediately",
    "2. Identify affected products",
    "3. Prevent distribution of unsafe product",
    "4. Document the deviation with time and details",
    "",
    "CORRECTIVE MEASURES:",
    "• Re-cook to correct temperature",
    "• Discard non-salvageable product",
    "• Implement additional quality checks",
    "• Review and adjust process parameters",
    "",
    "VERIFICATION:",
    "• Recheck after corrective action",
    "• Document all actions taken",
    "• Notify management",
]

VERIFICATION_PROCEDURES = [
    "Daily:",
    "• Review monitoring records",
    "• Confirm all CCPs within limits",
    "• Check equipment calibration",
    "",
    "Weekly:",
    "• Review temperature logs",
    "• Verify corrective actions if taken",
    "• Check staff training records",
    "",
    "Monthly:",
    "• Manager review of all records",
    "• Equipment maintenance verification",
    "• Complaint analysis",
    "",
    "Quarterly:",
    "• Full HACCP system review",
    "• Update hazard analysis if needed",
    "• Review menu changes impact",
]

RECORD_KEEPING = [
    "Required Records:",
    "• CCP monitoring logs (daily)",
    "• Temperature logs (per equipment)",
    "• Corrective action records",
    "• Staff training certificates",
    "• Equipment maintenance logs",
    "• Supplier audit records",
    "• Customer complaints",
    "",
    "Retention Period:",
    "• 3 years minimum",
    "• Legally mandated records: 6 years+",
    "• Available for inspection",
]

DEFAULT_TEMPERATURE_FREQUENCY = "Per batch"


def _hazard_lines(hazards: Sequence[Dict[str, Any]], hazard_type: str) -> List[str]:
    matching = [h for h in hazards if h.get("type") == hazard_type]
    if not matching:
        return list(FALLBACK_HAZARDS[hazard_type])
    return [f"• {h.get('description')} (Severity: {h.get('severity')})" for h in matching]


def _ccp_subsections(ccps: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "name": f"CCP {idx}: {ccp.get('name')}",
            "items": [
                f"Stage: {ccp.get('stage')}",
                f"Parameter: {ccp.get('monitoring_parameter')}",
                f"Critical Limit: {ccp.get('critical_limit')} {ccp.get('unit')}",
                f"Monitoring Frequency: {ccp.get('check_frequency')}",
                f"Monitoring Method: {ccp.get('monitoring_method')}",
                f"Responsible Role: {ccp.get('responsible_role')}",
            ],
        }
        for idx, ccp in enumerate(ccps, start=1)
    ]


def temperature_check_frequency(ccps: Sequence[Dict[str, Any]]) -> str:
    """Check frequency of the first temperature (celsius) CCP, else the per-batch default"""
    for ccp in ccps:
        if ccp.get("unit") == "celsius":
            return str(ccp.get("check_frequency") or DEFAULT_TEMPERATURE_FREQUENCY)
    return DEFAULT_TEMPERATURE_FREQUENCY


def _render_section(section: Dict[str, Any]) -> str:
    title = section["section"]
    text = f"\n{title}\n{'=' * len(title)}\n"
    if section.get("content") is not None:
        text += "\n".join(section["content"])
    if section.get("subsections") is not None:
        text += "\n".join(
            f"\n{sub['name']}:\n" + "\n".join(sub["items"])
            for sub in section["subsections"]
        )
    return text


def build_haccp_document(
    location_name: str,
    menu_items: Sequence[Dict[str, Any]],
    ccps: Sequence[Dict[str, Any]],
    hazards: Sequence[Dict[str, Any]],
    assets: Optional[Sequence[Dict[str, Any]]],
    version: str,
    generated_at: datetime,
) -> str:
    """Build the eight-section HACCP plan text"""
    sections = [
        {
            "section": SECTION_TITLES[0],
            "content": [
                f"Location: {location_name}",
                f"HACCP Plan Version: {version}",
                f"Generated: {generated_at.strftime('%d/%m/%Y')}",
                f"Menu Items Under Control: {len(menu_items)}",
                f"Critical Control Points: {len(ccps)}",
                "Status: Active & Implemented",
            ],
        },
        {"section": SECTION_TITLES[1], "content": PROCESS_FLOW},
        {
            "section": SECTION_TITLES[2],
            "subsections": [
                {"name": name, "items": _hazard_lines(hazards, hazard_type)}
                for name, hazard_type in HAZARD_SUBSECTIONS
            ],
        },
        {"section": SECTION_TITLES[3], "subsections": _ccp_subsections(ccps)},
        {"section": SECTION_TITLES[4], "content": CORRECTIVE_ACTIONS},
        {
            "section": SECTION_TITLES[5],
            "content": [
                "Daily monitoring by trained staff:",
                "",
                "Temperature Monitoring:",
                f"• Frequency: {temperature_check_frequency(ccps)}",
                "• Method: Calibrated thermometer",
                "• Records: Maintained for 3 years",
                "",
                "Equipment Maintenance:",
                "• Weekly calibration checks",
                "• Monthly maintenance inspections",
                "• Annual professional servicing",
                "",
                "Staff Observation:",
                "• Visual inspection of food quality",
                "• Hygiene compliance verification",
                "• Equipment function assessment",
            ],
        },
        {"section": SECTION_TITLES[6], "content": VERIFICATION_PROCEDURES},
        {"section": SECTION_TITLES[7], "content": RECORD_KEEPING},
    ]

    return "\n".join(_render_section(s) for s in sections)
