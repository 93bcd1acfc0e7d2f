"""
HACCP document assembly tests - pure function, no store involved.
"""
import re
from datetime import datetime

from kitchen_ops.services.haccp_document import (
    SECTION_TITLES,
    build_haccp_document,
    temperature_check_frequency,
)

GENERATED_AT = datetime(2026, 10, 19, 9, 30)


def _ccp(name, unit="celsius", frequency="Hourly"):
    return {
        "name": name,
        "stage": "cooking",
        "monitoring_parameter": "Core temperature",
        "critical_limit": "75",
        "unit": unit,
        "check_frequency": frequency,
        "monitoring_method": "Probe",
        "responsible_role": "Chef",
    }


def _build(menu_items=(), ccps=(), hazards=(), location_name="Downtown", version="2.4"):
    return build_haccp_document(
        location_name=location_name,
        menu_items=list(menu_items),
        ccps=list(ccps),
        hazards=list(hazards),
        assets=[],
        version=version,
        generated_at=GENERATED_AT,
    )


def test_eight_sections_in_fixed_order():
    text = _build()
    positions = [text.index(f"\n{title}\n") for title in SECTION_TITLES]
    assert positions == sorted(positions)
    for title in SECTION_TITLES:
        assert text.count(title) == 1
        assert f"{title}\n{'=' * len(title)}\n" in text


def test_document_starts_with_business_information():
    text = _build()
    assert text.startswith("\n1. BUSINESS INFORMATION\n")


def test_business_information_lines():
    text = _build(menu_items=[{"id": "a"}, {"id": "b"}], ccps=[_ccp("Cook")])
    assert "Location: Downtown" in text
    assert "HACCP Plan Version: 2.4" in text
    assert "Generated: 19/10/2026" in text
    assert "Menu Items Under Control: 2" in text
    assert "Critical Control Points: 1" in text
    assert "Status: Active & Implemented" in text


def test_process_flow_is_fixed():
    text = _build()
    assert "DELIVERY → STORAGE → PREPARATION → COOKING → HOLDING → SERVING" in text
    assert "• Holding: Hot/cold holding maintenance" in text


def test_one_block_per_ccp():
    ccps = [_ccp("Cooking"), _ccp("Chilling"), _ccp("Reheating")]
    text = _build(ccps=ccps)
    assert re.findall(r"^CCP (\d+):", text, re.M) == ["1", "2", "3"]
    assert "CCP 2: Chilling:\nStage: cooking\nParameter: Core temperature\n" in text


def test_ccp_field_order():
    text = _build(ccps=[_ccp("Cooking", frequency="Every batch")])
    block = text.split("CCP 1: Cooking:\n", 1)[1].split("\n")[:6]
    assert block == [
        "Stage: cooking",
        "Parameter: Core temperature",
        "Critical Limit: 75 celsius",
        "Monitoring Frequency: Every batch",
        "Monitoring Method: Probe",
        "Responsible Role: Chef",
    ]


def test_no_ccps_means_no_ccp_blocks():
    text = _build()
    assert re.findall(r"^CCP \d+:", text, re.M) == []


def test_biological_fallback_verbatim():
    text = _build(hazards=[{"type": "chemical", "description": "Bleach residue", "severity": "high"}])
    assert (
        "3.1 Biological Hazards:\n"
        "• Bacterial contamination (high risk)\n"
        "• Viral pathogens (medium risk)\n"
        "• Parasites (low risk)"
    ) in text


def test_recorded_hazards_replace_fallback():
    text = _build(hazards=[
        {"type": "chemical", "description": "Bleach residue", "severity": "high"},
        {"type": "chemical", "description": "Descaler spill", "severity": "medium"},
    ])
    assert "3.2 Chemical Hazards:\n• Bleach residue (Severity: high)\n• Descaler spill (Severity: medium)" in text
    assert "Pesticide residues" not in text
    # Other categories still fall back
    assert "• Glass/metal fragments (high risk)" in text


def test_monitoring_frequency_from_first_celsius_ccp():
    ccps = [
        _ccp("Goods in", unit="visual", frequency="Every delivery"),
        _ccp("Hot holding", unit="celsius", frequency="Every 2 hours"),
        _ccp("Chilling", unit="celsius", frequency="Every 30 minutes"),
    ]
    text = _build(ccps=ccps)
    assert "Temperature Monitoring:\n• Frequency: Every 2 hours\n" in text


def test_monitoring_frequency_fallback():
    assert temperature_check_frequency([_ccp("Goods in", unit="visual")]) == "Per batch"
    assert "• Frequency: Per batch" in _build()


def test_fixed_sections_present():
    text = _build()
    assert "IMMEDIATE ACTIONS:\n1. Stop operation of affected process immediately" in text
    assert "Quarterly:\n• Full HACCP system review" in text
    assert text.endswith("• Available for inspection")


def test_monitoring_frequency_blank_on_celsius_ccp():
    ccp = _ccp("Hot holding", unit="celsius")
    del ccp["check_frequency"]
    assert temperature_check_frequency([ccp]) == "Per batch"
    assert "• Frequency: None" not in _build(ccps=[ccp])
