"""
CSV export of already-fetched records
"""
import csv
import io
from typing import Any, Dict, Iterable

REPORT_COLUMNS = [
    ("report_id", "Report ID"),
    ("report_type", "Type"),
    ("location_id", "Location"),
    ("staff_name", "Staff"),
    ("staff_email", "Staff Email"),
    ("report_date", "Date"),
    ("completion_percentage", "Completion %"),
    ("status", "Status"),
    ("source_entity_type", "Source Type"),
    ("source_entity_id", "Source ID"),
]


def operation_reports_to_csv(reports: Iterable[Dict[str, Any]]) -> str:
    """Header row plus one row per operation report; missing values are blank"""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([label for _, label in REPORT_COLUMNS])
    for report in reports:
        writer.writerow([
            "" if report.get(key) is None else report.get(key)
            for key, _ in REPORT_COLUMNS
        ])
    return buffer.getvalue()
