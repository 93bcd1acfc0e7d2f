"""
General helper utilities
"""
import json
from datetime import datetime, timezone
from typing import Any


def safe_json_parse(text: str, default: Any = None) -> Any:
    """Safely parse JSON string"""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return default


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the epoch; naive datetimes are taken as UTC"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def name_from_email(email: str) -> str:
    """Local part of an email address, used as a display name"""
    return email.split("@")[0]
