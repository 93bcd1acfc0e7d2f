"""
Input validation utilities
"""
import re
from typing import Optional

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)$")

FIRST_PLAN_VERSION = "1.0"


class InvalidVersionFormat(ValueError):
    """A stored plan version is not of the form "major.minor" """

    def __init__(self, value):
        super().__init__(f"Invalid version format: {value!r} (expected 'major.minor')")
        self.value = value


def parse_version(value: str) -> tuple[int, int]:
    """Parse "major.minor" into a pair of ints"""
    if not isinstance(value, str):
        raise InvalidVersionFormat(value)
    match = _VERSION_RE.match(value.strip())
    if not match:
        raise InvalidVersionFormat(value)
    return int(match.group(1)), int(match.group(2))


def next_version(latest: Optional[str]) -> str:
    """Version for a new plan: "1.0" for the first one, otherwise bump the minor part"""
    if latest is None:
        return FIRST_PLAN_VERSION
    major, minor = parse_version(latest)
    return f"{major}.{minor + 1}"


def validate_email(value) -> str:
    """Require a non-empty string; returns it stripped"""
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Email is required")
    return value.strip()
