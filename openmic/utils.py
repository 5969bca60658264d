"""Small helpers shared by the resources and the nodes."""

import json
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from openmic.config import MS_PER_SECOND
from openmic.exceptions import ConfigurationError

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Range of epoch milliseconds a datetime can represent
MIN_EPOCH_MS = (datetime.min.replace(tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1)
MAX_EPOCH_MS = (datetime.max.replace(tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1)


def validate_e164_number(number: Optional[str]) -> bool:
    """Return True when ``number`` looks like +<country><subscriber>, max 15 digits."""
    if not isinstance(number, str):
        return False
    return bool(E164_PATTERN.match(number.strip()))


def require_e164(number: Optional[str], field: str, label: str) -> str:
    """Validate an E.164 number or raise ConfigurationError naming the field."""
    if not validate_e164_number(number):
        raise ConfigurationError(
            f"Invalid phone number format for {label}. "
            "Must be in E.164 format (e.g., +14157774444)",
            field=field,
        )
    return number.strip()


def epoch_ms_to_iso(value: Optional[int]) -> Optional[str]:
    """
    Render epoch milliseconds as an ISO-8601 UTC string.

    Example:
        >>> epoch_ms_to_iso(1704067200000)
        '2024-01-01T00:00:00.000Z'
    """
    if value is None:
        return None
    moment = _EPOCH + timedelta(milliseconds=value)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def ms_to_seconds(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return value / MS_PER_SECOND


def parse_json_param(value: Any, field: str) -> Dict[str, Any]:
    """Accept a dict or a JSON object string (as the host hands json fields over)."""
    if value is None or value == "":
        return {}
    if isinstance(value, dict):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{field} must be valid JSON: {e}", field=field)
        if not isinstance(parsed, dict):
            raise ConfigurationError(f"{field} must be a JSON object", field=field)
        return parsed
    raise ConfigurationError(f"{field} must be a JSON object", field=field)


def drop_empty(values: Dict[str, Any]) -> Dict[str, Any]:
    """Remove None and empty-string entries so they are not sent to the API."""
    return {k: v for k, v in values.items() if v is not None and v != ""}
