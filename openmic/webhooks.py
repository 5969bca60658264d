"""
Post-call webhook intake.

OpenMic posts a call object to the ``callback_url`` given when a phone call
is created. The payload is normalized into the same event the call watcher
emits, so workflows can consume either source the same way.
"""

import json
import logging
from typing import Any, Dict, Union

from openmic.exceptions import ShapeError
from openmic.models import CallRecord

logger = logging.getLogger(__name__)


def parse_call_webhook(payload: Union[Dict[str, Any], str, bytes]) -> Dict[str, Any]:
    """
    Turn a post-call callback body into a call event.

    Args:
        payload: The decoded JSON body, or the raw body. Either a bare call
            object or an envelope ``{"event": "...", "call": {...}}``

    Returns:
        The call event, with ``event`` added when the envelope names one

    Raises:
        ShapeError: If the body is not JSON or carries no call object

    Example:
        >>> parse_call_webhook({"event": "call_ended", "call": {"call_id": "c1"}})["id"]
        'c1'
    """
    if isinstance(payload, (bytes, str)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise ShapeError(f"Webhook body is not valid JSON: {e}", response=payload)

    if not isinstance(payload, dict) or not payload:
        raise ShapeError("Webhook body must be a non-empty JSON object", response=payload)

    event_name = payload.get("event")
    call = payload.get("call") if "call" in payload else payload
    if not isinstance(call, dict) or "call_id" not in call:
        raise ShapeError("Webhook body does not contain a call object", response=payload)

    event = CallRecord.from_dict(call).to_event()
    if event_name:
        event["event"] = event_name

    logger.debug(f"Received webhook for call {event['id']}")
    return event
