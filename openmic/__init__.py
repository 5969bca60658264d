"""
OpenMic Python SDK

Python client and workflow nodes for the OpenMic voice-agent API.
Covers bots, outbound phone calls, call records and phone numbers, plus a
call watcher that emits each finished call exactly once.

Example:
    >>> from openmic import OpenMic
    >>> client = OpenMic(api_key="your-api-key")
    >>> call = client.calls.create_phone_call(
    ...     from_number="+14155550100",
    ...     to_number="+14155550123",
    ... )
    >>> client.calls.get(call["call_id"])
"""

__version__ = "1.0.0"
__license__ = "MIT"

from openmic.client import AsyncOpenMic, OpenMic
from openmic.models import Bot, CallRecord, CallStatus, CallType, OptionItem
from openmic.exceptions import (
    OpenMicError,
    ConfigurationError,
    ShapeError,
    TransportError,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    RateLimitError,
    ServerError,
)
from openmic.polling import CallWatcher, PollConfig, PollResult, PollStatus
from openmic.state import (
    WatermarkStore,
    InMemoryWatermarkStore,
    StaticDataWatermarkStore,
    SQLiteWatermarkStore,
)
from openmic.webhooks import parse_call_webhook
from openmic.nodes import OpenMicNode, OpenMicTrigger

__all__ = [
    # Clients
    "OpenMic",
    "AsyncOpenMic",

    # Models
    "Bot",
    "CallRecord",
    "CallStatus",
    "CallType",
    "OptionItem",

    # Exceptions
    "OpenMicError",
    "ConfigurationError",
    "ShapeError",
    "TransportError",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "RateLimitError",
    "ServerError",

    # Call watching
    "CallWatcher",
    "PollConfig",
    "PollResult",
    "PollStatus",
    "WatermarkStore",
    "InMemoryWatermarkStore",
    "StaticDataWatermarkStore",
    "SQLiteWatermarkStore",
    "parse_call_webhook",

    # Nodes
    "OpenMicNode",
    "OpenMicTrigger",
]
