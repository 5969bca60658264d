"""
OpenMic Python SDK - Data Models

This module contains the data models used throughout the SDK.
Models are dataclasses built from raw API dictionaries with ``from_dict``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from openmic.exceptions import ShapeError
from openmic.utils import MAX_EPOCH_MS, MIN_EPOCH_MS, epoch_ms_to_iso, ms_to_seconds


class BaseModel:
    """Base class for all models with common functionality."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return asdict(self)


# =============================================================================
# Enums
# =============================================================================

class CallStatus(str, Enum):
    """Status of a voice call."""
    REGISTERED = "registered"
    ONGOING = "ongoing"
    ENDED = "ended"
    ERROR = "error"
    NOT_CONNECTED = "not_connected"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class CallType(str, Enum):
    """Transport a call was placed over."""
    PHONE_CALL = "phonecall"
    WEB_CALL = "webcall"


# =============================================================================
# Option loaders
# =============================================================================

@dataclass
class OptionItem(BaseModel):
    """A dropdown entry returned by an option loader."""
    name: str
    value: str
    description: Optional[str] = None


# =============================================================================
# Resource Models
# =============================================================================

def _timestamp(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ShapeError(f"{key} must be an integer epoch-millisecond value", response=data)
    if isinstance(value, float):
        if not value.is_integer():
            raise ShapeError(f"{key} must be an integer epoch-millisecond value", response=data)
        value = int(value)
    if not MIN_EPOCH_MS <= value <= MAX_EPOCH_MS:
        raise ShapeError(f"{key} is outside the representable date range", response=data)
    return value


@dataclass
class CallRecord(BaseModel):
    """
    A call as returned by the calls listing.

    Descriptive fields (transcript, analysis, cost, ...) are passed through
    untouched; only the identifiers and timestamps are interpreted.
    """
    call_id: str
    call_status: Optional[str] = None
    start_timestamp: Optional[int] = None
    end_timestamp: Optional[int] = None
    from_number: Optional[str] = None
    to_number: Optional[str] = None
    duration_ms: Optional[float] = None
    agent_id: Optional[str] = None
    customer_id: Optional[str] = None
    call_type: Optional[str] = None
    direction: Optional[str] = None
    transcript: Any = None
    recording_url: Optional[str] = None
    latency: Any = None
    call_analysis: Any = None
    call_cost: Any = None
    dynamic_variables: Any = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CallRecord":
        """Create a CallRecord from an API object, raising ShapeError on bad types."""
        if not isinstance(data, dict):
            raise ShapeError("Call entry is not an object", response=data)

        duration = data.get("duration_ms")
        if duration is not None and (isinstance(duration, bool) or not isinstance(duration, (int, float))):
            raise ShapeError("duration_ms must be numeric", response=data)

        call_id = data.get("call_id")
        if call_id is None or call_id == "" or isinstance(call_id, (bool, dict, list)):
            raise ShapeError("Call entry is missing a call_id", response=data)

        return cls(
            call_id=str(call_id),
            call_status=data.get("call_status"),
            start_timestamp=_timestamp(data, "start_timestamp"),
            end_timestamp=_timestamp(data, "end_timestamp"),
            from_number=data.get("from_number"),
            to_number=data.get("to_number"),
            duration_ms=duration,
            agent_id=data.get("agent_id"),
            customer_id=data.get("customer_id"),
            call_type=data.get("call_type"),
            direction=data.get("direction"),
            transcript=data.get("transcript"),
            recording_url=data.get("recording_url"),
            latency=data.get("latency"),
            call_analysis=data.get("call_analysis"),
            call_cost=data.get("call_cost"),
            dynamic_variables=data.get("dynamic_variables"),
            raw=data,
        )

    @property
    def effective_timestamp(self) -> Optional[int]:
        """End time once the call has concluded, otherwise its start time."""
        if self.end_timestamp is not None:
            return self.end_timestamp
        return self.start_timestamp

    def to_event(self) -> Dict[str, Any]:
        """Normalized event emitted by the trigger for this call."""
        return {
            "id": self.call_id,
            "callStatus": self.call_status,
            "startedAt": epoch_ms_to_iso(self.start_timestamp),
            "endedAt": epoch_ms_to_iso(self.end_timestamp),
            "from": self.from_number,
            "to": self.to_number,
            "duration": ms_to_seconds(self.duration_ms),
            "botId": self.agent_id,
            "customerId": self.customer_id,
            "callType": self.call_type,
            "direction": self.direction,
            "transcript": self.transcript,
            "recordingUrl": self.recording_url,
            "latency": self.latency,
            "callAnalysis": self.call_analysis,
            "callCost": self.call_cost,
            "dynamicVariables": self.dynamic_variables,
        }

    def to_option(self) -> OptionItem:
        return OptionItem(
            name=f"{self.call_id} ({self.call_status})",
            value=self.call_id,
            description=f"{self.from_number} → {self.to_number}",
        )


@dataclass
class Bot(BaseModel):
    """A configured voice agent."""
    uid: str
    name: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bot":
        return cls(uid=str(data.get("uid", "")), name=data.get("name") or "", raw=data)

    def to_option(self) -> OptionItem:
        return OptionItem(name=self.name, value=self.uid, description=f"Agent: {self.name}")
