"""
Call watcher: poll-based change detection over the calls listing.

Each poll fetches one page of calls and emits the ones whose effective
timestamp (end time, else start time) is strictly newer than the stored
watermark. The watermark then moves to the newest effective timestamp on the
whole page, never backward.

Example:
    >>> client = OpenMic(api_key="...")
    >>> watcher = CallWatcher(client.request, InMemoryWatermarkStore(), PollConfig(limit=10))
    >>> result = watcher.poll()
    >>> result.status
    <PollStatus.EMITTED: 'emitted'>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union

from openmic.config import Endpoints, Limits
from openmic.exceptions import ConfigurationError, ShapeError
from openmic.models import CallRecord, CallStatus
from openmic.state import WatermarkStore

logger = logging.getLogger(__name__)

Fetcher = Callable[..., Dict[str, Any]]
AsyncFetcher = Callable[..., Awaitable[Dict[str, Any]]]

EMPTY_RESPONSE = "Empty response from API"
INVALID_RESPONSE = "Invalid response structure"


class PollStatus(str, Enum):
    """Outcome of one poll."""
    EMITTED = "emitted"
    NO_NEW_DATA = "no_new_data"
    SHAPE_INVALID = "shape_invalid"


@dataclass
class PollConfig:
    """
    What to poll for.

    Attributes:
        status_filter: Only calls in this status are fetched
        limit: Page size, 1..1000
        bot_id: Only calls handled by this bot
    """
    status_filter: str = CallStatus.ENDED.value
    limit: int = Limits.DEFAULT_POLL_LIMIT
    bot_id: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise ConfigurationError(
                f"Limit must be an integer between {Limits.MIN_POLL_LIMIT} and {Limits.MAX_POLL_LIMIT}",
                field="limit",
            )
        if not Limits.MIN_POLL_LIMIT <= self.limit <= Limits.MAX_POLL_LIMIT:
            raise ConfigurationError(
                f"Limit must be between {Limits.MIN_POLL_LIMIT} and {Limits.MAX_POLL_LIMIT}",
                field="limit",
            )

        status = self.status_filter.value if isinstance(self.status_filter, CallStatus) else self.status_filter
        if status not in CallStatus.values():
            raise ConfigurationError(
                f"Unknown call status {status!r}; expected one of {', '.join(CallStatus.values())}",
                field="callStatus",
            )
        self.status_filter = status
        self.bot_id = self.bot_id or None

    @classmethod
    def from_parameters(cls, parameters: Dict[str, Any]) -> "PollConfig":
        """Build from resolved trigger parameters (``callStatus``, ``limit``, ``bot_id``)."""
        limit = parameters.get("limit", Limits.DEFAULT_POLL_LIMIT)
        if isinstance(limit, float) and limit.is_integer():
            limit = int(limit)
        return cls(
            status_filter=parameters.get("callStatus", CallStatus.ENDED.value),
            limit=limit,
            bot_id=parameters.get("bot_id"),
        )

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"limit": self.limit, "call_status": self.status_filter}
        if self.bot_id:
            params["bot_id"] = self.bot_id
        return params


@dataclass
class PollResult:
    """
    What one poll produced.

    ``watermark`` is the stored value after the poll. ``diagnostic`` is set
    only for SHAPE_INVALID.
    """
    status: PollStatus
    events: List[Dict[str, Any]] = field(default_factory=list)
    watermark: Optional[int] = None
    diagnostic: Optional[Dict[str, Any]] = None

    @property
    def emitted(self) -> bool:
        return self.status == PollStatus.EMITTED


def parse_call_page(response: Any) -> List[CallRecord]:
    """
    Validate a calls listing and build typed records.

    Raises:
        ShapeError: If the response is empty, has no ``calls`` list or
            holds a malformed call entry
    """
    if not response:
        raise ShapeError(EMPTY_RESPONSE, response=response)
    if not isinstance(response, dict):
        raise ShapeError("Response is not a JSON object", response=response)

    calls = response.get("calls")
    if not isinstance(calls, list):
        raise ShapeError("Response does not contain a valid calls array", response=response)

    return [CallRecord.from_dict(call) for call in calls]


def select_new_calls(
    records: List[CallRecord],
    watermark: Optional[int],
) -> Tuple[List[CallRecord], Optional[int]]:
    """
    Split out the records newer than ``watermark`` and compute the next watermark.

    A record equal to the watermark has already been delivered. Records with
    no timestamp at all are only new before the first watermark exists.
    """
    new_records = []
    for record in records:
        ts = record.effective_timestamp
        if watermark is None or (ts is not None and ts > watermark):
            new_records.append(record)

    timestamps = [r.effective_timestamp for r in records if r.effective_timestamp is not None]
    new_watermark = watermark
    if timestamps:
        page_max = max(timestamps)
        new_watermark = page_max if watermark is None else max(watermark, page_max)

    return new_records, new_watermark


def shape_diagnostic(error: ShapeError) -> Dict[str, Any]:
    """The JSON item handed to the host in place of events when a page is malformed."""
    if error.message == EMPTY_RESPONSE:
        return {
            "_error": True,
            "error": EMPTY_RESPONSE,
            "message": "The API returned an empty response",
            "response": error.response,
        }
    return {
        "_error": True,
        "error": INVALID_RESPONSE,
        "message": error.message,
        "response": error.response,
    }


class CallWatcher:
    """
    Runs polls against a fetcher and a watermark store.

    Args:
        fetcher: ``OpenMic.request`` or anything with the same signature
            (``AsyncOpenMic.request`` for ``poll_async``)
        store: Where the watermark lives between polls
        config: What to poll for

    Transport and configuration errors propagate; the watermark is left
    untouched when they do.
    """

    def __init__(
        self,
        fetcher: Union[Fetcher, AsyncFetcher],
        store: WatermarkStore,
        config: Optional[PollConfig] = None,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.config = config or PollConfig()

    def poll(self) -> PollResult:
        watermark = self.store.read()
        logger.debug(f"Polling calls with {self.config.to_params()} (watermark={watermark})")
        response = self.fetcher("GET", Endpoints.CALLS, params=self.config.to_params())
        return self._evaluate(response, watermark)

    async def poll_async(self) -> PollResult:
        watermark = self.store.read()
        logger.debug(f"Polling calls with {self.config.to_params()} (watermark={watermark})")
        response = await self.fetcher("GET", Endpoints.CALLS, params=self.config.to_params())
        return self._evaluate(response, watermark)

    def _evaluate(self, response: Any, watermark: Optional[int]) -> PollResult:
        try:
            records = parse_call_page(response)
        except ShapeError as e:
            logger.warning(f"Invalid calls response: {e.message}")
            return PollResult(
                status=PollStatus.SHAPE_INVALID,
                watermark=watermark,
                diagnostic=shape_diagnostic(e),
            )

        new_records, new_watermark = select_new_calls(records, watermark)
        # Watermark is written only after every event has been built
        events = [record.to_event() for record in new_records]
        if new_watermark is not None and new_watermark != watermark:
            self.store.write(new_watermark)
            logger.debug(f"Watermark advanced {watermark} -> {new_watermark}")

        if not new_records:
            logger.debug(f"No new calls among {len(records)} fetched")
            return PollResult(status=PollStatus.NO_NEW_DATA, watermark=new_watermark)

        logger.info(f"Emitting {len(new_records)} new call(s)")
        return PollResult(
            status=PollStatus.EMITTED,
            events=events,
            watermark=new_watermark,
        )
