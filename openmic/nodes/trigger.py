"""
OpenMic polling trigger node.

Wraps the call watcher in the host's trigger contract: ``poll`` returns a
list holding one list of events, ``None`` when there is nothing new, or a
single diagnostic item when the API answered with a malformed page.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from openmic.config import Limits
from openmic.exceptions import ConfigurationError, OpenMicError
from openmic.models import CallStatus, OptionItem
from openmic.nodes.properties import NodeDescription, NodeProperty, NodePropertyOption
from openmic.polling import CallWatcher, PollConfig, PollResult, PollStatus
from openmic.state import WatermarkStore
from openmic.webhooks import parse_call_webhook

if TYPE_CHECKING:
    from openmic.client import AsyncOpenMic, OpenMic

logger = logging.getLogger(__name__)

WATCH_CALLS = "watchCalls"

_WATCH_CALLS_ONLY = {"trigger": [WATCH_CALLS]}

DESCRIPTION = NodeDescription(
    display_name="OpenMic AI Trigger",
    name="openMicAiTrigger",
    description="Interact with OpenMic AI API Triggers",
    group=["trigger"],
    subtitle="OpenMic AI Trigger",
    polling=True,
    inputs=[],
    properties=[
        NodeProperty(
            display_name="Trigger",
            name="trigger",
            type="options",
            options=[NodePropertyOption(name="Watch Calls", value=WATCH_CALLS)],
            default=WATCH_CALLS,
            description="Select type of trigger",
        ),
        NodeProperty(
            display_name="Bot Name or ID",
            name="bot_id",
            type="options",
            type_options={"loadOptionsMethod": "getBots"},
            description="Choose from the list, or specify an ID using an expression",
            show=_WATCH_CALLS_ONLY,
        ),
        NodeProperty(
            display_name="Call Status",
            name="callStatus",
            type="options",
            options=[
                NodePropertyOption(name="Ended", value=CallStatus.ENDED.value),
                NodePropertyOption(name="Error", value=CallStatus.ERROR.value),
                NodePropertyOption(name="Not Connected", value=CallStatus.NOT_CONNECTED.value),
                NodePropertyOption(name="Ongoing", value=CallStatus.ONGOING.value),
                NodePropertyOption(name="Registered", value=CallStatus.REGISTERED.value),
            ],
            default=CallStatus.ENDED.value,
            description="Only return calls with this status",
            show=_WATCH_CALLS_ONLY,
        ),
        NodeProperty(
            display_name="Limit",
            name="limit",
            type="number",
            type_options={"minValue": Limits.MIN_POLL_LIMIT, "maxValue": Limits.MAX_POLL_LIMIT},
            default=Limits.DEFAULT_POLL_LIMIT,
            description="Max number of results to return",
            show=_WATCH_CALLS_ONLY,
        ),
    ],
)


class OpenMicTrigger:
    """
    The OpenMic trigger node.

    Example:
        >>> trigger = OpenMicTrigger()
        >>> static_data = {}
        >>> trigger.poll(client, {"limit": 10}, StaticDataWatermarkStore(static_data))
        [[{'id': 'call_1', 'callStatus': 'ended', ...}]]
    """

    description = DESCRIPTION

    def get_bots(self, client: "OpenMic") -> List[OptionItem]:
        return client.bots.options()

    def load_options(self, method: str, client: "OpenMic") -> List[Dict[str, Any]]:
        if method != "getBots":
            raise ConfigurationError(f"Unknown option loader {method!r}")
        return [option.to_dict() for option in self.get_bots(client)]

    def _watcher(self, fetcher: Any, parameters: Dict[str, Any], store: WatermarkStore) -> CallWatcher:
        params = self.description.resolve(parameters)
        if params.get("trigger") != WATCH_CALLS:
            raise ConfigurationError(f"Unknown trigger {params.get('trigger')!r}", field="trigger")
        return CallWatcher(fetcher, store, PollConfig.from_parameters(params))

    @staticmethod
    def _to_output(result: PollResult) -> Optional[List[List[Dict[str, Any]]]]:
        if result.status == PollStatus.SHAPE_INVALID:
            return [[result.diagnostic]]
        if result.status == PollStatus.NO_NEW_DATA:
            return None
        return [result.events]

    def poll(
        self,
        client: "OpenMic",
        parameters: Dict[str, Any],
        store: WatermarkStore,
    ) -> Optional[List[List[Dict[str, Any]]]]:
        """
        Run one poll.

        Raises:
            ConfigurationError: For an unknown trigger, bad limit or status
            TransportError: If the calls listing could not be fetched
        """
        try:
            watcher = self._watcher(client.request, parameters, store)
            result = watcher.poll()
        except OpenMicError as e:
            logger.error(f"Call watch failed: {e}")
            raise
        return self._to_output(result)

    async def poll_async(
        self,
        client: "AsyncOpenMic",
        parameters: Dict[str, Any],
        store: WatermarkStore,
    ) -> Optional[List[List[Dict[str, Any]]]]:
        try:
            watcher = self._watcher(client.request, parameters, store)
            result = await watcher.poll_async()
        except OpenMicError as e:
            logger.error(f"Call watch failed: {e}")
            raise
        return self._to_output(result)

    def webhook(self, body: Any) -> List[List[Dict[str, Any]]]:
        """Turn a post-call callback body into the same output a poll would emit."""
        return [[parse_call_webhook(body)]]
