"""
OpenMic action node.

Describes the node's parameters (resource, operation and their fields) and
maps each resolved set of parameters onto one API call through the client's
resources.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from openmic.config import Limits
from openmic.exceptions import ConfigurationError, OpenMicError
from openmic.models import CallStatus, CallType, OptionItem
from openmic.nodes.properties import NodeDescription, NodeProperty, NodePropertyOption

if TYPE_CHECKING:
    from openmic.client import OpenMic

logger = logging.getLogger(__name__)

E164_HINT = "Enter the phone number in E.164 format e.g. +11234567890"
E164_PLACEHOLDER = "+11234567890"
CUSTOMER_ID_HINT = (
    "The Customer ID serves as metadata for identifying and tracking API calls, "
    "enabling per-customer usage monitoring and billing."
)


def _show(resource: str, *operations: str, **extra: List[Any]) -> Dict[str, List[Any]]:
    show: Dict[str, List[Any]] = {"resource": [resource]}
    if operations:
        show["operation"] = list(operations)
    show.update(extra)
    return show


def _operation(resource: str, default: str, *options: NodePropertyOption) -> NodeProperty:
    return NodeProperty(
        display_name="Operation",
        name="operation",
        type="options",
        no_data_expression=True,
        show=_show(resource),
        options=list(options),
        default=default,
    )


RESOURCE = NodeProperty(
    display_name="Resource",
    name="resource",
    type="options",
    no_data_expression=True,
    options=[
        NodePropertyOption(name="Phone Call", value="phoneCall"),
        NodePropertyOption(name="Bot", value="bot"),
        NodePropertyOption(name="Call", value="call"),
        NodePropertyOption(name="Phone Number", value="phoneNumber"),
    ],
    default="phoneCall",
)

# Phone call
PHONE_CALL_PROPERTIES = [
    _operation(
        "phoneCall", "create",
        NodePropertyOption(name="Create a Phone Call", value="create", action="Create a phone call"),
    ),
    NodeProperty(
        display_name="From Number (E.164 Format)",
        name="from_number",
        type="string",
        required=True,
        show=_show("phoneCall", "create"),
        description=E164_HINT,
        placeholder=E164_PLACEHOLDER,
    ),
    NodeProperty(
        display_name="To Number (E.164 Format)",
        name="to_number",
        type="string",
        required=True,
        show=_show("phoneCall", "create"),
        description=E164_HINT,
        placeholder=E164_PLACEHOLDER,
    ),
    NodeProperty(
        display_name="Additional Fields",
        name="additionalFields",
        type="collection",
        placeholder="Add Field",
        default={},
        show=_show("phoneCall", "create"),
        fields=[
            NodeProperty(
                display_name="Override Agent ID",
                name="override_agent_id",
                type="string",
                description="Enter the Agent UID to override the one attached with the number",
            ),
            NodeProperty(
                display_name="Customer ID",
                name="customer_id",
                type="string",
                description=CUSTOMER_ID_HINT,
            ),
            NodeProperty(
                display_name="Dynamic Variables",
                name="dynamic_variables",
                type="json",
                default="{}",
                description="Dynamic variable for mapping to the variables in the prompt",
            ),
            NodeProperty(
                display_name="Callback URL",
                name="callback_url",
                type="string",
                description="Post-call webhook URL",
            ),
        ],
    ),
]

# Bot
BOT_PROPERTIES = [
    _operation(
        "bot", "get",
        NodePropertyOption(name="Find Bot", value="get", action="Find a bot by ID"),
        NodePropertyOption(name="Get Many", value="getAll", action="Get many bots"),
    ),
    NodeProperty(
        display_name="Agent UID",
        name="uid",
        type="string",
        required=True,
        show=_show("bot", "get"),
        description="Enter the agent's UID",
    ),
    NodeProperty(
        display_name="Limit",
        name="limit",
        type="number",
        type_options={"minValue": 1},
        show=_show("bot", "getAll"),
        default=Limits.DEFAULT_NODE_LIST_LIMIT,
        description="Max number of results to return",
    ),
    NodeProperty(
        display_name="Bot Name Filter",
        name="name",
        type="string",
        show=_show("bot", "getAll"),
        description="Filter bots by name",
    ),
    NodeProperty(
        display_name="Created After",
        name="created_after",
        type="dateTime",
        show=_show("bot", "getAll"),
        description="Filter bots created after this date",
    ),
    NodeProperty(
        display_name="Created Before",
        name="created_before",
        type="dateTime",
        show=_show("bot", "getAll"),
        description="Filter bots created before this date",
    ),
]

# Call
CALL_PROPERTIES = [
    _operation(
        "call", "get",
        NodePropertyOption(name="Find Call", value="get", action="Find a call by ID"),
        NodePropertyOption(name="Get Many", value="getAll", action="Get many calls"),
    ),
    NodeProperty(
        display_name="Call Uid",
        name="uid",
        type="string",
        required=True,
        show=_show("call", "get"),
        description="Enter the call uid of the call",
    ),
    NodeProperty(
        display_name="Limit",
        name="limit",
        type="number",
        type_options={"minValue": 1},
        show=_show("call", "getAll"),
        default=Limits.DEFAULT_NODE_LIST_LIMIT,
        description="Max number of results to return",
    ),
    NodeProperty(
        display_name="Customer ID",
        name="customer_id",
        type="string",
        show=_show("call", "getAll"),
        description=CUSTOMER_ID_HINT,
    ),
    NodeProperty(
        display_name="From Number (E.164)",
        name="from_number",
        type="string",
        show=_show("call", "getAll"),
        description=E164_HINT,
        placeholder=E164_PLACEHOLDER,
    ),
    NodeProperty(
        display_name="To Number (E.164)",
        name="to_number",
        type="string",
        show=_show("call", "getAll"),
        description=E164_HINT,
        placeholder=E164_PLACEHOLDER,
    ),
    NodeProperty(
        display_name="Bot ID",
        name="bot_id",
        type="string",
        show=_show("call", "getAll"),
        description="Filter by bot ID",
    ),
    NodeProperty(
        display_name="From Date",
        name="from_date",
        type="dateTime",
        show=_show("call", "getAll"),
        description="Filter calls from this date",
    ),
    NodeProperty(
        display_name="To Date",
        name="to_date",
        type="dateTime",
        show=_show("call", "getAll"),
        description="Filter calls to this date",
    ),
    NodeProperty(
        display_name="Call Status Filter",
        name="call_status",
        type="options",
        show=_show("call", "getAll"),
        options=[
            NodePropertyOption(name="Registered", value=CallStatus.REGISTERED.value),
            NodePropertyOption(name="Ongoing", value=CallStatus.ONGOING.value),
            NodePropertyOption(name="Ended", value=CallStatus.ENDED.value),
            NodePropertyOption(name="Error", value=CallStatus.ERROR.value),
        ],
        default=CallStatus.REGISTERED.value,
        description="Filter by call status",
    ),
    NodeProperty(
        display_name="Call Type Filter",
        name="call_type",
        type="options",
        show=_show("call", "getAll"),
        options=[
            NodePropertyOption(name="Phone Call", value=CallType.PHONE_CALL.value),
            NodePropertyOption(name="Web Call", value=CallType.WEB_CALL.value),
        ],
        default=CallType.PHONE_CALL.value,
        description="Filter by call type",
    ),
]

# Phone number
PHONE_NUMBER_PROPERTIES = [
    _operation(
        "phoneNumber", "create",
        NodePropertyOption(name="Create", value="create", action="Create a phone number"),
        NodePropertyOption(name="Delete", value="delete", action="Delete a phone number"),
        NodePropertyOption(name="Get", value="get", action="Get a phone number"),
        NodePropertyOption(name="Get Many", value="getAll", action="Get many phone numbers"),
        NodePropertyOption(name="Update", value="update", action="Update a phone number"),
    ),
    NodeProperty(
        display_name="Area Code",
        name="areaCode",
        type="number",
        required=True,
        show=_show("phoneNumber", "create"),
        description="Area code of the number to obtain (3 digit integer)",
    ),
    NodeProperty(
        display_name="Additional Fields",
        name="additionalFields",
        type="collection",
        placeholder="Add Field",
        default={},
        show=_show("phoneNumber", "create"),
        fields=[
            NodeProperty(display_name="Inbound Agent", name="inboundAgentId", type="string",
                         description="Agent ID to handle inbound calls"),
            NodeProperty(display_name="Outbound Agent", name="outboundAgentId", type="string",
                         description="Agent ID to handle outbound calls"),
            NodeProperty(display_name="Nickname", name="nickname", type="string",
                         description="Nickname for the phone number"),
        ],
    ),
    NodeProperty(
        display_name="Phone Number",
        name="phoneNumber",
        type="string",
        required=True,
        show=_show("phoneNumber", "get", "delete", "update"),
        description="The phone number in E.164 format (e.g., +14157774444)",
    ),
    NodeProperty(
        display_name="Update Fields",
        name="updateFields",
        type="collection",
        placeholder="Add Field",
        default={},
        show=_show("phoneNumber", "update"),
        fields=[
            NodeProperty(display_name="Inbound Agent", name="inboundAgentId", type="string",
                         description="New agent ID to handle inbound calls"),
            NodeProperty(display_name="Outbound Agent", name="outboundAgentId", type="string",
                         description="New agent ID to handle outbound calls"),
            NodeProperty(display_name="Nickname", name="nickname", type="string",
                         description="New nickname for the phone number"),
        ],
    ),
    NodeProperty(
        display_name="Return All",
        name="returnAll",
        type="boolean",
        show=_show("phoneNumber", "getAll"),
        default=False,
        description="Whether to return all results or only up to a given limit",
    ),
    NodeProperty(
        display_name="Limit",
        name="limit",
        type="number",
        type_options={"minValue": 1},
        show=_show("phoneNumber", "getAll", returnAll=[False]),
        default=Limits.DEFAULT_NODE_LIST_LIMIT,
        description="Max number of results to return",
    ),
    NodeProperty(
        display_name="Filters",
        name="filters",
        type="collection",
        placeholder="Add Filter",
        default={},
        show=_show("phoneNumber", "getAll"),
        fields=[
            NodeProperty(display_name="Area Code", name="areaCode", type="number",
                         description="Filter by area code"),
            NodeProperty(display_name="Inbound Agent ID", name="inboundAgentId", type="string",
                         description="Filter by inbound agent ID"),
            NodeProperty(display_name="Outbound Agent ID", name="outboundAgentId", type="string",
                         description="Filter by outbound agent ID"),
        ],
    ),
]


DESCRIPTION = NodeDescription(
    display_name="OpenMicAI",
    name="openMicAi",
    description="Interact with OpenMicAI API",
    group=["transform"],
    subtitle='={{$parameter["operation"] + ": " + $parameter["resource"]}}',
    usable_as_tool=True,
    properties=[RESOURCE, *PHONE_CALL_PROPERTIES, *BOT_PROPERTIES, *CALL_PROPERTIES, *PHONE_NUMBER_PROPERTIES],
)


def _collection(params: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = params.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"{name} must be an object", field=name)
    return value


def _required(params: Dict[str, Any], name: str) -> Any:
    value = params.get(name)
    if value is None or value == "":
        raise ConfigurationError(f"Parameter {name!r} is required", field=name)
    return value


# Handlers: one per (resource, operation), each returning the raw API response

def create_phone_call(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    extra = _collection(params, "additionalFields")
    return client.calls.create_phone_call(
        from_number=params.get("from_number"),
        to_number=params.get("to_number"),
        override_agent_id=extra.get("override_agent_id"),
        customer_id=extra.get("customer_id"),
        dynamic_variables=extra.get("dynamic_variables"),
        callback_url=extra.get("callback_url"),
    )


def get_bot(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    return client.bots.get(_required(params, "uid"))


def list_bots(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    return client.bots.list(
        limit=params.get("limit", Limits.DEFAULT_LIST_LIMIT),
        name=params.get("name"),
        created_after=params.get("created_after"),
        created_before=params.get("created_before"),
    )


def get_call(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    return client.calls.get(_required(params, "uid"))


def list_calls(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    return client.calls.list(
        limit=params.get("limit", Limits.DEFAULT_LIST_LIMIT),
        customer_id=params.get("customer_id"),
        from_number=params.get("from_number"),
        to_number=params.get("to_number"),
        bot_id=params.get("bot_id"),
        from_date=params.get("from_date"),
        to_date=params.get("to_date"),
        call_status=params.get("call_status"),
        call_type=params.get("call_type"),
    )


def create_phone_number(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    extra = _collection(params, "additionalFields")
    return client.phone_numbers.create(
        area_code=params.get("areaCode"),
        inbound_agent_id=extra.get("inboundAgentId"),
        outbound_agent_id=extra.get("outboundAgentId"),
        nickname=extra.get("nickname"),
    )


def get_phone_number(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    return client.phone_numbers.get(params.get("phoneNumber"))


def list_phone_numbers(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    filters = _collection(params, "filters")
    return client.phone_numbers.list(
        return_all=bool(params.get("returnAll")),
        limit=params.get("limit", Limits.DEFAULT_NODE_LIST_LIMIT),
        area_code=filters.get("areaCode"),
        inbound_agent_id=filters.get("inboundAgentId"),
        outbound_agent_id=filters.get("outboundAgentId"),
    )


def update_phone_number(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    fields = _collection(params, "updateFields")
    return client.phone_numbers.update(
        params.get("phoneNumber"),
        inbound_agent_id=fields.get("inboundAgentId"),
        outbound_agent_id=fields.get("outboundAgentId"),
        nickname=fields.get("nickname"),
    )


def delete_phone_number(client: "OpenMic", params: Dict[str, Any]) -> Dict[str, Any]:
    return client.phone_numbers.delete(params.get("phoneNumber"))


HANDLERS: Dict[tuple, Callable[["OpenMic", Dict[str, Any]], Dict[str, Any]]] = {
    ("phoneCall", "create"): create_phone_call,
    ("bot", "get"): get_bot,
    ("bot", "getAll"): list_bots,
    ("call", "get"): get_call,
    ("call", "getAll"): list_calls,
    ("phoneNumber", "create"): create_phone_number,
    ("phoneNumber", "get"): get_phone_number,
    ("phoneNumber", "getAll"): list_phone_numbers,
    ("phoneNumber", "update"): update_phone_number,
    ("phoneNumber", "delete"): delete_phone_number,
}


class OpenMicNode:
    """
    The OpenMic action node.

    Example:
        >>> node = OpenMicNode()
        >>> node.execute(client, [{"resource": "bot", "operation": "get", "uid": "bot_1"}])
        [{'json': {...}, 'pairedItem': {'item': 0}}]
    """

    description = DESCRIPTION

    def get_bots(self, client: "OpenMic") -> List[OptionItem]:
        return client.bots.options()

    def get_calls(self, client: "OpenMic") -> List[OptionItem]:
        return client.calls.options()

    def load_options(self, method: str, client: "OpenMic") -> List[Dict[str, Any]]:
        """Run the option loader a property names in ``loadOptionsMethod``."""
        loaders = {"getBots": self.get_bots, "getCalls": self.get_calls}
        if method not in loaders:
            raise ConfigurationError(f"Unknown option loader {method!r}")
        return [option.to_dict() for option in loaders[method](client)]

    def run_item(self, client: "OpenMic", parameters: Dict[str, Any]) -> Dict[str, Any]:
        """Resolve one item's parameters and perform its API call."""
        params = self.description.resolve(parameters)
        key = (params.get("resource"), params.get("operation"))
        handler = HANDLERS.get(key)
        if handler is None:
            raise ConfigurationError(
                f"The operation {key[1]!r} is not supported for resource {key[0]!r}",
                field="operation",
            )
        logger.debug(f"Executing {key[0]}.{key[1]}")
        return handler(client, params) or {}

    def execute(
        self,
        client: "OpenMic",
        items: List[Dict[str, Any]],
        continue_on_fail: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Run the node once per input item.

        Args:
            client: Authenticated client
            items: The node parameters as evaluated for each input item
            continue_on_fail: Turn an item's failure into an ``{"error": ...}``
                output instead of aborting the run

        Returns:
            One output per item, each paired with the index of its input
        """
        results: List[Dict[str, Any]] = []
        for index, parameters in enumerate(items):
            try:
                data: Optional[Dict[str, Any]] = self.run_item(client, parameters)
            except OpenMicError as e:
                if not continue_on_fail:
                    raise
                logger.warning(f"Item {index} failed: {e}")
                data = {"error": e.message}
            results.append({"json": data, "pairedItem": {"item": index}})
        return results
