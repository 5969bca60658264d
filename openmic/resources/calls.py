"""
OpenMic Python SDK - Calls Resource

This module provides methods for call records and outbound phone calls.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from openmic.config import Endpoints, Limits
from openmic.models import CallRecord, OptionItem
from openmic.resources.base import BaseResource
from openmic.utils import drop_empty, parse_json_param, require_e164


class CallsResource(BaseResource):
    """
    Resource for calls.

    Example:
        >>> client = OpenMic(api_key="...")
        >>> call = client.calls.create_phone_call(
        ...     from_number="+14155550100",
        ...     to_number="+14155550123",
        ...     dynamic_variables={"customer_name": "Ada"},
        ... )
        >>> record = client.calls.get(call["call_id"])
    """

    def get(self, uid: str) -> Dict[str, Any]:
        """
        Get a call by its UID.

        Raises:
            NotFoundError: If the call doesn't exist
        """
        path = Endpoints.CALL.format(uid=uid)
        return self._get(path)

    def list(
        self,
        limit: Optional[int] = Limits.DEFAULT_LIST_LIMIT,
        customer_id: Optional[str] = None,
        from_number: Optional[str] = None,
        to_number: Optional[str] = None,
        bot_id: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        call_status: Optional[str] = None,
        call_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List calls.

        Args:
            limit: Max number of results to return
            customer_id: Filter by customer ID
            from_number: Filter by originating number (E.164)
            to_number: Filter by destination number (E.164)
            bot_id: Filter by bot
            from_date: Calls from this date (ISO format)
            to_date: Calls up to this date (ISO format)
            call_status: registered, ongoing, ended, error or not_connected
            call_type: phonecall or webcall

        Returns:
            The raw listing, calls under the ``calls`` key
        """
        params = drop_empty({
            "limit": limit or None,
            "customer_id": customer_id,
            "from_number": from_number,
            "to_number": to_number,
            "bot_id": bot_id,
            "from_date": from_date,
            "to_date": to_date,
            "call_status": call_status,
            "call_type": call_type,
        })
        return self._get(Endpoints.CALLS, params=params)

    def create_phone_call(
        self,
        from_number: str,
        to_number: str,
        override_agent_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        dynamic_variables: Optional[Union[Dict[str, Any], str]] = None,
        callback_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Place an outbound phone call.

        Args:
            from_number: Number to call from (E.164)
            to_number: Number to call (E.164)
            override_agent_id: Agent UID to use instead of the number's agent
            customer_id: Metadata for per-customer usage tracking
            dynamic_variables: Values for the prompt's variables (dict or JSON string)
            callback_url: Post-call webhook URL

        Raises:
            ConfigurationError: If a number is not E.164 or the variables are not JSON
        """
        data: Dict[str, Any] = {
            "from_number": require_e164(from_number, "from_number", "From Number"),
            "to_number": require_e164(to_number, "to_number", "To Number"),
        }

        variables = parse_json_param(dynamic_variables, "dynamic_variables")
        data.update(drop_empty({
            "override_agent_id": override_agent_id,
            "customer_id": customer_id,
            "callback_url": callback_url,
        }))
        if variables:
            data["dynamic_variables"] = variables

        return self._post(Endpoints.CREATE_PHONE_CALL, json=data)

    def options(self) -> List[OptionItem]:
        """Dropdown entries for picking one of the most recent calls."""
        response = self._get(Endpoints.CALLS, params={"limit": Limits.OPTIONS_LIMIT})
        calls = response.get("calls") if isinstance(response, dict) else None
        if not isinstance(calls, list):
            return []
        return [CallRecord.from_dict(call).to_option() for call in calls if isinstance(call, dict)]
