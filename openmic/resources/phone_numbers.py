"""
OpenMic Python SDK - Phone Numbers Resource

This module provides methods for managing phone numbers.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from openmic.config import Endpoints, Limits
from openmic.exceptions import ConfigurationError
from openmic.resources.base import BaseResource
from openmic.utils import drop_empty, require_e164


def _area_code(value: Union[int, str, None], required: bool = True) -> Optional[int]:
    if value is None or value == "":
        if required:
            raise ConfigurationError("Area code is required", field="area_code")
        return None
    try:
        code = int(value)
    except (TypeError, ValueError):
        code = -1
    if isinstance(value, bool) or str(value).strip() != str(code) or not 100 <= code <= 999:
        raise ConfigurationError(
            f"Area code must be a 3 digit integer, got {value!r}", field="area_code"
        )
    return code


class PhoneNumbersResource(BaseResource):
    """
    Resource for managing phone numbers.

    Phone numbers are addressed by the number itself in E.164 format.

    Example:
        >>> client = OpenMic(api_key="...")
        >>> number = client.phone_numbers.create(area_code=415, nickname="Support")
        >>> client.phone_numbers.update(number["phone_number"], inbound_agent_id="bot_123")
    """

    def create(
        self,
        area_code: Union[int, str],
        inbound_agent_id: Optional[str] = None,
        outbound_agent_id: Optional[str] = None,
        nickname: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Obtain a new phone number.

        Args:
            area_code: Area code of the number to obtain (3 digit integer)
            inbound_agent_id: Agent to handle inbound calls
            outbound_agent_id: Agent to handle outbound calls
            nickname: Nickname for the phone number

        Raises:
            ConfigurationError: If the area code is not a 3 digit integer
        """
        data: Dict[str, Any] = {"area_code": _area_code(area_code)}
        data.update(drop_empty({
            "inbound_agent_id": inbound_agent_id,
            "outbound_agent_id": outbound_agent_id,
            "nickname": nickname,
        }))
        return self._post(Endpoints.PHONE_NUMBERS, json=data)

    def get(self, phone_number: str) -> Dict[str, Any]:
        """Get a phone number."""
        number = require_e164(phone_number, "phone_number", "Phone Number")
        return self._get(Endpoints.PHONE_NUMBER.format(phone_number=number))

    def list(
        self,
        return_all: bool = False,
        limit: Optional[int] = Limits.DEFAULT_NODE_LIST_LIMIT,
        area_code: Union[int, str, None] = None,
        inbound_agent_id: Optional[str] = None,
        outbound_agent_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List phone numbers.

        Args:
            return_all: Return every number; ``limit`` is ignored
            limit: Max number of results to return
            area_code: Filter by area code
            inbound_agent_id: Filter by inbound agent
            outbound_agent_id: Filter by outbound agent
        """
        params = drop_empty({
            "limit": None if return_all else limit,
            "area_code": _area_code(area_code, required=False),
            "inbound_agent_id": inbound_agent_id,
            "outbound_agent_id": outbound_agent_id,
        })
        return self._get(Endpoints.PHONE_NUMBERS, params=params)

    def update(
        self,
        phone_number: str,
        inbound_agent_id: Optional[str] = None,
        outbound_agent_id: Optional[str] = None,
        nickname: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Update a phone number's agents or nickname.

        Only the fields given are sent.
        """
        number = require_e164(phone_number, "phone_number", "Phone Number")
        data = drop_empty({
            "inbound_agent_id": inbound_agent_id,
            "outbound_agent_id": outbound_agent_id,
            "nickname": nickname,
        })
        return self._patch(Endpoints.PHONE_NUMBER.format(phone_number=number), json=data)

    def delete(self, phone_number: str) -> Dict[str, Any]:
        """Release a phone number."""
        number = require_e164(phone_number, "phone_number", "Phone Number")
        return self._delete(Endpoints.PHONE_NUMBER.format(phone_number=number))
