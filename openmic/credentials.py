"""OpenMic API credential type: the form the host shows and how it is applied."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from openmic.config import Endpoints
from openmic.nodes.properties import NodeProperty


CREDENTIAL_NAME = "openMicApi"
DOCUMENTATION_URL = "https://docs.openmic.ai"

CREDENTIAL_PROPERTIES: List[NodeProperty] = [
    NodeProperty(
        display_name="API Key",
        name="apiKey",
        type="string",
        required=True,
        description="Your OpenMic API key",
        type_options={"password": True},
    ),
]


@dataclass
class OpenMicApiCredentials:
    """
    Bearer-token credentials for the OpenMic API.

    Example:
        >>> creds = OpenMicApiCredentials(api_key="om_live_123")
        >>> creds.authenticate({})
        {'Authorization': 'Bearer om_live_123'}
    """
    api_key: str

    name = CREDENTIAL_NAME
    display_name = "OpenMic API"

    @classmethod
    def from_parameters(cls, data: Dict[str, Any]) -> "OpenMicApiCredentials":
        return cls(api_key=data.get("apiKey", ""))

    def authenticate(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Return a copy of ``headers`` with the bearer token injected."""
        authenticated = dict(headers)
        authenticated["Authorization"] = f"Bearer {self.api_key}"
        return authenticated

    @staticmethod
    def test_request() -> Dict[str, str]:
        """The request the host sends to check that a key works."""
        return {"method": "GET", "url": Endpoints.WHOAMI}

    @classmethod
    def describe(cls) -> Dict[str, Any]:
        return {
            "name": cls.name,
            "displayName": cls.display_name,
            "documentationUrl": DOCUMENTATION_URL,
            "properties": [prop.to_dict() for prop in CREDENTIAL_PROPERTIES],
            "authenticate": {
                "type": "generic",
                "properties": {"headers": {"Authorization": "=Bearer {{$credentials.apiKey}}"}},
            },
            "test": {"request": cls.test_request()},
        }

    def __repr__(self) -> str:
        return "OpenMicApiCredentials(api_key='***')"
