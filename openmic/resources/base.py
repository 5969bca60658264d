"""
OpenMic Python SDK - Base Resource

This module contains the base class for all API resources.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from openmic.client import OpenMic


class BaseResource:
    """
    Base class for all API resources.

    Provides common functionality for making API requests.
    """

    def __init__(self, client: "OpenMic") -> None:
        """
        Initialize the resource.

        Args:
            client: The OpenMic client instance
        """
        self._client = client

    def _get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make a GET request."""
        return self._client.request("GET", path, params=params)

    def _post(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make a POST request."""
        return self._client.request("POST", path, json=json)

    def _patch(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make a PATCH request."""
        return self._client.request("PATCH", path, json=json)

    def _delete(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make a DELETE request."""
        return self._client.request("DELETE", path, params=params)
