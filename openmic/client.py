"""
OpenMic Python SDK - Main Client

This module provides the OpenMic client classes that serve as the entry
point for all API interactions. ``OpenMic.request`` is also the fetcher the
call watcher polls through.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import httpx

from openmic import __version__
from openmic.config import API_KEY_ENV, BASE_URL_ENV, ClientConfig, Endpoints, resolve_base_url
from openmic.credentials import OpenMicApiCredentials
from openmic.exceptions import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
)
from openmic.resources.bots import BotsResource
from openmic.resources.calls import CallsResource
from openmic.resources.phone_numbers import PhoneNumbersResource

logger = logging.getLogger("openmic")


def _build_config(
    base_url: Optional[str],
    timeout: float,
    max_retries: int,
    debug: bool,
) -> ClientConfig:
    return ClientConfig(
        base_url=resolve_base_url(base_url or os.environ.get(BASE_URL_ENV)),
        timeout=timeout,
        max_retries=max_retries,
        debug=debug,
    )


def _resolve_credentials(api_key: Optional[str]) -> OpenMicApiCredentials:
    key = api_key or os.environ.get(API_KEY_ENV)
    if not key:
        raise AuthenticationError(
            "API key is required. Provide it as a parameter or set "
            f"the {API_KEY_ENV} environment variable."
        )
    return OpenMicApiCredentials(api_key=key)


def _default_headers(credentials: OpenMicApiCredentials) -> Dict[str, str]:
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": f"openmic-python/{__version__}",
    }
    return credentials.authenticate(headers)


def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not params:
        return None
    return {k: v for k, v in params.items() if v is not None}


def _handle_response(response: httpx.Response) -> Dict[str, Any]:
    """Handle API response and raise appropriate exceptions."""
    logger.debug(f"Response status: {response.status_code}")

    if response.status_code == 204:
        return {}

    if 200 <= response.status_code < 300:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"data": response.text}

    try:
        body: Any = response.json()
    except ValueError:
        body = response.text or None

    if isinstance(body, dict):
        error_message = body.get("detail") or body.get("message") or body.get("error") or str(body)
    else:
        error_message = body or f"HTTP {response.status_code}"
    error_message = str(error_message)

    status = response.status_code
    if status in (401, 403):
        prefix = "Forbidden: " if status == 403 else ""
        raise AuthenticationError(f"{prefix}{error_message}", status_code=status, body=body)
    elif status == 404:
        raise NotFoundError(error_message, status_code=status, body=body)
    elif status in (400, 422):
        field_errors = body.get("errors") if isinstance(body, dict) else None
        raise ValidationError(
            error_message,
            status_code=status,
            body=body,
            field_errors=field_errors if isinstance(field_errors, dict) else None,
        )
    elif status == 429:
        raise RateLimitError(error_message, retry_after=response.headers.get("Retry-After"), body=body)
    elif status >= 500:
        raise ServerError(
            error_message,
            status_code=status,
            body=body,
            request_id=response.headers.get("X-Request-ID"),
        )
    raise TransportError(f"HTTP {status}: {error_message}", status_code=status, body=body)


class OpenMic:
    """
    Main client for interacting with the OpenMic API.

    Args:
        api_key: Your OpenMic API key. If not provided, will look for
            OPENMIC_API_KEY environment variable.
        base_url: The base URL for the API. Defaults to https://api.openmic.ai
        timeout: Request timeout in seconds. Defaults to 30.
        max_retries: Connection retries handed to the httpx transport. Defaults to 0.
        debug: Enable debug logging. Defaults to False.

    Example:
        >>> client = OpenMic(api_key="your-api-key")
        >>> bots = client.bots.list(limit=10)
        >>> call = client.calls.create_phone_call(
        ...     from_number="+14155550100",
        ...     to_number="+14155550123",
        ... )

    Attributes:
        bots: Resource for looking up voice agents
        calls: Resource for call records and outbound phone calls
        phone_numbers: Resource for managing phone numbers
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 0,
        debug: bool = False,
    ) -> None:
        self._credentials = _resolve_credentials(api_key)
        self._config = _build_config(base_url, timeout, max_retries, debug)

        if debug:
            logging.basicConfig(level=logging.DEBUG)
            logger.setLevel(logging.DEBUG)

        self._http_client = self._create_http_client()

        self.bots = BotsResource(self)
        self.calls = CallsResource(self)
        self.phone_numbers = PhoneNumbersResource(self)

        logger.debug(f"OpenMic client initialized with base URL: {self._config.base_url}")

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _create_http_client(self) -> httpx.Client:
        """Create and configure the HTTP client."""
        return httpx.Client(
            base_url=self._config.base_url,
            headers=_default_headers(self._credentials),
            timeout=httpx.Timeout(self._config.timeout),
            transport=httpx.HTTPTransport(retries=self._config.max_retries),
            follow_redirects=True,
        )

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: API endpoint path
            params: Query parameters; None values are dropped
            json: JSON body data

        Returns:
            Response data as dictionary

        Raises:
            AuthenticationError: If authentication fails
            NotFoundError: If resource is not found
            ValidationError: If the API rejects the request
            RateLimitError: If the API answers 429
            ServerError: If server error occurs
            TransportError: For network failures and other HTTP errors
        """
        logger.debug(f"Making {method} request to {path}")
        logger.debug(f"Params: {params}")

        try:
            response = self._http_client.request(
                method=method,
                url=path,
                params=_clean_params(params),
                json=json,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}")
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}")

        return _handle_response(response)

    def whoami(self) -> Dict[str, Any]:
        """Return the account behind the API key; used to test credentials."""
        return self.request("GET", Endpoints.WHOAMI)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._http_client.close()
        logger.debug("OpenMic client closed")

    def __enter__(self) -> "OpenMic":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"OpenMic(base_url='{self._config.base_url}')"


class AsyncOpenMic:
    """
    Async client for the OpenMic API.

    Only the raw ``request`` and ``whoami`` calls are exposed; it exists so
    the call watcher can poll from an event loop.

    Example:
        >>> async with AsyncOpenMic(api_key="your-api-key") as client:
        ...     page = await client.request("GET", "/v1/calls", params={"limit": 10})
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 0,
        debug: bool = False,
    ) -> None:
        self._credentials = _resolve_credentials(api_key)
        self._config = _build_config(base_url, timeout, max_retries, debug)

        if debug:
            logging.basicConfig(level=logging.DEBUG)
            logger.setLevel(logging.DEBUG)

        self._http_client: Optional[httpx.AsyncClient] = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._config.base_url,
                headers=_default_headers(self._credentials),
                timeout=httpx.Timeout(self._config.timeout),
                transport=httpx.AsyncHTTPTransport(retries=self._config.max_retries),
                follow_redirects=True,
            )
        return self._http_client

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make an async HTTP request to the API."""
        client = self._get_client()

        logger.debug(f"Making async {method} request to {path}")

        try:
            response = await client.request(
                method=method,
                url=path,
                params=_clean_params(params),
                json=json,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}")
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}")

        return _handle_response(response)

    async def whoami(self) -> Dict[str, Any]:
        return await self.request("GET", Endpoints.WHOAMI)

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("AsyncOpenMic client closed")

    async def __aenter__(self) -> "AsyncOpenMic":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"AsyncOpenMic(base_url='{self._config.base_url}')"
