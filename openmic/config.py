"""
OpenMic Python SDK - Configuration

This module contains configuration classes and defaults for the SDK.
"""

from dataclasses import dataclass
from typing import Optional


API_KEY_ENV = "OPENMIC_API_KEY"
BASE_URL_ENV = "OPENMIC_BASE_URL"


@dataclass
class ClientConfig:
    """
    Configuration for the OpenMic client.

    Attributes:
        base_url: Base URL for the API
        timeout: Request timeout in seconds
        max_retries: Connection retries handed to the transport (0 disables)
        debug: Enable debug logging
    """
    base_url: str = "https://api.openmic.ai"
    timeout: float = 30.0
    max_retries: int = 0
    debug: bool = False


# Default configuration
DEFAULT_CONFIG = ClientConfig()


class Endpoints:
    """API endpoint paths."""

    # Account
    WHOAMI = "/v1/whoami"

    # Bots
    BOTS = "/v1/bots"
    BOT = "/v1/bots/{uid}"

    # Calls
    CALLS = "/v1/calls"
    CALL = "/v1/call/{uid}"
    CREATE_PHONE_CALL = "/v1/create-phone-call"

    # Phone Numbers
    PHONE_NUMBERS = "/v1/phone-numbers"
    PHONE_NUMBER = "/v1/phone-numbers/{phone_number}"


class Limits:
    """API limits and constraints."""

    # Trigger polling
    MIN_POLL_LIMIT = 1
    MAX_POLL_LIMIT = 1000
    DEFAULT_POLL_LIMIT = 50

    # Listing
    DEFAULT_LIST_LIMIT = 20
    DEFAULT_NODE_LIST_LIMIT = 50
    OPTIONS_LIMIT = 100


# Post-call duration is reported in milliseconds
MS_PER_SECOND = 1000


def resolve_base_url(base_url: Optional[str]) -> str:
    """Strip the trailing slash so endpoint paths join cleanly."""
    return (base_url or DEFAULT_CONFIG.base_url).rstrip("/")
