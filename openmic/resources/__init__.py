"""
OpenMic Python SDK - Resources

This module contains all API resource classes.
"""

from openmic.resources.base import BaseResource
from openmic.resources.bots import BotsResource
from openmic.resources.calls import CallsResource
from openmic.resources.phone_numbers import PhoneNumbersResource

__all__ = [
    "BaseResource",
    "BotsResource",
    "CallsResource",
    "PhoneNumbersResource",
]
