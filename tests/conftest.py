"""Shared pytest fixtures for testing."""

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from openmic import OpenMic
from openmic.config import API_KEY_ENV, BASE_URL_ENV

TEST_API_KEY = "om_test_key_123"
TEST_BASE_URL = "https://api.openmic.test"


def make_call(
    call_id: str,
    end_timestamp: Optional[int] = None,
    start_timestamp: Optional[int] = None,
    **fields: Any,
) -> Dict[str, Any]:
    """Build a call object the way the calls listing returns it."""
    call = {
        "call_id": call_id,
        "call_status": "ended",
        "start_timestamp": start_timestamp,
        "end_timestamp": end_timestamp,
        "from_number": "+14155550100",
        "to_number": "+14155550123",
        "duration_ms": None,
        "agent_id": "bot_1",
    }
    call.update(fields)
    return call


def call_page(*calls: Dict[str, Any]) -> Dict[str, List[Dict[str, Any]]]:
    return {"calls": list(calls)}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own OpenMic settings out of the tests."""
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    monkeypatch.delenv(BASE_URL_ENV, raising=False)


@pytest.fixture
def client():
    """A client pointed at the fake API host."""
    with OpenMic(api_key=TEST_API_KEY, base_url=TEST_BASE_URL) as c:
        yield c


@pytest.fixture
def mock_client():
    """A stand-in client for node tests that don't need HTTP."""
    return MagicMock()
