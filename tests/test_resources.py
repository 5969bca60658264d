"""Tests for the bots, calls and phone numbers resources."""

import json

import httpx
import pytest
import respx

from conftest import TEST_BASE_URL, make_call
from openmic.exceptions import ConfigurationError
from openmic.models import OptionItem


class TestBotsResource:
    """Tests for client.bots."""

    def test_get(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            mock.get("/v1/bots/bot_1").mock(return_value=httpx.Response(200, json={"uid": "bot_1"}))
            assert client.bots.get("bot_1") == {"uid": "bot_1"}

    def test_list_sends_only_given_filters(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.get("/v1/bots").mock(return_value=httpx.Response(200, json={"bots": []}))
            client.bots.list(name="Sales", created_before="")

        params = dict(route.calls.last.request.url.params)
        assert params == {"limit": "20", "name": "Sales"}

    def test_options(self, client):
        bots = [{"uid": "bot_1", "name": "Sales"}, {"uid": "bot_2", "name": "Support"}]
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.get("/v1/bots").mock(return_value=httpx.Response(200, json={"bots": bots}))
            options = client.bots.options()

        assert route.calls.last.request.url.params["limit"] == "100"
        assert options == [
            OptionItem(name="Sales", value="bot_1", description="Agent: Sales"),
            OptionItem(name="Support", value="bot_2", description="Agent: Support"),
        ]

    @pytest.mark.parametrize("body", [{}, {"bots": None}, {"bots": "x"}])
    def test_options_without_list(self, client, body):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            mock.get("/v1/bots").mock(return_value=httpx.Response(200, json=body))
            assert client.bots.options() == []


class TestCallsResource:
    """Tests for client.calls."""

    def test_get_uses_singular_path(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.get("/v1/call/call_1").mock(return_value=httpx.Response(200, json={"call_id": "call_1"}))
            client.calls.get("call_1")
        assert route.called

    def test_list_filters(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.get("/v1/calls").mock(return_value=httpx.Response(200, json={"calls": []}))
            client.calls.list(limit=5, bot_id="bot_1", call_status="ended", from_date="", call_type=None)

        params = dict(route.calls.last.request.url.params)
        assert params == {"limit": "5", "bot_id": "bot_1", "call_status": "ended"}

    def test_create_phone_call_minimal(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.post("/v1/create-phone-call").mock(
                return_value=httpx.Response(201, json={"call_id": "call_new"})
            )
            result = client.calls.create_phone_call("+14155550100", "+14155550123")

        assert result == {"call_id": "call_new"}
        assert json.loads(route.calls.last.request.content) == {
            "from_number": "+14155550100",
            "to_number": "+14155550123",
        }

    def test_create_phone_call_optional_fields(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.post("/v1/create-phone-call").mock(return_value=httpx.Response(200, json={}))
            client.calls.create_phone_call(
                "+14155550100",
                "+14155550123",
                override_agent_id="bot_2",
                customer_id="",
                dynamic_variables='{"name": "Ada"}',
                callback_url="https://hooks.example.com/call",
            )

        assert json.loads(route.calls.last.request.content) == {
            "from_number": "+14155550100",
            "to_number": "+14155550123",
            "override_agent_id": "bot_2",
            "dynamic_variables": {"name": "Ada"},
            "callback_url": "https://hooks.example.com/call",
        }

    def test_empty_dynamic_variables_not_sent(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.post("/v1/create-phone-call").mock(return_value=httpx.Response(200, json={}))
            client.calls.create_phone_call("+14155550100", "+14155550123", dynamic_variables="{}")
        assert "dynamic_variables" not in json.loads(route.calls.last.request.content)

    @pytest.mark.parametrize("from_number,to_number,label", [
        ("4155550100", "+14155550123", "From Number"),
        ("+14155550100", "+0123", "To Number"),
        ("+1415555010012345", "+14155550123", "From Number"),
    ])
    def test_create_phone_call_rejects_bad_numbers(self, client, from_number, to_number, label):
        with respx.mock(base_url=TEST_BASE_URL, assert_all_called=False) as mock:
            route = mock.post("/v1/create-phone-call")
            with pytest.raises(ConfigurationError) as exc_info:
                client.calls.create_phone_call(from_number, to_number)
            assert not route.called

        assert f"Invalid phone number format for {label}" in exc_info.value.message

    def test_create_phone_call_rejects_bad_json(self, client):
        with pytest.raises(ConfigurationError):
            client.calls.create_phone_call("+14155550100", "+14155550123", dynamic_variables="{oops")

    def test_options(self, client):
        calls = [make_call("call_1", end_timestamp=1)]
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            mock.get("/v1/calls").mock(return_value=httpx.Response(200, json={"calls": calls}))
            options = client.calls.options()

        assert options == [
            OptionItem(name="call_1 (ended)", value="call_1", description="+14155550100 → +14155550123")
        ]


class TestPhoneNumbersResource:
    """Tests for client.phone_numbers."""

    def test_create(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.post("/v1/phone-numbers").mock(
                return_value=httpx.Response(201, json={"phone_number": "+14155551234"})
            )
            client.phone_numbers.create(area_code="415", nickname="Support")

        assert json.loads(route.calls.last.request.content) == {"area_code": 415, "nickname": "Support"}

    @pytest.mark.parametrize("area_code", [None, "", 41, 4155, "abc", 415.5, True])
    def test_create_rejects_bad_area_code(self, client, area_code):
        with pytest.raises(ConfigurationError):
            client.phone_numbers.create(area_code=area_code)

    def test_get(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.get("/v1/phone-numbers/+14155551234").mock(return_value=httpx.Response(200, json={}))
            client.phone_numbers.get("+14155551234")
        assert route.called

    def test_get_rejects_bad_number(self, client):
        with pytest.raises(ConfigurationError):
            client.phone_numbers.get("415-555-1234")

    def test_list_with_limit(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.get("/v1/phone-numbers").mock(return_value=httpx.Response(200, json={}))
            client.phone_numbers.list(area_code=415, inbound_agent_id="bot_1")

        params = dict(route.calls.last.request.url.params)
        assert params == {"limit": "50", "area_code": "415", "inbound_agent_id": "bot_1"}

    def test_list_return_all_omits_limit(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.get("/v1/phone-numbers").mock(return_value=httpx.Response(200, json={}))
            client.phone_numbers.list(return_all=True, limit=10)

        assert "limit" not in route.calls.last.request.url.params

    def test_update_sends_only_given_fields(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.patch("/v1/phone-numbers/+14155551234").mock(return_value=httpx.Response(200, json={}))
            client.phone_numbers.update("+14155551234", outbound_agent_id="bot_3")

        assert json.loads(route.calls.last.request.content) == {"outbound_agent_id": "bot_3"}

    def test_delete(self, client):
        with respx.mock(base_url=TEST_BASE_URL) as mock:
            route = mock.delete("/v1/phone-numbers/+14155551234").mock(return_value=httpx.Response(204))
            assert client.phone_numbers.delete("+14155551234") == {}
        assert route.called
