"""Tests for the action and trigger node definitions."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import call_page, make_call
from openmic.credentials import OpenMicApiCredentials
from openmic.exceptions import ConfigurationError, NotFoundError, TransportError
from openmic.models import OptionItem
from openmic.nodes import OpenMicNode, OpenMicTrigger
from openmic.state import StaticDataWatermarkStore


class TestNodeDescription:
    """Tests for the declarative schema."""

    def test_action_description(self):
        data = OpenMicNode.description.to_dict()

        assert data["name"] == "openMicAi"
        assert data["usableAsTool"] is True
        assert data["credentials"] == [{"name": "openMicApi", "required": True}]
        resource = data["properties"][0]
        assert [o["value"] for o in resource["options"]] == ["phoneCall", "bot", "call", "phoneNumber"]

    def test_collection_fields_render_as_options(self):
        prop = OpenMicNode.description.get_property(
            "additionalFields", {"resource": "phoneCall", "operation": "create"}
        )
        names = [field["name"] for field in prop.to_dict()["options"]]
        assert names == ["override_agent_id", "customer_id", "dynamic_variables", "callback_url"]

    def test_visibility_follows_resource_and_operation(self):
        description = OpenMicNode.description
        params = {"resource": "bot", "operation": "getAll"}

        names = [p.name for p in description.visible_properties(params)]

        assert "name" in names
        assert "uid" not in names
        assert "from_number" not in names

    def test_resolve_fills_defaults(self):
        resolved = OpenMicNode.description.resolve({"resource": "call"})

        assert resolved["operation"] == "get"
        assert resolved["uid"] == ""
        assert "call_status" not in resolved

        resolved = OpenMicNode.description.resolve({"resource": "call", "operation": "getAll"})
        assert resolved["limit"] == 50
        assert resolved["call_status"] == "registered"
        assert resolved["call_type"] == "phonecall"

    def test_phone_number_limit_hidden_when_returning_all(self):
        resolved = OpenMicNode.description.resolve(
            {"resource": "phoneNumber", "operation": "getAll", "returnAll": True}
        )
        assert "limit" not in resolved

    def test_trigger_description(self):
        data = OpenMicTrigger.description.to_dict()

        assert data["polling"] is True
        assert data["inputs"] == []
        limit = next(p for p in data["properties"] if p["name"] == "limit")
        assert limit["typeOptions"] == {"minValue": 1, "maxValue": 1000}
        assert limit["default"] == 50
        status = next(p for p in data["properties"] if p["name"] == "callStatus")
        assert status["default"] == "ended"
        assert len(status["options"]) == 5


class TestCredentials:
    """Tests for the credential type."""

    def test_authenticate(self):
        creds = OpenMicApiCredentials.from_parameters({"apiKey": "om_123"})
        assert creds.authenticate({"Accept": "application/json"}) == {
            "Accept": "application/json",
            "Authorization": "Bearer om_123",
        }
        assert "om_123" not in repr(creds)

    def test_describe(self):
        data = OpenMicApiCredentials.describe()
        assert data["name"] == "openMicApi"
        assert data["test"]["request"] == {"method": "GET", "url": "/v1/whoami"}
        assert data["properties"][0]["typeOptions"] == {"password": True}


class TestOpenMicNodeExecute:
    """Tests for OpenMicNode.execute."""

    def test_create_phone_call(self, mock_client):
        mock_client.calls.create_phone_call.return_value = {"call_id": "call_1"}
        items = [{
            "resource": "phoneCall",
            "from_number": "+14155550100",
            "to_number": "+14155550123",
            "additionalFields": {"customer_id": "cust_1", "dynamic_variables": '{"a": 1}'},
        }]

        result = OpenMicNode().execute(mock_client, items)

        assert result == [{"json": {"call_id": "call_1"}, "pairedItem": {"item": 0}}]
        mock_client.calls.create_phone_call.assert_called_once_with(
            from_number="+14155550100",
            to_number="+14155550123",
            override_agent_id=None,
            customer_id="cust_1",
            dynamic_variables='{"a": 1}',
            callback_url=None,
        )

    def test_items_are_paired_by_index(self, mock_client):
        mock_client.bots.get.side_effect = lambda uid: {"uid": uid}
        items = [{"resource": "bot", "operation": "get", "uid": f"bot_{i}"} for i in range(3)]

        result = OpenMicNode().execute(mock_client, items)

        assert [r["pairedItem"]["item"] for r in result] == [0, 1, 2]
        assert [r["json"]["uid"] for r in result] == ["bot_0", "bot_1", "bot_2"]

    def test_list_calls_passes_defaults(self, mock_client):
        mock_client.calls.list.return_value = {"calls": []}

        OpenMicNode().execute(mock_client, [{"resource": "call", "operation": "getAll", "bot_id": "bot_1"}])

        kwargs = mock_client.calls.list.call_args.kwargs
        assert kwargs["limit"] == 50
        assert kwargs["bot_id"] == "bot_1"
        assert kwargs["call_status"] == "registered"

    def test_phone_number_operations(self, mock_client):
        node = OpenMicNode()
        node.execute(mock_client, [
            {"resource": "phoneNumber", "operation": "create", "areaCode": 415,
             "additionalFields": {"nickname": "Support"}},
            {"resource": "phoneNumber", "operation": "update", "phoneNumber": "+14155551234",
             "updateFields": {"inboundAgentId": "bot_2"}},
            {"resource": "phoneNumber", "operation": "getAll", "returnAll": True,
             "filters": {"areaCode": 415}},
            {"resource": "phoneNumber", "operation": "delete", "phoneNumber": "+14155551234"},
        ])

        mock_client.phone_numbers.create.assert_called_once_with(
            area_code=415, inbound_agent_id=None, outbound_agent_id=None, nickname="Support"
        )
        mock_client.phone_numbers.update.assert_called_once_with(
            "+14155551234", inbound_agent_id="bot_2", outbound_agent_id=None, nickname=None
        )
        assert mock_client.phone_numbers.list.call_args.kwargs["return_all"] is True
        assert mock_client.phone_numbers.list.call_args.kwargs["area_code"] == 415
        mock_client.phone_numbers.delete.assert_called_once_with("+14155551234")

    def test_unknown_operation(self, mock_client):
        with pytest.raises(ConfigurationError):
            OpenMicNode().execute(mock_client, [{"resource": "bot", "operation": "delete"}])

    def test_missing_uid(self, mock_client):
        with pytest.raises(ConfigurationError):
            OpenMicNode().execute(mock_client, [{"resource": "call", "operation": "get"}])
        mock_client.calls.get.assert_not_called()

    def test_error_raised_without_continue_on_fail(self, mock_client):
        mock_client.bots.get.side_effect = NotFoundError("Bot not found")

        with pytest.raises(NotFoundError):
            OpenMicNode().execute(mock_client, [{"resource": "bot", "uid": "missing"}])

    def test_continue_on_fail(self, mock_client):
        mock_client.bots.get.side_effect = [NotFoundError("Bot not found"), {"uid": "bot_2"}]
        items = [{"resource": "bot", "uid": "missing"}, {"resource": "bot", "uid": "bot_2"}]

        result = OpenMicNode().execute(mock_client, items, continue_on_fail=True)

        assert result == [
            {"json": {"error": "Bot not found"}, "pairedItem": {"item": 0}},
            {"json": {"uid": "bot_2"}, "pairedItem": {"item": 1}},
        ]

    def test_load_options(self, mock_client):
        mock_client.bots.options.return_value = [OptionItem(name="Sales", value="bot_1", description="Agent: Sales")]

        options = OpenMicNode().load_options("getBots", mock_client)

        assert options == [{"name": "Sales", "value": "bot_1", "description": "Agent: Sales"}]
        with pytest.raises(ConfigurationError):
            OpenMicNode().load_options("getWidgets", mock_client)


class TestOpenMicTrigger:
    """Tests for OpenMicTrigger.poll."""

    def test_emits_new_calls(self, mock_client):
        mock_client.request.return_value = call_page(make_call("a", end_timestamp=2000))
        static_data = {"lastSeenTimestamp": 1000}

        output = OpenMicTrigger().poll(mock_client, {}, StaticDataWatermarkStore(static_data))

        assert [event["id"] for event in output[0]] == ["a"]
        assert static_data["lastSeenTimestamp"] == 2000
        mock_client.request.assert_called_once_with(
            "GET", "/v1/calls", params={"limit": 50, "call_status": "ended"}
        )

    def test_no_new_data_returns_none(self, mock_client):
        mock_client.request.return_value = {"calls": []}

        assert OpenMicTrigger().poll(mock_client, {}, StaticDataWatermarkStore({})) is None

    def test_shape_error_returns_diagnostic(self, mock_client):
        mock_client.request.return_value = {"calls": "not-a-list"}
        static_data = {"lastSeenTimestamp": 5}

        output = OpenMicTrigger().poll(mock_client, {}, StaticDataWatermarkStore(static_data))

        assert output[0][0]["_error"] is True
        assert output[0][0]["error"] == "Invalid response structure"
        assert static_data == {"lastSeenTimestamp": 5}

    @pytest.mark.parametrize("limit", [0, 5000])
    def test_bad_limit_fails_before_fetch(self, mock_client, limit):
        with pytest.raises(ConfigurationError):
            OpenMicTrigger().poll(mock_client, {"limit": limit}, StaticDataWatermarkStore({}))
        mock_client.request.assert_not_called()

    def test_transport_error_propagates(self, mock_client):
        mock_client.request.side_effect = TransportError("Request failed: connection refused")
        static_data = {"lastSeenTimestamp": 5}

        with pytest.raises(TransportError):
            OpenMicTrigger().poll(mock_client, {}, StaticDataWatermarkStore(static_data))
        assert static_data == {"lastSeenTimestamp": 5}

    def test_unknown_trigger(self, mock_client):
        with pytest.raises(ConfigurationError):
            OpenMicTrigger().poll(mock_client, {"trigger": "watchBots"}, StaticDataWatermarkStore({}))

    @pytest.mark.asyncio
    async def test_poll_async(self):
        client = MagicMock()
        client.request = AsyncMock(return_value=call_page(make_call("x", end_timestamp=10)))

        output = await OpenMicTrigger().poll_async(client, {"bot_id": "bot_1"}, StaticDataWatermarkStore({}))

        assert output[0][0]["id"] == "x"
        assert client.request.await_args.kwargs["params"]["bot_id"] == "bot_1"

    def test_webhook(self):
        output = OpenMicTrigger().webhook({"event": "call_ended", "call": make_call("w1", end_timestamp=1)})
        assert output[0][0]["id"] == "w1"
        assert output[0][0]["event"] == "call_ended"
