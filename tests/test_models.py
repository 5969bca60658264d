"""Tests for models and shared helpers."""

import pytest

from openmic.exceptions import ConfigurationError, ShapeError
from openmic.models import Bot, CallRecord, CallStatus
from openmic.utils import (
    drop_empty,
    epoch_ms_to_iso,
    ms_to_seconds,
    parse_json_param,
    validate_e164_number,
)


class TestCallRecord:
    """Tests for CallRecord."""

    def test_from_dict_keeps_raw(self):
        data = {"call_id": "c1", "end_timestamp": 5, "extra": "kept"}
        record = CallRecord.from_dict(data)
        assert record.raw is data
        assert record.effective_timestamp == 5

    def test_integral_float_timestamp(self):
        assert CallRecord.from_dict({"call_id": "c1", "start_timestamp": 10.0}).start_timestamp == 10

    @pytest.mark.parametrize("data", [
        {"call_id": "c1", "end_timestamp": 10.5},
        {"call_id": "c1", "start_timestamp": True},
        {"call_id": "c1", "duration_ms": "long"},
        {"call_id": "c1", "end_timestamp": 10**15},
        {"call_id": "c1", "start_timestamp": -(10**15)},
        {"end_timestamp": 5},
        {"call_id": "", "end_timestamp": 5},
        {"call_id": None, "end_timestamp": 5},
    ])
    def test_bad_types(self, data):
        with pytest.raises(ShapeError):
            CallRecord.from_dict(data)

    def test_epoch_zero(self):
        event = CallRecord.from_dict({"call_id": "c1", "start_timestamp": 0}).to_event()
        assert event["startedAt"] == "1970-01-01T00:00:00.000Z"

    def test_call_status_values(self):
        assert CallStatus.values() == ["registered", "ongoing", "ended", "error", "not_connected"]


class TestBot:
    """Tests for Bot."""

    def test_to_option(self):
        option = Bot.from_dict({"uid": "bot_1", "name": "Sales"}).to_option()
        assert option.to_dict() == {"name": "Sales", "value": "bot_1", "description": "Agent: Sales"}


class TestUtils:
    """Tests for helper functions."""

    @pytest.mark.parametrize("number,valid", [
        ("+14157774444", True),
        ("+442071838750", True),
        ("14157774444", False),
        ("+0157774444", False),
        ("+1", False),
        ("+1234567890123456", False),
        (None, False),
    ])
    def test_validate_e164(self, number, valid):
        assert validate_e164_number(number) is valid

    def test_epoch_ms_to_iso(self):
        assert epoch_ms_to_iso(1704067200123) == "2024-01-01T00:00:00.123Z"
        assert epoch_ms_to_iso(None) is None

    def test_ms_to_seconds(self):
        assert ms_to_seconds(2500) == 2.5
        assert ms_to_seconds(0) == 0
        assert ms_to_seconds(None) is None

    def test_parse_json_param(self):
        assert parse_json_param('{"a": 1}', "vars") == {"a": 1}
        assert parse_json_param({"a": 1}, "vars") == {"a": 1}
        assert parse_json_param("", "vars") == {}

    @pytest.mark.parametrize("value", ["[1, 2]", "{bad", 12])
    def test_parse_json_param_rejects(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_json_param(value, "vars")
        assert exc_info.value.field == "vars"

    def test_drop_empty(self):
        assert drop_empty({"a": None, "b": "", "c": 0, "d": False, "e": "x"}) == {"c": 0, "d": False, "e": "x"}
