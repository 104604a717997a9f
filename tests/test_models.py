"""Tests for the OpenADR wire models."""
import pytest
from pydantic import ValidationError as PydanticValidationError

from vtn_mock.oadr_models import Event, ObjectOperation, ObjectType, Subscription, ValuesMap
from vtn_mock.storage.seed import seed_event


def test_scalar_values_keep_their_type():
    """Strings, integers and booleans decode to themselves, never to each other."""
    values_map = ValuesMap.model_validate_json('{"type": "X", "values": ["1", 1, true, "true"]}')

    assert values_map.values == ["1", 1, True, "true"]
    assert type(values_map.values[0]) is str
    assert type(values_map.values[1]) is int
    assert type(values_map.values[2]) is bool


@pytest.mark.parametrize("bad", [1.5, None, {"nested": 1}, [1]])
def test_scalar_union_is_closed(bad):
    with pytest.raises(PydanticValidationError):
        ValuesMap.model_validate({"type": "X", "values": [bad]})


def test_event_wire_names_and_omitted_fields():
    event = Event(program_id="1", event_name="demo", intervals=[])

    wire = event.to_wire()

    assert wire == {"programID": "1", "eventName": "demo", "intervals": []}
    assert "priority" not in wire


def test_event_requires_intervals():
    with pytest.raises(PydanticValidationError):
        Event.model_validate({"programID": "1"})


def test_event_parses_wire_document():
    wire = seed_event().to_wire()

    parsed = Event.model_validate(wire)

    assert parsed.program_id == "1"
    assert parsed.interval_period.randomize_start == "PT0S"
    assert parsed.intervals[0].payloads[0].values == [30]
    assert parsed.to_wire() == wire


def test_seed_event_wire_shape():
    wire = seed_event().to_wire()

    assert wire["id"] == "dummyTest"
    assert wire["objectType"] == "EVENT"
    assert wire["createdDateTime"] == "2024-03-06T10:55:26.543Z"
    assert wire["payloadDescriptors"][0] == {
        "objectType": "EVENT_PAYLOAD_DESCRIPTOR",
        "payloadType": "IMPORT_CAPACITY_LIMIT",
        "units": "KW",
    }
    assert wire["reportDescriptors"] == []
    assert wire["intervalPeriod"]["duration"] == "PT2M"


def test_object_operation_accepts_objects_alias():
    operation = ObjectOperation.model_validate(
        {"objects": ["EVENT", "REPORT"], "operations": ["POST"], "callbackUrl": "http://ven/cb", "bearerToken": "t"}
    )

    assert operation.handles(ObjectType.EVENT)
    assert not operation.handles(ObjectType.PROGRAM)
    assert operation.to_wire()["objectType"] == ["EVENT", "REPORT"]


def test_subscription_requires_operations():
    with pytest.raises(PydanticValidationError):
        Subscription.model_validate({"clientName": "ven", "programID": "1", "objectOperations": []})


def test_subscription_id_is_optional_on_the_wire():
    subscription = Subscription.model_validate(
        {
            "clientName": "ven",
            "programID": "1",
            "objectOperations": [{"objectType": ["EVENT"], "operations": ["GET"], "callbackUrl": "http://ven/cb"}],
        }
    )

    assert subscription.id is None
    assert subscription.object_operations[0].bearer_token == ""
    assert "id" not in subscription.to_wire()


def test_subscription_object_type_is_fixed():
    with pytest.raises(PydanticValidationError):
        Subscription.model_validate(
            {"objectType": "EVENT", "clientName": "ven", "programID": "1",
             "objectOperations": [{"objectType": ["EVENT"], "callbackUrl": "http://ven/cb"}]}
        )
