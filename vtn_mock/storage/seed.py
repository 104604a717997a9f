"""Fixed smoke-test event loaded into the store at start-up."""
from ..oadr_models import (
    Event,
    EventPayloadDescriptor,
    Interval,
    IntervalPeriod,
    PayloadDescriptorType,
    ValuesMap,
)

SEED_EVENT_ID = "dummyTest"


def seed_event() -> Event:
    """
    Past event used by pollers for basic schema validation.

    Always identical, so a freshly started VTN answers GET /events with a
    known document.
    """
    return Event(
        id=SEED_EVENT_ID,
        created_date_time="2024-03-06T10:55:26.543Z",
        modification_date_time="2024-03-06T10:55:26.543Z",
        object_type="EVENT",
        program_id="1",
        event_name="activationRequest",
        targets=[
            ValuesMap(type="RESOURCE_NAME", values=["DUMMY"]),
            ValuesMap(type="ORGANIZATION_ID", values=["123"]),
        ],
        report_descriptors=[],
        payload_descriptors=[
            EventPayloadDescriptor(
                object_type=PayloadDescriptorType.EVENT,
                payload_type="IMPORT_CAPACITY_LIMIT",
                units="KW",
            )
        ],
        interval_period=IntervalPeriod(
            start="2024-09-04T10:30:30.000Z",
            duration="PT2M",
            randomize_start="PT0S",
        ),
        intervals=[
            Interval(
                id=0,
                payloads=[ValuesMap(type="IMPORT_CAPACITY_LIMIT", values=[30])],
            )
        ],
    )
