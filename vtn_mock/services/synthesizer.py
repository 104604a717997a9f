"""Builds test events from a handful of operator-supplied parameters."""
from datetime import datetime, timedelta, timezone

import structlog
from pydantic import AliasChoices, Field

from ..errors import ValidationError
from ..oadr_models import (
    Event,
    EventPayloadDescriptor,
    Interval,
    IntervalPeriod,
    OADRModel,
    PayloadDescriptorType,
    ValuesMap,
)

log = structlog.get_logger()

PROGRAM_ID = "1"
ORGANIZATION_ID = "TestVTN"
PAYLOAD_TYPE = "IMPORT_CAPACITY_LIMIT"
PAYLOAD_UNITS = "KW"


class EventParameters(OADRModel):
    """Parameters of a synthesized event."""
    event_name: str | None = Field(default=None, description="Differs from the VTN generated id")
    resource_name: str = Field(
        ...,
        validation_alias=AliasChoices("oadrResourceName", "resourceName", "resource_name"),
        serialization_alias="oadrResourceName",
        description="OpenADR resource the event targets",
    )
    length: int = Field(
        ...,
        validation_alias=AliasChoices("length", "lengthMinutes"),
        description="Event length in minutes",
    )
    limit_kw: int = Field(..., description="Import capacity limit during the event, in kW")
    minutes_in_future: int = Field(..., description="Minutes from now until the event starts")


def validate_parameters(params: EventParameters) -> None:
    """
    Raises:
        ValidationError: If length, limit or lead time is below 1
    """
    if params.length < 1 or params.limit_kw < 1 or params.minutes_in_future < 1:
        log.debug(
            "event.parameters_invalid",
            length=params.length,
            limit_kw=params.limit_kw,
            minutes_in_future=params.minutes_in_future,
        )
        raise ValidationError("Invalid parameters")


def synthesize(params: EventParameters, now: datetime | None = None) -> Event:
    """
    Create an import-capacity-limit event from ``params``.

    Only IMPORT_CAPACITY_LIMIT payloads in kW are generated. The event id is
    derived from the current second, so two events built within the same
    second share an id.

    Args:
        params: Event parameters
        now: Creation instant (defaults to the current UTC time)

    Returns:
        A complete event, ready to be stored or sent

    Raises:
        ValidationError: If any numeric parameter is below 1
    """
    validate_parameters(params)

    now = now or datetime.now(timezone.utc)
    start = now + timedelta(minutes=params.minutes_in_future)
    timestamp = now.isoformat()

    return Event(
        id=f"test_event_{int(now.timestamp())}",
        created_date_time=timestamp,
        modification_date_time=timestamp,
        object_type="EVENT",
        program_id=PROGRAM_ID,
        event_name=params.event_name,
        targets=[
            ValuesMap(type="RESOURCE_NAME", values=[params.resource_name]),
            ValuesMap(type="ORGANIZATION_ID", values=[ORGANIZATION_ID]),
        ],
        report_descriptors=[],
        payload_descriptors=[
            EventPayloadDescriptor(
                object_type=PayloadDescriptorType.EVENT,
                payload_type=PAYLOAD_TYPE,
                units=PAYLOAD_UNITS,
            )
        ],
        interval_period=IntervalPeriod(
            start=start.isoformat(),
            duration=f"PT{params.length}M",
            randomize_start="PT0S",
        ),
        intervals=[
            Interval(
                id=0,
                payloads=[ValuesMap(type=PAYLOAD_TYPE, values=[params.limit_kw])],
            )
        ],
    )
