"""OpenADR 3 object models served and accepted by the VTN.

Field names are lower-camel-case on the wire, with ``programID`` as the one
irregular spelling. Models are dumped with ``by_alias=True`` and
``exclude_none=True`` so absent optional fields are omitted rather than
emitted as null.
"""
from enum import Enum
from typing import Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

# Closed, untagged scalar union. Strict members keep "1", 1 and true distinct;
# candidates are tried in this order.
ScalarValue = Union[StrictStr, StrictInt, StrictBool]


class ObjectType(str, Enum):
    """Object type discriminators."""
    PROGRAM = "PROGRAM"
    EVENT = "EVENT"
    REPORT = "REPORT"
    SUBSCRIPTION = "SUBSCRIPTION"
    VEN = "VEN"
    RESOURCE = "RESOURCE"


class Operation(str, Enum):
    """Verbs a subscription reacts to (informational only)."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class PayloadDescriptorType(str, Enum):
    EVENT = "EVENT_PAYLOAD_DESCRIPTOR"
    REPORT = "REPORT_PAYLOAD_DESCRIPTOR"


class OADRModel(BaseModel):
    """Base for wire models: camelCase aliases, population by field name."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with wire field names and no null entries."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ValuesMap(OADRModel):
    """Typed key with a list of scalar values (targets and payloads)."""
    type: str = Field(..., description="Value type, e.g. RESOURCE_NAME or IMPORT_CAPACITY_LIMIT")
    values: list[ScalarValue] = Field(default_factory=list)


class IntervalPeriod(OADRModel):
    start: str = Field(..., description="Start instant, ISO-8601")
    duration: str | None = Field(default=None, description="ISO-8601 duration")
    randomize_start: str | None = Field(default=None, description="ISO-8601 duration added at random to start")


class Interval(OADRModel):
    id: int
    interval_period: IntervalPeriod | None = None
    payloads: list[ValuesMap] = Field(default_factory=list)


class EventPayloadDescriptor(OADRModel):
    object_type: PayloadDescriptorType | None = None
    payload_type: str = Field(..., description="Payload type, e.g. PRICE")
    units: str | None = None
    currency: str | None = None


class ReportDescriptor(OADRModel):
    """Requests a report from a VEN; passed through untouched."""
    model_config = ConfigDict(extra="allow")

    payload_type: str
    reading_type: str | None = None
    units: str | None = None
    targets: list[ValuesMap] | None = None
    aggregate: bool | None = None
    start_interval: int | None = None
    num_intervals: int | None = None
    historical: bool | None = None
    frequency: int | None = None
    repeat: int | None = None


class Event(OADRModel):
    """One demand-response event instance."""
    id: str | None = Field(default=None, description="VTN provisioned id")
    created_date_time: str | None = None
    modification_date_time: str | None = None
    object_type: Literal["EVENT"] | None = None
    program_id: str = Field(..., alias="programID")
    event_name: str | None = None
    priority: int | None = Field(default=None, description="Lower number is higher priority")
    targets: list[ValuesMap] | None = None
    report_descriptors: list[ReportDescriptor] | None = None
    payload_descriptors: list[EventPayloadDescriptor] | None = None
    interval_period: IntervalPeriod | None = None
    intervals: list[Interval]


class ObjectOperation(OADRModel):
    """One callback target within a subscription."""
    object_type: list[ObjectType] = Field(
        ...,
        validation_alias=AliasChoices("objectType", "objects", "object_type"),
        serialization_alias="objectType",
    )
    operations: list[Operation] = Field(default_factory=list)
    callback_url: str
    bearer_token: str = ""

    def handles(self, object_type: ObjectType) -> bool:
        return object_type in self.object_type


class Subscription(OADRModel):
    """Webhook registration keyed by ``id``."""
    id: str | None = None
    created_date_time: str | None = None
    modification_date_time: str | None = None
    object_type: Literal["SUBSCRIPTION"] | None = None
    client_name: str
    program_id: str = Field(..., alias="programID")
    object_operations: list[ObjectOperation] = Field(..., min_length=1)
    targets: list[ValuesMap] | None = None
