from pydantic import Field

from ..oadr_models import OADRModel


class TriggerResponse(OADRModel):
    subscription_id: str
    event_id: str | None = None
    callbacks_attempted: int = Field(..., description="Callbacks a POST was attempted against")
