from .dispatch import DispatchEngine, DispatchResult, WebhookSender
from .synthesizer import EventParameters, synthesize

__all__ = ["DispatchEngine", "DispatchResult", "WebhookSender", "EventParameters", "synthesize"]
