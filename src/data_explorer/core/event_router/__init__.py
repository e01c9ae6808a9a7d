"""Re-export the EventRouter package's public API under one import path."""

from __future__ import annotations

from .context import EventContext, event_ctx
from .core import EventRouter
from .protocols import ApplyInterrupt, EventName, EventPriority
from .registration import HandlerRegistration, HandlerRegistry, Subscription

__all__ = [
    "EventRouter",
    "EventContext",
    "ApplyInterrupt",
    "Subscription",
    "HandlerRegistration",
    "HandlerRegistry",
    "EventName",
    "EventPriority",
    "event_ctx",
]
