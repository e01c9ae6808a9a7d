"""Handler registration and subscription tokens.

CONTENTS:
- HandlerRegistration: a handler plus its optional predicate
- Subscription: token returned by ``EventRouter.subscribe`` and consumed by
  ``EventRouter.unsubscribe``
- HandlerRegistry: priority-ordered handler storage with removal support

Handlers are stored as ``_events[event][priority] = [HandlerRegistration, ...]``.
Higher priority values execute first; within a priority level handlers execute
in registration order.
"""

from __future__ import annotations

import collections
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .context import EventContext
    from .protocols import EventName, EventPriority

logger = logging.getLogger(__name__)

_subscription_ids = itertools.count(1)


@dataclass
class HandlerRegistration:
    handler: Callable[..., Any]
    """The handler function or method to execute."""

    predicate: Callable[[EventContext], bool] | None = None
    """Optional predicate deciding whether the handler runs."""


@dataclass(frozen=True)
class Subscription:
    """Handle for one handler registered on one topic.

    Subscribing the same handler twice at the same priority keeps a single
    registration, so unsubscribing either token removes it.
    """

    event: EventName
    priority: EventPriority
    handler: Callable[..., Any] = field(compare=False, repr=False)
    id: int = field(default_factory=lambda: next(_subscription_ids))


class HandlerRegistry:
    """Handler storage keyed by event name and priority."""

    def __init__(self, debug: bool = False):
        self._events: dict[
            EventName, dict[EventPriority, list[HandlerRegistration]]
        ] = collections.defaultdict(lambda: collections.defaultdict(list))
        self._debug = debug

    def register_handler(
        self,
        event: EventName,
        handler: Callable[..., Any],
        priority: EventPriority = 100,
        predicate: Callable[[EventContext], bool] | None = None,
    ) -> HandlerRegistration:
        """Register ``handler`` for ``event``.

        Registering a handler that is already present at the same priority only
        replaces its predicate.
        """
        registrations = self._events[event][priority]
        for registration in registrations:
            if registration.handler == handler:
                registration.predicate = predicate
                if self._debug:
                    logger.debug(f"Updated predicate for {handler} on {event!s}")
                return registration

        registration = HandlerRegistration(handler=handler, predicate=predicate)
        registrations.append(registration)
        if self._debug:
            logger.debug(f"Registered {handler} on {event!s} (priority={priority})")
        return registration

    def unregister_handler(
        self,
        event: EventName,
        handler: Callable[..., Any],
        priority: EventPriority | None = None,
    ) -> bool:
        """Remove ``handler`` from ``event``; returns False when it was absent."""
        if event not in self._events:
            return False

        by_priority = self._events[event]
        priorities = [priority] if priority is not None else list(by_priority)
        removed = False
        for level in priorities:
            if level not in by_priority:
                continue
            kept = [r for r in by_priority[level] if r.handler != handler]
            if len(kept) != len(by_priority[level]):
                removed = True
            if kept:
                by_priority[level] = kept
            else:
                del by_priority[level]

        if not by_priority:
            del self._events[event]
        return removed

    def get_sorted_handlers(self, event: EventName) -> list[HandlerRegistration]:
        if event not in self._events:
            return []
        handlers: list[HandlerRegistration] = []
        for priority in sorted(self._events[event], reverse=True):
            handlers.extend(self._events[event][priority])
        return handlers

    def should_run_handler(
        self, registration: HandlerRegistration, ctx: EventContext
    ) -> bool:
        predicate = registration.predicate
        if predicate is None:
            return True
        try:
            return predicate(ctx)
        except Exception as e:
            if self._debug:
                logger.warning(f"Predicate failed for {registration.handler}: {e}")
            return False

    def get_handler_count(self, event: EventName | None = None) -> int:
        if event is not None:
            return len(self.get_sorted_handlers(event))
        return sum(
            len(registrations)
            for by_priority in self._events.values()
            for registrations in by_priority.values()
        )
