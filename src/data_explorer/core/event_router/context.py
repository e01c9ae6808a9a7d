"""Typed event contexts shared between handlers."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Generic

from .protocols import ApplyInterrupt, EventName, T_Parameters, T_Return


@dataclass(slots=True)
class EventContext(Generic[T_Parameters, T_Return]):
    """Data container passed to each handler of a dispatched event."""

    parameters: T_Parameters
    """Input parameters for the event (read-only in handlers)."""

    event: EventName | None = None
    """Topic the context was dispatched for."""

    output: T_Return | None = None
    """Output result accumulated by handlers (mutable)."""

    exception: BaseException | None = None
    """Last exception raised by a handler."""

    _should_stop: bool = False

    invocation_timestamp: float | None = None
    """Unix timestamp when the event was dispatched."""

    def stop_with_output(self, output: T_Return) -> None:
        """Stop the handler chain and keep ``output`` as the result.

        Raises:
            ApplyInterrupt: Always raised to stop handler execution
        """
        self.output = output
        self._should_stop = True
        raise ApplyInterrupt()

    def stop_with_exception(self, exception: BaseException) -> None:
        """Stop the handler chain after the current handler returns."""
        self.exception = exception
        self._should_stop = True

    @property
    def should_stop(self) -> bool:
        return self._should_stop


event_ctx: contextvars.ContextVar[EventContext | None] = contextvars.ContextVar(
    "event_ctx", default=None
)
"""ContextVar exposing the EventContext currently being dispatched."""
