"""EventRouter core implementation.

The router is the explorer's event bus: host-side notifications (a vault file
changed, settings were saved) are published on it and the preview machinery
subscribes to them for as long as a format is selected.

CONCURRENCY MODEL: a single cooperative thread of control. Sync handlers run
inline in the dispatching call; async handlers are scheduled as tasks on the
running event loop and tracked until ``join_async()``/``async_close()``.
The router is NOT thread-safe.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Callable
from typing import Any

from rich.console import Console
from rich.text import Text

from .context import EventContext, event_ctx
from .protocols import ApplyInterrupt, EventName, EventPriority, F
from .registration import HandlerRegistration, HandlerRegistry, Subscription

logger = logging.getLogger(__name__)

_console = Console(stderr=True)


def _is_async_handler(handler: Callable[..., Any]) -> bool:
    return inspect.iscoroutinefunction(handler) or (
        inspect.ismethod(handler) and inspect.iscoroutinefunction(handler.__func__)
    )


class EventRouter:
    """Publish/subscribe hub with priority-ordered handlers.

    TYPICAL USAGE:
    ```python
    router = EventRouter()

    # Scoped subscription
    subscription = router.subscribe(ExplorerEvents.SETTINGS_UPDATED, on_settings)
    ...
    router.unsubscribe(subscription)


    # Decorator registration for handlers that live as long as the router
    @router.on(ExplorerEvents.VAULT_FILE_UPDATED, priority=200)
    def on_file(ctx: EventContext[dict, Any]) -> None:
        print(ctx.parameters["file"])


    # Fire-and-forget
    router.do(ExplorerEvents.VAULT_FILE_UPDATED, file=vault_file)

    # Awaited dispatch
    ctx = await router.apply_async(ExplorerEvents.SETTINGS_UPDATED)
    ```

    ERROR HANDLING:
    - Handler exceptions are captured on ``ctx.exception`` and do not stop the
      remaining handlers unless the handler calls ``stop_with_exception``
    - ``ApplyInterrupt`` (raised by ``ctx.stop_with_output``) ends the chain
    - Debug mode logs full tracebacks for failing handlers
    """

    def __init__(self, debug: bool = False, _event_trace: bool = False):
        self._debug = debug
        self._event_trace = _event_trace
        self._event_trace_use_rich = True
        self._registry = HandlerRegistry(debug=debug)
        self._tasks: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Tracing
    # ------------------------------------------------------------------

    def set_event_trace(self, enabled: bool, use_rich: bool = True) -> None:
        """Enable or disable tracing of every dispatch."""
        self._event_trace = enabled
        self._event_trace_use_rich = use_rich
        state = "enabled" if enabled else "disabled"
        logger.info(f"Event tracing {state} for {self.__class__.__name__}")

    @property
    def event_trace_enabled(self) -> bool:
        return self._event_trace

    def _log_event(
        self,
        event: EventName,
        method: str,
        parameters: dict[str, Any] | None = None,
        handler_count: int = 0,
        duration_ms: float | None = None,
        error: BaseException | None = None,
    ) -> None:
        if not self._event_trace:
            return

        if self._event_trace_use_rich:
            text = Text()
            text.append("🔥 " if method == "do" else "⚡ ", style="bold")
            text.append(str(event), style="bold cyan" if method == "do" else "bold blue")
            text.append(f" | {method}()")
            text.append(" | ")
            if handler_count > 0:
                text.append(f"handlers: {handler_count}", style="green")
            else:
                text.append("no handlers", style="dim red")
            if duration_ms is not None:
                text.append(f" | {duration_ms:.2f}ms", style="bold")
            if error:
                text.append(f" | ERROR: {error!r}", style="bold red")
            if parameters:
                summary = ", ".join(f"{k}={str(v)[:20]}" for k, v in parameters.items())
                text.append(f" [{summary}]", style="dim")
            _console.print(text)
        else:
            parts = [
                "[EVENT TRACE]",
                f"event={str(event)!r}",
                f"method={method}",
                f"handlers={handler_count}",
            ]
            if duration_ms is not None:
                parts.append(f"duration={duration_ms:.2f}ms")
            if error:
                parts.append(f"error={error!r}")
            logger.debug(" | ".join(parts))

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @property
    def ctx(self) -> EventContext:
        """Context of the event currently being dispatched."""
        ctx = event_ctx.get()
        if ctx is None:
            raise RuntimeError("No event context available")
        return ctx

    def on(
        self,
        event: EventName,
        priority: EventPriority = 100,
        predicate: Callable[..., bool] | None = None,
    ) -> Callable[[F], F]:
        """Decorator registering a handler for ``event``.

        Higher priorities run first. The handler receives the ``EventContext``.
        """

        def decorator(fn: F) -> F:
            self._registry.register_handler(event, fn, priority, predicate)
            return fn

        return decorator

    def subscribe(
        self,
        event: EventName,
        handler: Callable[[EventContext], Any],
        priority: EventPriority = 100,
        predicate: Callable[..., bool] | None = None,
    ) -> Subscription:
        """Register ``handler`` and return the token that removes it again."""
        self._registry.register_handler(event, handler, priority, predicate)
        subscription = Subscription(event=event, priority=priority, handler=handler)
        logger.debug(f"Subscribed {subscription}")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove the handler behind ``subscription``.

        Returns False if it was already removed.
        """
        removed = self._registry.unregister_handler(
            subscription.event, subscription.handler, subscription.priority
        )
        logger.debug(f"Unsubscribed {subscription} (removed={removed})")
        return removed

    def handler_count(self, event: EventName | None = None) -> int:
        return self._registry.get_handler_count(event)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _run_sync_handler(
        self, registration: HandlerRegistration, ctx: EventContext
    ) -> bool:
        """Run one sync handler; returns True when the chain must stop."""
        handler = registration.handler
        try:
            result = handler(ctx)
            if result is not None:
                ctx.output = result
        except ApplyInterrupt:
            return True
        except Exception as e:
            if self._debug:
                logger.exception(f"Handler {handler} failed")
            ctx.exception = e
        return ctx.should_stop

    async def _run_handlers(
        self, handlers: list[HandlerRegistration], ctx: EventContext
    ) -> None:
        token = event_ctx.set(ctx)
        try:
            for registration in handlers:
                if not self._registry.should_run_handler(registration, ctx):
                    continue
                handler = registration.handler
                if not _is_async_handler(handler):
                    if self._run_sync_handler(registration, ctx):
                        break
                    continue
                try:
                    result = await handler(ctx)
                    if result is not None:
                        ctx.output = result
                except ApplyInterrupt:
                    break
                except Exception as e:
                    if self._debug:
                        logger.exception(f"Handler {handler} failed")
                    ctx.exception = e
                if ctx.should_stop:
                    break
        finally:
            event_ctx.reset(token)

    def do(self, event: EventName, **kwargs: Any) -> EventContext[dict[str, Any], Any]:
        """Fire-and-forget dispatch.

        When every handler is sync they run before ``do`` returns. Otherwise the
        handler chain is scheduled on the running loop; outside a loop it is
        run to completion with ``asyncio.run``.
        """
        ctx: EventContext[dict[str, Any], Any] = EventContext(
            parameters=kwargs, event=event, invocation_timestamp=time.time()
        )
        handlers = self._registry.get_sorted_handlers(event)
        self._log_event(event, "do", kwargs, len(handlers))

        if not any(_is_async_handler(h.handler) for h in handlers):
            token = event_ctx.set(ctx)
            try:
                for registration in handlers:
                    if not self._registry.should_run_handler(registration, ctx):
                        continue
                    if self._run_sync_handler(registration, ctx):
                        break
            finally:
                event_ctx.reset(token)
            return ctx

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._run_handlers(handlers, ctx))
            return ctx

        task = loop.create_task(self._run_handlers(handlers, ctx))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return ctx

    async def apply_async(
        self, event: EventName, **kwargs: Any
    ) -> EventContext[dict[str, Any], Any]:
        """Dispatch and wait for every handler; returns the context."""
        start_time = time.perf_counter()
        ctx: EventContext[dict[str, Any], Any] = EventContext(
            parameters=kwargs, event=event, invocation_timestamp=time.time()
        )
        handlers = self._registry.get_sorted_handlers(event)
        self._log_event(event, "apply_async", kwargs, len(handlers))
        try:
            await self._run_handlers(handlers, ctx)
        finally:
            self._log_event(
                event,
                "apply_async",
                kwargs,
                len(handlers),
                duration_ms=(time.perf_counter() - start_time) * 1000,
                error=ctx.exception,
            )
        return ctx

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def join_async(self, timeout: float = 5.0) -> None:
        """Wait for handler chains scheduled by ``do()``."""
        if not self._tasks:
            return
        try:
            await asyncio.wait_for(
                asyncio.gather(*self._tasks, return_exceptions=True), timeout=timeout
            )
        except TimeoutError:
            if self._debug:
                logger.warning(f"Timeout waiting for {len(self._tasks)} tasks")

    async def async_close(self) -> None:
        """Wait briefly for pending handler chains, then cancel the rest."""
        await self.join_async(timeout=1.0)
        for task in list(self._tasks):
            if not task.done():
                task.cancel()
        self._tasks.clear()

    async def __aenter__(self) -> EventRouter:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.async_close()
