from __future__ import annotations

import asyncio

import pytest

from data_explorer.core.event_router import EventContext, EventRouter


def test_handlers_respect_priority_order(router: EventRouter) -> None:
    calls: list[str] = []

    @router.on("demo:event", priority=10)
    def low(_: EventContext) -> None:
        calls.append("low")

    @router.on("demo:event", priority=200)
    def high(_: EventContext) -> None:
        calls.append("high")

    router.do("demo:event")
    assert calls == ["high", "low"]


def test_predicate_controls_execution(router: EventRouter) -> None:
    calls: list[str] = []

    @router.on("demo:predicate", predicate=lambda ctx: ctx.parameters["flag"])
    def only_true(_: EventContext) -> None:
        calls.append("true")

    router.do("demo:predicate", flag=False)
    router.do("demo:predicate", flag=True)

    assert calls == ["true"]


def test_handler_errors_are_captured_and_do_not_stop_chain(router: EventRouter) -> None:
    calls: list[str] = []

    @router.on("demo:error", priority=200)
    def failing(_: EventContext) -> None:
        raise RuntimeError("boom")

    @router.on("demo:error", priority=100)
    def after(_: EventContext) -> None:
        calls.append("after")

    ctx = router.do("demo:error")

    assert calls == ["after"]
    assert isinstance(ctx.exception, RuntimeError)


def test_stop_with_output_interrupts_chain(router: EventRouter) -> None:
    calls: list[str] = []

    @router.on("demo:stop", priority=200)
    def first(ctx: EventContext) -> None:
        ctx.stop_with_output("done")

    @router.on("demo:stop", priority=100)
    def second(_: EventContext) -> None:
        calls.append("second")

    ctx = router.do("demo:stop")

    assert ctx.output == "done"
    assert calls == []


@pytest.mark.asyncio
async def test_do_schedules_async_handlers_on_running_loop(router: EventRouter) -> None:
    seen: list[int] = []

    @router.on("demo:async")
    async def handler(ctx: EventContext) -> None:
        await asyncio.sleep(0)
        seen.append(ctx.parameters["value"])

    router.do("demo:async", value=7)
    assert seen == []

    await router.join_async()
    assert seen == [7]


def test_do_outside_loop_runs_async_handlers_to_completion(router: EventRouter) -> None:
    seen: list[int] = []

    @router.on("demo:async")
    async def handler(ctx: EventContext) -> None:
        seen.append(ctx.parameters["value"])

    router.do("demo:async", value=3)
    assert seen == [3]


@pytest.mark.asyncio
async def test_apply_async_returns_handler_output(router: EventRouter) -> None:
    @router.on("demo:greet")
    async def greet(ctx: EventContext[dict, str]) -> str:
        return f"Hello, {ctx.parameters['name']}!"

    ctx = await router.apply_async("demo:greet", name="Ada")
    assert ctx.output == "Hello, Ada!"


@pytest.mark.asyncio
async def test_ctx_property_exposes_current_context(router: EventRouter) -> None:
    captured: list[EventContext] = []

    @router.on("demo:ctx")
    def handler(ctx: EventContext) -> None:
        captured.append(router.ctx)

    ctx = await router.apply_async("demo:ctx")
    assert captured == [ctx]

    with pytest.raises(RuntimeError):
        router.ctx


def test_event_trace_logs_without_rich(router: EventRouter, caplog) -> None:
    router.set_event_trace(True, use_rich=False)
    with caplog.at_level("DEBUG", logger="data_explorer.core.event_router.core"):
        router.do("demo:traced")

    assert any("[EVENT TRACE]" in record.message for record in caplog.records)


def test_awaited_dispatch_has_a_single_entry_point(router: EventRouter) -> None:
    assert callable(router.apply_async)
    assert not hasattr(router, "apply")
