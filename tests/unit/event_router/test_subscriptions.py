from __future__ import annotations

import asyncio

import pytest

from data_explorer.core.event_router import EventContext, EventRouter, Subscription
from data_explorer.events import ExplorerEvents


def test_subscribe_returns_token_and_unsubscribe_removes_handler(router: EventRouter) -> None:
    calls: list[str] = []

    def handler(_: EventContext) -> None:
        calls.append("called")

    subscription = router.subscribe(ExplorerEvents.SETTINGS_UPDATED, handler)
    assert isinstance(subscription, Subscription)
    assert router.handler_count(ExplorerEvents.SETTINGS_UPDATED) == 1

    router.do(ExplorerEvents.SETTINGS_UPDATED)
    assert router.unsubscribe(subscription) is True
    router.do(ExplorerEvents.SETTINGS_UPDATED)

    assert calls == ["called"]
    assert router.handler_count() == 0


def test_unsubscribe_twice_reports_missing_handler(router: EventRouter) -> None:
    subscription = router.subscribe("demo:event", lambda ctx: None)
    assert router.unsubscribe(subscription) is True
    assert router.unsubscribe(subscription) is False


def test_bound_methods_can_be_unsubscribed(router: EventRouter) -> None:
    class Listener:
        def __init__(self) -> None:
            self.count = 0

        def on_event(self, _: EventContext) -> None:
            self.count += 1

    listener = Listener()
    subscription = router.subscribe("demo:event", listener.on_event)
    router.do("demo:event")
    router.unsubscribe(subscription)
    router.do("demo:event")

    assert listener.count == 1


def test_unsubscribe_leaves_other_topics_and_handlers(router: EventRouter) -> None:
    calls: list[str] = []
    keep = router.subscribe("topic:a", lambda ctx: calls.append("a1"))
    drop = router.subscribe("topic:a", lambda ctx: calls.append("a2"))
    router.subscribe("topic:b", lambda ctx: calls.append("b"))

    router.unsubscribe(drop)
    router.do("topic:a")
    router.do("topic:b")

    assert calls == ["a1", "b"]
    assert keep != drop


def test_string_and_enum_topics_are_interchangeable(router: EventRouter) -> None:
    seen: list[object] = []
    router.subscribe("settings:updated", lambda ctx: seen.append(ctx.event))

    router.do(ExplorerEvents.SETTINGS_UPDATED)

    assert seen == [ExplorerEvents.SETTINGS_UPDATED]


@pytest.mark.asyncio
async def test_async_subscribers_run_under_apply_async(router: EventRouter) -> None:
    seen: list[str] = []

    async def handler(ctx: EventContext) -> None:
        await asyncio.sleep(0)
        seen.append(ctx.parameters["file"])

    router.subscribe(ExplorerEvents.VAULT_FILE_UPDATED, handler)
    await router.apply_async(ExplorerEvents.VAULT_FILE_UPDATED, file="note.md")

    assert seen == ["note.md"]
