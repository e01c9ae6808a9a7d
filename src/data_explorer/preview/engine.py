"""Live preview of an export format rendered against the explored record.

Every request bumps a generation counter at dispatch time. A render whose
generation is no longer current when it completes is discarded, so only the
most recently *requested* preview can become visible, whatever order the
renders finish in. The renderer itself is never cancelled.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from ..config import SettingsStore
from ..core.event_router import EventRouter
from ..events import ExplorerEvents
from ..templating import EPOCH, SupportsTemplateRender, prepare_template_data
from .state import INITIAL_REFRESH_TOKEN, PreviewState, RefreshToken

logger = logging.getLogger(__name__)


class TemplatePreview:
    """Renders previews and owns the single visible ``PreviewState``."""

    def __init__(
        self,
        store: SettingsStore,
        renderer: SupportsTemplateRender,
        router: EventRouter | None = None,
    ):
        self.store = store
        self.renderer = renderer
        self.router = router or store.router
        self._state = PreviewState()
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> PreviewState:
        return self._state

    @property
    def pending(self) -> int:
        """Number of renders still in flight."""
        return len(self._tasks)

    def _dispatch(self) -> int:
        self._generation += 1
        return self._generation

    def clear(self) -> PreviewState:
        """Hide the preview and invalidate every in-flight render."""
        self._dispatch()
        self._state = PreviewState()
        return self._state

    async def refresh(
        self,
        format_index: int | None,
        data: Mapping[str, Any] | None,
        refresh_token: RefreshToken = INITIAL_REFRESH_TOKEN,
    ) -> PreviewState:
        """Render the preview for these inputs and return the visible state.

        With no format (or no data) the preview is cleared without rendering.
        If a newer request was made while this one rendered, its result is
        dropped and the current state is returned unchanged.
        """
        if format_index is None or data is None:
            return self.clear()
        return await self._render(self._dispatch(), format_index, data, refresh_token)

    def trigger(
        self,
        format_index: int | None,
        data: Mapping[str, Any] | None,
        refresh_token: RefreshToken = INITIAL_REFRESH_TOKEN,
    ) -> asyncio.Task[PreviewState] | None:
        """Schedule ``refresh`` on the running loop without waiting for it."""
        if format_index is None or data is None:
            self.clear()
            return None

        generation = self._dispatch()
        task = asyncio.get_running_loop().create_task(
            self._render(generation, format_index, data, refresh_token)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def join(self) -> PreviewState:
        """Wait until every in-flight render has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        return self._state

    async def _render(
        self,
        generation: int,
        format_index: int,
        data: Mapping[str, Any],
        refresh_token: RefreshToken,
    ) -> PreviewState:
        logger.debug(
            f"Preview #{generation}: format={format_index} token={refresh_token}"
        )
        try:
            params = self.store.export_params(format_index)
            template_data = prepare_template_data(
                {**data, "lastImportDate": EPOCH, "lastExportDate": EPOCH},
                existing_output="",
            )
            output = await self.renderer.render(params, template_data, "", True)
            state = PreviewState(text=output or "")
        except Exception as e:
            logger.warning(f"Preview #{generation} failed: {e}")
            state = PreviewState(error=str(e))

        if generation != self._generation:
            logger.debug(
                f"Discarding stale preview #{generation} (current #{self._generation})"
            )
            return self._state

        self._state = state
        event = (
            ExplorerEvents.PREVIEW_RENDER_ERROR
            if state.error is not None
            else ExplorerEvents.PREVIEW_RENDER_AFTER
        )
        self.router.do(event, state=state, format_index=format_index)
        return state
