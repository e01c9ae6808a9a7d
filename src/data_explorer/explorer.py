"""The data explorer: one loaded record, one optional preview format.

The explorer ties the pieces together the way the interactive view uses them:
prompting the data source, choosing the export format to preview, keeping the
preview in sync with data, format and change notifications, and the
context-menu actions that copy template snippets for a node.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .clipboard import Clipboard, MemoryClipboard
from .config import SettingsStore
from .paths import (
    KeyPath,
    NodeType,
    PathSegment,
    build_path_expression,
    coerce_segment,
    loop_template,
    template_reference,
)
from .preview import (
    INITIAL_REFRESH_TOKEN,
    ChangeNotificationBridge,
    PreviewState,
    RefreshToken,
    TemplatePreview,
)
from .sources import DataSource, Record
from .templating import SupportsTemplateRender
from .vault import Vault

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data retrieved"
ROOT_LABEL = "Template Data"


@dataclass(frozen=True, slots=True)
class MenuAction:
    title: str
    text: str
    icon: str = "lucide-copy"


class DataExplorer:
    """Controller behind the explorer view.

    Methods that change the preview inputs schedule a render on the running
    event loop, so they must be called from inside it.
    """

    def __init__(
        self,
        store: SettingsStore,
        source: DataSource,
        renderer: SupportsTemplateRender,
        vault: Vault,
        clipboard: Clipboard | None = None,
    ):
        self.store = store
        self.source = source
        self.clipboard = clipboard or MemoryClipboard()
        self.preview = TemplatePreview(store, renderer)
        self.bridge = ChangeNotificationBridge(store, vault, on_refresh=self._on_refresh_token)

        self.data: Record | None = None
        self.error: str | None = None
        self.preview_format_index: int | None = None
        self.refresh_token: RefreshToken = INITIAL_REFRESH_TOKEN

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    async def prompt_for_selection(self) -> Record | None:
        """Load the first record the data source returns.

        An empty result keeps the previous record and sets ``error``.
        """
        records = await self.source.prompt(self.store.settings)
        if not records:
            logger.info(NO_DATA_MESSAGE)
            self.error = NO_DATA_MESSAGE
            return None

        self.error = None
        self.data = records[0]
        self._schedule_refresh()
        return self.data

    def available_formats(self) -> list[tuple[int, str]]:
        return [(i, f.name) for i, f in enumerate(self.store.settings.export_formats)]

    def select_format(self, index: int | None) -> None:
        """Choose the export format to preview; None turns the preview off."""
        if index is not None:
            self.store.format_at(index)
        self.preview_format_index = index
        self.bridge.bind(index)
        self._schedule_refresh()

    def _on_refresh_token(self, token: RefreshToken) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                f"Refresh {token} requested outside a running event loop; preview not updated"
            )
            return
        self.refresh_token = token
        self._schedule_refresh()

    def _schedule_refresh(self) -> asyncio.Task[PreviewState] | None:
        return self.preview.trigger(self.preview_format_index, self.data, self.refresh_token)

    # ------------------------------------------------------------------
    # Preview
    # ------------------------------------------------------------------

    @property
    def preview_state(self) -> PreviewState:
        if self.data is None or self.preview_format_index is None:
            return PreviewState()
        return self.preview.state

    async def settle(self) -> PreviewState:
        """Wait for in-flight preview renders and return the visible state."""
        await self.preview.join()
        return self.preview_state

    # ------------------------------------------------------------------
    # Tree nodes
    # ------------------------------------------------------------------

    @staticmethod
    def node_label(key_path: Iterable[PathSegment | str | int]) -> str:
        """Label of a tree node; ``key_path`` is deepest-first."""
        path = [coerce_segment(segment) for segment in key_path]
        return str(path[0]) if path else ROOT_LABEL

    @staticmethod
    def context_actions(
        key_path: Iterable[PathSegment | str | int], node_type: NodeType | str
    ) -> list[MenuAction]:
        """Copy actions for a node; the root has none."""
        path: KeyPath = tuple(coerce_segment(segment) for segment in key_path)
        if not path:
            return []

        expression = build_path_expression(path)
        actions = [MenuAction("Copy template path", template_reference(expression))]
        if node_type == NodeType.ARRAY:
            actions.append(MenuAction("Copy template for loop", loop_template(expression)))
        return actions

    def copy(self, action: MenuAction) -> None:
        self.clipboard.write_text(action.text)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Drop subscriptions and hide the preview; in-flight renders are ignored."""
        self.bridge.unbind()
        self.preview.clear()

    async def __aenter__(self) -> DataExplorer:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

