"""Turns host change notifications into preview refreshes.

While a format is bound, a change to one of its template files or any settings
change issues a new refresh token, which makes the preview re-render even
though the format and the data are unchanged. Subscriptions only exist while a
format is bound.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..config import SettingsStore
from ..core.event_router import EventContext, EventRouter, Subscription
from ..errors import DataExplorerError
from ..events import ExplorerEvents
from ..vault import Vault, VaultFile
from .state import INITIAL_REFRESH_TOKEN, RefreshToken, next_refresh_token

logger = logging.getLogger(__name__)


class ChangeNotificationBridge:
    def __init__(
        self,
        store: SettingsStore,
        vault: Vault,
        on_refresh: Callable[[RefreshToken], Any],
        router: EventRouter | None = None,
    ):
        self.store = store
        self.vault = vault
        self.router = router or store.router
        self._on_refresh = on_refresh
        self._subscriptions: list[Subscription] = []
        self.bound_format: int | None = None
        self.refresh_token: RefreshToken = INITIAL_REFRESH_TOKEN

    @property
    def is_bound(self) -> bool:
        return bool(self._subscriptions)

    def bind(self, format_index: int | None) -> None:
        """Scope the subscriptions to ``format_index``; None only unbinds."""
        self.unbind()
        if format_index is None:
            return
        self.bound_format = format_index
        self._subscriptions = [
            self.router.subscribe(ExplorerEvents.VAULT_FILE_UPDATED, self._on_file_updated),
            self.router.subscribe(ExplorerEvents.SETTINGS_UPDATED, self._on_settings_updated),
        ]
        logger.debug(f"Bound change notifications to format {format_index}")

    def unbind(self) -> None:
        for subscription in self._subscriptions:
            self.router.unsubscribe(subscription)
        self._subscriptions = []
        self.bound_format = None

    def template_files(self) -> set[VaultFile]:
        """Resolve the bound format's template files as they are configured now."""
        if self.bound_format is None:
            return set()
        try:
            export_format = self.store.format_at(self.bound_format)
            paths = [
                export_format.template_path,
                *export_format.partial_template_paths().values(),
            ]
            return {file for path in paths if (file := self.vault.get_file(path))}
        except DataExplorerError as e:
            logger.debug(f"Template files of format {self.bound_format} unresolvable: {e}")
            return set()

    def _issue_refresh(self) -> None:
        self.refresh_token = next_refresh_token(self.refresh_token)
        self._on_refresh(self.refresh_token)

    def _on_file_updated(self, ctx: EventContext[dict[str, Any], Any]) -> None:
        file = ctx.parameters.get("file")
        if file is None:
            return
        if file in self.template_files():
            self._issue_refresh()

    def _on_settings_updated(self, ctx: EventContext[dict[str, Any], Any]) -> None:
        self._issue_refresh()

    def __enter__(self) -> ChangeNotificationBridge:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unbind()
