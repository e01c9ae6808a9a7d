from enum import StrEnum


class ExplorerEvents(StrEnum):
    """Canonical topics published on the explorer's event router.

    Names follow ``domain:action[:phase]``.
    """

    # ===== Host notifications =====
    # Payload: ``file`` (VaultFile | None)
    VAULT_FILE_UPDATED = "vault:file:updated"
    # No payload
    SETTINGS_UPDATED = "settings:updated"

    # ===== Preview signals =====
    # Payload: ``state`` (PreviewState), ``format_index`` (int)
    PREVIEW_RENDER_AFTER = "preview:render:after"
    PREVIEW_RENDER_ERROR = "preview:render:error"
