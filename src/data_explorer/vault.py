"""Sandboxed lookup of user-configured template files.

Template paths in settings are relative to the content root ("vault"). They are
sanitized before lookup and can never resolve outside the root.
"""

from __future__ import annotations

import asyncio
import logging
import unicodedata
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .core.event_router import EventRouter
from .errors import TemplatePathNotFoundError, UnsafePathError
from .events import ExplorerEvents

logger = logging.getLogger(__name__)


def sanitize_path(path: str) -> str:
    """Normalize a user-entered vault path.

    Backslashes become forward slashes, non-breaking spaces become spaces, the
    result is NFC-normalized, ``.`` segments, repeated and leading/trailing
    slashes are dropped and ``..`` segments are collapsed. A path that climbs
    above the root raises ``UnsafePathError``.
    """
    cleaned = unicodedata.normalize("NFC", path.replace("\\", "/").replace("\u00a0", " "))
    parts: list[str] = []
    for part in cleaned.strip().split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                raise UnsafePathError(f"Path escapes the vault root: {path!r}")
            parts.pop()
            continue
        parts.append(part)
    return "/".join(parts)


@dataclass(frozen=True, slots=True)
class VaultFile:
    """Handle for a file inside the vault, identified by its sanitized path."""

    path: str

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name


class Vault:
    """File lookup rooted at a content directory."""

    def __init__(self, root: str | Path, router: EventRouter | None = None):
        self.root = Path(root).resolve()
        self.router = router

    def _absolute(self, file: VaultFile) -> Path:
        absolute = (self.root / file.path).resolve()
        if not absolute.is_relative_to(self.root):
            raise UnsafePathError(f"Path escapes the vault root: {file.path!r}")
        return absolute

    def get_file(self, path: str | None) -> VaultFile | None:
        """Resolve ``path`` to an existing file, or None."""
        if not path:
            return None
        file = VaultFile(sanitize_path(path))
        if not file.path or not self._absolute(file).is_file():
            return None
        return file

    def require_file(self, path: str) -> VaultFile:
        file = self.get_file(path)
        if file is None:
            raise TemplatePathNotFoundError(f"Unable to find template file: {path}")
        return file

    async def read(self, file: VaultFile) -> str:
        absolute = self._absolute(file)
        return await asyncio.to_thread(absolute.read_text, encoding="utf-8")

    def notify_changed(self, path: str | Path | None) -> VaultFile | None:
        """Publish ``VAULT_FILE_UPDATED`` for ``path`` (or for no file)."""
        file = None
        if path is not None:
            file = self.get_file(self._relative(path))
        if self.router is not None:
            self.router.do(ExplorerEvents.VAULT_FILE_UPDATED, file=file)
        return file

    def _relative(self, path: str | Path) -> str:
        candidate = Path(path)
        if candidate.is_absolute():
            resolved = candidate.resolve()
            if not resolved.is_relative_to(self.root):
                raise UnsafePathError(f"Path escapes the vault root: {str(path)!r}")
            return resolved.relative_to(self.root).as_posix()
        return str(path)
