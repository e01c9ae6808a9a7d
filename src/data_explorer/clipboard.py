from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Clipboard(Protocol):
    def write_text(self, text: str) -> None: ...


class MemoryClipboard:
    """Keeps every write; ``text`` is the current clipboard content."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def text(self) -> str | None:
        return self.history[-1] if self.history else None

    def write_text(self, text: str) -> None:
        self.history.append(text)

