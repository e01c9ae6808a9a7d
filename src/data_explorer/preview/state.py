from __future__ import annotations

import time
from dataclasses import dataclass
from typing import NewType

RefreshToken = NewType("RefreshToken", int)
"""Strictly increasing value that forces a re-render of unchanged inputs."""

INITIAL_REFRESH_TOKEN = RefreshToken(0)


def next_refresh_token(previous: RefreshToken = INITIAL_REFRESH_TOKEN) -> RefreshToken:
    """Wall-clock nanoseconds, bumped past ``previous`` if the clock has not moved."""
    return RefreshToken(max(time.time_ns(), previous + 1))


@dataclass(frozen=True, slots=True)
class PreviewState:
    """Outcome of the latest preview render.

    Both fields are None before any render completes (and while no format is
    selected); afterwards exactly one of them is set.
    """

    text: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.text is not None and self.error is not None:
            raise ValueError("PreviewState cannot hold both text and an error")

    @property
    def is_empty(self) -> bool:
        return self.text is None and self.error is None

    @property
    def visible(self) -> bool:
        """Whether the preview panel is shown at all.

        Empty rendered output, or an error without a message, hides the panel
        just like no result.
        """
        return bool(self.text) or bool(self.error)

    @property
    def content(self) -> str | None:
        return self.error if self.error is not None else self.text
