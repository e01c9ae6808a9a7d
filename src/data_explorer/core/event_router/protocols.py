"""Shared type aliases for the event router."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any, TypeVar

EventName = str | StrEnum
"""Topic identifier; ``ExplorerEvents`` members are the canonical topics."""

EventPriority = int

T_Parameters = TypeVar("T_Parameters")
T_Return = TypeVar("T_Return")
F = TypeVar("F", bound=Callable[..., Any])


class ApplyInterrupt(Exception):
    """Raised by a handler to stop the remaining handlers of an event."""
