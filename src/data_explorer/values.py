"""Cosmetic rendering of scalar values in the explorer tree."""

from __future__ import annotations

import datetime
import re
from typing import Any

from rich.text import Text

MAX_STRING_LENGTH = 800

# matches #RGB, #RGBA, #RRGGBB, #RRGGBBAA
HEX_COLOR = re.compile(r"^#(?:[\dA-F]{3}){1,2}$|^#(?:[\dA-F]{4}){1,2}$", re.IGNORECASE)


def format_timestamp(value: datetime.date) -> str:
    """US short date plus 12-hour time, e.g. ``1/1/1970 12:00:00 AM``."""
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, datetime.time())
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return (
        f"{value.month}/{value.day}/{value.year} "
        f"{hour}:{value.minute:02d}:{value.second:02d} {meridiem}"
    )


def _chip_color(value: str) -> str:
    digits = value[1:]
    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits[:3])
    return f"#{digits[:6]}"


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and HEX_COLOR.fullmatch(value) is not None


def value_as_string(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def format_value(value: Any) -> Text:
    """Tree label for a leaf value."""
    if isinstance(value, (datetime.datetime, datetime.date)):
        return Text(f"📅 {format_timestamp(value)}")

    if is_hex_color(value):
        text = Text()
        text.append("■ ", style=_chip_color(value))
        text.append(value)
        return text

    if isinstance(value, str) and len(value) > MAX_STRING_LENGTH:
        return Text(value[:MAX_STRING_LENGTH] + "...")

    return Text(value_as_string(value))
