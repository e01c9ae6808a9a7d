"""Jinja2 filters available to every export template."""

from __future__ import annotations

import datetime
import textwrap
from typing import Any

import orjson


def format_datetime(value: Any, fmt: str = "%Y-%m-%d %H:%M:%S") -> Any:
    """``{{ lastImportDate | format_datetime("%Y-%m-%d") }}``"""
    if isinstance(value, datetime.datetime):
        return value.strftime(fmt)
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time()).strftime(fmt)
    return value


def format_date(value: Any, fmt: str | None = None) -> Any:
    """Parse ISO date strings; format them when ``fmt`` is given.

    Values that cannot be parsed are returned unchanged.
    """
    if isinstance(value, str):
        try:
            value = datetime.date.fromisoformat(value[:10])
        except ValueError:
            return value
    if isinstance(value, datetime.datetime):
        value = value.date()
    if fmt is None or not isinstance(value, datetime.date):
        return value
    return value.strftime(fmt)


def dedent(text: str) -> str:
    return textwrap.dedent(text).strip()


def to_json(value: Any, indent: bool = False) -> str:
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(value, option=option | orjson.OPT_NON_STR_KEYS, default=str).decode(
        "utf-8"
    )


DEFAULT_FILTERS = {
    "format_datetime": format_datetime,
    "format_date": format_date,
    "dedent": dedent,
    "json": to_json,
}
