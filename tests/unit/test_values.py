import datetime

import pytest

from data_explorer.clipboard import MemoryClipboard
from data_explorer.values import (
    MAX_STRING_LENGTH,
    format_timestamp,
    format_value,
    is_hex_color,
    value_as_string,
)


def test_timestamps_use_twelve_hour_clock():
    assert format_timestamp(datetime.datetime(1970, 1, 1)) == "1/1/1970 12:00:00 AM"
    assert format_timestamp(datetime.datetime(2024, 11, 5, 13, 4, 9)) == "11/5/2024 1:04:09 PM"
    assert format_timestamp(datetime.date(2024, 2, 29)) == "2/29/2024 12:00:00 AM"


@pytest.mark.parametrize("value", ["#fff", "#FFFA", "#ff6666", "#ff666680"])
def test_hex_colors(value):
    assert is_hex_color(value)


@pytest.mark.parametrize("value", ["fff", "#ff", "#ggg", "#fffff", 123, None])
def test_not_hex_colors(value):
    assert not is_hex_color(value)


def test_value_as_string():
    assert value_as_string(None) == "null"
    assert value_as_string(True) == "true"
    assert value_as_string("x") == '"x"'
    assert value_as_string(1.5) == "1.5"


def test_format_value_labels():
    assert format_value(datetime.datetime(1970, 1, 1)).plain == "📅 1/1/1970 12:00:00 AM"
    assert format_value("#abc").plain == "■ #abc"
    assert format_value(False).plain == "false"


def test_long_strings_are_truncated():
    label = format_value("a" * (MAX_STRING_LENGTH + 5)).plain
    assert label == "a" * MAX_STRING_LENGTH + "..."


def test_memory_clipboard_keeps_history():
    clipboard = MemoryClipboard()
    assert clipboard.text is None
    clipboard.write_text("{{title}}")
    assert clipboard.text == "{{title}}"
    clipboard.write_text("{{tags[0]}}")
    assert clipboard.history == ["{{title}}", "{{tags[0]}}"]
