import pytest

from data_explorer.paths import is_valid_identifier


@pytest.mark.parametrize(
    "key",
    [
        "title",
        "lastName",
        "_private",
        "$ref",
        "a1",
        "camelCase2",
        "é",
        "日本語",
        "x\u200cy",
        "x\u200dy",
        "a$b",
    ],
)
def test_identifier_names_are_valid(key: str) -> None:
    assert is_valid_identifier(key)


@pytest.mark.parametrize(
    "key",
    [
        "",
        "2",
        "1st",
        "date-added",
        "a b",
        " title",
        "title ",
        'a"b',
        "a.b",
        "\u200cx",
        "x\n",
        "emoji🙂",
    ],
)
def test_non_identifiers_are_rejected(key: str) -> None:
    assert not is_valid_identifier(key)
