import datetime

from data_explorer.paths import (
    Index,
    Key,
    NodeType,
    build_path_expression,
    iter_node_paths,
    node_type,
    sorted_keys,
)


def test_node_types() -> None:
    assert node_type({}) is NodeType.OBJECT
    assert node_type([]) is NodeType.ARRAY
    assert node_type("x") is NodeType.STRING
    assert node_type(1.5) is NodeType.NUMBER
    assert node_type(False) is NodeType.BOOLEAN
    assert node_type(None) is NodeType.NULL
    assert node_type(datetime.datetime(2020, 1, 1)) is NodeType.DATE


def test_keys_sort_case_insensitively() -> None:
    assert sorted_keys({"b": 1, "A": 2, "a": 3, "C": 4}) == ["A", "a", "b", "C"]


def test_walk_yields_deepest_first_paths_without_root(sample_record) -> None:
    nodes = {path: kind for path, kind, _ in iter_node_paths(sample_record)}

    assert () not in nodes
    assert nodes[(Key("creators"),)] is NodeType.ARRAY
    assert nodes[(Index(0), Key("creators"))] is NodeType.OBJECT
    assert nodes[(Key("lastName"), Index(0), Key("creators"))] is NodeType.STRING

    expressions = {build_path_expression(path) for path in nodes}
    assert "creators[0].lastName" in expressions
    assert '["date-added"]' in expressions
    assert "tags[1].tag" in expressions
