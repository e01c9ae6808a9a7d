"""Print the template expression of every node in a record."""

from __future__ import annotations

from data_explorer import DataExplorer, NodeType, build_path_expression, iter_node_paths

RECORD = {
    "title": "Opticks",
    "creators": [{"firstName": "Isaac", "lastName": "Newton"}],
    "date-added": "2022-09-14",
    "2": "numeric key",
}


def main() -> None:
    for key_path, node_type, _ in iter_node_paths(RECORD):
        print(f"{build_path_expression(key_path):<28} {node_type}")
        if node_type is NodeType.ARRAY:
            for action in DataExplorer.context_actions(key_path, node_type):
                print(f"  {action.title}: {action.text!r}")


if __name__ == "__main__":
    main()
