from pathlib import Path
from typing import Any

from rich.text import Text
from rich.tree import Tree

from data_explorer.config import SettingsStore
from data_explorer.explorer import DataExplorer
from data_explorer.paths import KeyPath, NodeType, build_path_expression, children, node_type
from data_explorer.sources import JsonFileDataSource
from data_explorer.templating import TemplateRenderer
from data_explorer.values import format_value
from data_explorer.vault import Vault


def build_explorer(data_file: Path, settings_file: Path) -> DataExplorer:
    """
    Wire an explorer over a JSON data file and a settings file.

    Template paths are resolved against the settings' content root, which
    defaults to the directory holding the settings file.
    """
    store = SettingsStore.load(settings_file)
    vault = Vault(store.settings.content_root or settings_file.parent, router=store.router)
    return DataExplorer(
        store,
        JsonFileDataSource(data_file),
        TemplateRenderer(vault),
        vault,
    )


def render_tree(tree: Tree, value: Any, parent: KeyPath = ()) -> None:
    """Append the children of ``value`` to ``tree`` with their expressions."""
    for segment, child in children(value):
        key_path: KeyPath = (segment, *parent)
        kind = node_type(child)
        label = Text()
        label.append(str(segment), style="bold")
        label.append(f"  {build_path_expression(key_path)}", style="dim cyan")
        if kind in (NodeType.OBJECT, NodeType.ARRAY):
            size = len(child)
            label.append(f"  {kind} ({size} {'item' if size == 1 else 'items'})", style="dim")
            branch = tree.add(label)
            render_tree(branch, child, key_path)
        else:
            label.append(": ")
            label.append_text(format_value(child))
            tree.add(label)
