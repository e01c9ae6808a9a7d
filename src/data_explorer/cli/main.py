import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text
from rich.tree import Tree

from data_explorer.cli.utils import build_explorer, render_tree
from data_explorer.config import ExplorerSettings
from data_explorer.errors import FormatNotFoundError
from data_explorer.paths import build_path_expression, iter_node_paths
from data_explorer.sources import JsonFileDataSource
from data_explorer.utilities import configure_library_logging, verbosity_level

app = typer.Typer(help="Explore export data and preview export templates")
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase log verbosity"),
):
    configure_library_logging(level=verbosity_level(verbose))


@app.command()
def paths(data_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file holding a record or a list of records")):
    """
    Print the template expression of every node in the first record.
    """
    records = asyncio.run(JsonFileDataSource(data_file).prompt(ExplorerSettings()))
    if not records:
        err_console.print("No data retrieved")
        raise typer.Exit(1)

    for key_path, node_type, _ in iter_node_paths(records[0]):
        console.print(f"{build_path_expression(key_path)}\t{node_type}", markup=False, highlight=False)


@app.command()
def preview(
    data_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file holding a record or a list of records"),
    settings_file: Path = typer.Option(..., "--settings", "-s", exists=True, dir_okay=False, help="Settings JSON file"),
    format_index: int = typer.Option(..., "--format", "-f", help="Index of the export format to preview"),
):
    """
    Render one export format against the first record.
    """

    async def run():
        explorer = build_explorer(data_file, settings_file)
        async with explorer:
            if await explorer.prompt_for_selection() is None:
                return explorer.error, None
            try:
                explorer.select_format(format_index)
            except FormatNotFoundError as e:
                return str(e), None
            return None, await explorer.settle()

    error, state = asyncio.run(run())
    if error:
        err_console.print(error)
        raise typer.Exit(1)
    if state.error is not None:
        err_console.print(Text(state.error, style="bold red"))
        raise typer.Exit(1)
    if state.text:
        console.print(state.text, markup=False, highlight=False, end="")


@app.command()
def explore(
    data_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file holding a record or a list of records"),
    settings_file: Path = typer.Option(..., "--settings", "-s", exists=True, dir_okay=False, help="Settings JSON file"),
    format_index: Optional[int] = typer.Option(None, "--format", "-f", help="Export format to preview"),
):
    """
    Show the record as a tree annotated with template expressions, plus the preview.
    """

    async def run():
        explorer = build_explorer(data_file, settings_file)
        async with explorer:
            await explorer.prompt_for_selection()
            if explorer.error:
                return explorer, None
            try:
                explorer.select_format(format_index)
            except FormatNotFoundError as e:
                explorer.error = str(e)
                return explorer, None
            return explorer, await explorer.settle()

    explorer, state = asyncio.run(run())
    if explorer.error:
        console.print(explorer.error)
        return

    if state is not None and state.visible:
        if state.error is not None:
            body = Text(state.error, style="red")
        else:
            body = Syntax(state.text, "markdown", word_wrap=True)
        console.print(Panel(body, title="Preview", border_style="red" if state.error is not None else "green"))

    tree = Tree(Text("Template Data", style="bold"))
    render_tree(tree, explorer.data)
    console.print(tree)


if __name__ == "__main__":
    logging.captureWarnings(True)
    app()
