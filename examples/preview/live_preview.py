"""Preview an export format, then edit its template and watch the preview follow."""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

from data_explorer import (
    DataExplorer,
    ExplorerSettings,
    ExportFormat,
    SettingsStore,
    StaticDataSource,
    TemplateRenderer,
    Vault,
)

RECORD = {
    "title": "Opticks",
    "citekey": "newton1704",
    "creators": [{"firstName": "Isaac", "lastName": "Newton"}],
}


async def main() -> None:
    with tempfile.TemporaryDirectory() as root:
        template = Path(root) / "note.md"
        template.write_text("# {{title}}\n", encoding="utf-8")

        store = SettingsStore(
            ExplorerSettings(export_formats=[ExportFormat(name="Note", template_path="note.md")])
        )
        vault = Vault(root, router=store.router)
        explorer = DataExplorer(store, StaticDataSource([RECORD]), TemplateRenderer(vault), vault)

        async with explorer:
            await explorer.prompt_for_selection()
            explorer.select_format(0)
            print((await explorer.settle()).text, end="")

            template.write_text(
                "# {{title}}\n{% for c in creators %}by {{c.lastName}}\n{% endfor %}",
                encoding="utf-8",
            )
            vault.notify_changed(template)
            print((await explorer.settle()).text, end="")


if __name__ == "__main__":
    asyncio.run(main())
