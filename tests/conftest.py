import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from data_explorer.config import ExplorerSettings, ExportFormat, ExportParams, SettingsStore
from data_explorer.core.event_router import EventRouter
from data_explorer.templating import TemplateRenderer
from data_explorer.vault import Vault

SAMPLE_RECORD: dict[str, Any] = {
    "title": "On the Origin of Species",
    "citekey": "darwin1859",
    "creators": [
        {"firstName": "Charles", "lastName": "Darwin", "creatorType": "author"},
    ],
    "tags": [{"tag": "evolution"}, {"tag": "biology"}],
    "date-added": "2021-03-04",
    "color": "#ff6666",
}


class RecordingRenderer:
    """Renderer double recording every call.

    ``gates`` maps a call number (1-based) to an event the call waits for before
    returning, so tests can control completion order.
    """

    def __init__(self, output: str = "rendered", error: Exception | None = None):
        self.output = output
        self.error = error
        self.calls: list[tuple[ExportParams, Mapping[str, Any], str, bool]] = []
        self.gates: dict[int, asyncio.Event] = {}

    async def render(
        self,
        params: ExportParams,
        template_data: Mapping[str, Any],
        existing_output: str,
        is_preview: bool,
    ) -> str:
        self.calls.append((params, template_data, existing_output, is_preview))
        call_number = len(self.calls)
        gate = self.gates.get(call_number)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return f"{self.output}#{call_number}"


@pytest.fixture()
def sample_record() -> dict[str, Any]:
    return dict(SAMPLE_RECORD)


@pytest.fixture()
def vault_root(tmp_path: Path) -> Path:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "note.md").write_text(
        "# {{title}}\n{% for c in creators %}- {{c.lastName}}\n{% endfor %}",
        encoding="utf-8",
    )
    (templates / "header.md").write_text("---\ncitekey: {{citekey}}\n---\n", encoding="utf-8")
    (templates / "with-header.md").write_text(
        '{% include "header" %}{{title}}\n', encoding="utf-8"
    )
    (templates / "broken.md").write_text("{% for x in %}", encoding="utf-8")
    return tmp_path


@pytest.fixture()
def router() -> EventRouter:
    return EventRouter()


@pytest.fixture()
def settings() -> ExplorerSettings:
    return ExplorerSettings(
        export_formats=[
            ExportFormat(name="Note", template_path="templates/note.md"),
            ExportFormat(
                name="With header",
                template_path="templates/with-header.md",
                header_template_path="templates/header.md",
            ),
            ExportFormat(name="Missing", template_path="templates/missing.md"),
        ]
    )


@pytest.fixture()
def store(settings: ExplorerSettings, router: EventRouter) -> SettingsStore:
    return SettingsStore(settings, router=router)


@pytest.fixture()
def vault(vault_root: Path, router: EventRouter) -> Vault:
    return Vault(vault_root, router=router)


@pytest.fixture()
def renderer(vault: Vault) -> TemplateRenderer:
    return TemplateRenderer(vault)


@pytest.fixture()
def recording_renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def renderer_factory() -> type[RecordingRenderer]:
    return RecordingRenderer
