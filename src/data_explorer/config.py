"""Settings models and the settings store.

Settings files are JSON. Keys may be written in snake_case or in the camelCase
used by the host application (``exportFormats``, ``templatePath``, ...).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .core.event_router import EventRouter
from .errors import FormatNotFoundError
from .events import ExplorerEvents

logger = logging.getLogger(__name__)

DEFAULT_PORT = 23119


class _SettingsModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ExportFormat(_SettingsModel):
    """A named export configuration.

    Only the template paths take part in previews; the output path templates
    are kept so a settings file round-trips unchanged.
    """

    name: str
    template_path: str | None = None
    header_template_path: str | None = None
    annotation_template_path: str | None = None
    footer_template_path: str | None = None
    output_path_template: str = "{{citekey}}.md"
    image_output_path_template: str = "{{citekey}}/"
    image_base_name_template: str = "image"

    @field_validator(
        "template_path",
        "header_template_path",
        "annotation_template_path",
        "footer_template_path",
    )
    @classmethod
    def _blank_as_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    def partial_template_paths(self) -> dict[str, str]:
        """Named partial templates the main template can include."""
        partials = {
            "header": self.header_template_path,
            "annotations": self.annotation_template_path,
            "footer": self.footer_template_path,
        }
        return {name: path for name, path in partials.items() if path}


class DatabaseConnection(_SettingsModel):
    database: Literal["Zotero", "Juris-M"] = "Zotero"
    port: int = DEFAULT_PORT


class ExplorerSettings(_SettingsModel):
    database: Literal["Zotero", "Juris-M"] = "Zotero"
    port: int = DEFAULT_PORT
    export_formats: list[ExportFormat] = Field(default_factory=list)
    content_root: Path | None = None
    """Directory that template paths are resolved against."""

    @property
    def connection(self) -> DatabaseConnection:
        return DatabaseConnection(database=self.database, port=self.port)


class ExportParams(BaseModel):
    """Everything the renderer needs besides the data itself."""

    model_config = ConfigDict(frozen=True)

    settings: ExplorerSettings
    database: DatabaseConnection
    export_format: ExportFormat


class SettingsStore:
    """Owns the live settings and announces every change on the router."""

    def __init__(
        self,
        settings: ExplorerSettings | None = None,
        router: EventRouter | None = None,
        path: Path | None = None,
    ):
        self._settings = settings or ExplorerSettings()
        self.router = router or EventRouter()
        self.path = path

    @classmethod
    def load(cls, path: str | Path, router: EventRouter | None = None) -> SettingsStore:
        path = Path(path)
        settings = ExplorerSettings.model_validate(orjson.loads(path.read_bytes()))
        if settings.content_root is None:
            settings = settings.model_copy(update={"content_root": path.parent})
        elif not settings.content_root.is_absolute():
            settings = settings.model_copy(
                update={"content_root": path.parent / settings.content_root}
            )
        logger.debug(f"Loaded {len(settings.export_formats)} export formats from {path}")
        return cls(settings, router=router, path=path)

    @property
    def settings(self) -> ExplorerSettings:
        return self._settings

    def save(self) -> None:
        if self.path is None:
            raise ValueError("SettingsStore has no path to save to")
        data = self._settings.model_dump(mode="json", by_alias=True, exclude_none=True)
        self.path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))

    def update(self, **changes: Any) -> ExplorerSettings:
        """Replace the settings with ``changes`` applied and notify subscribers."""
        merged = {**self._settings.model_dump(), **changes}
        self._settings = ExplorerSettings.model_validate(merged)
        self.router.do(ExplorerEvents.SETTINGS_UPDATED)
        return self._settings

    def format_at(self, index: int) -> ExportFormat:
        formats = self._settings.export_formats
        if not 0 <= index < len(formats):
            raise FormatNotFoundError(f"No export format at index {index}")
        return formats[index]

    def export_params(self, index: int) -> ExportParams:
        return ExportParams(
            settings=self._settings,
            database=self._settings.connection,
            export_format=self.format_at(index),
        )
