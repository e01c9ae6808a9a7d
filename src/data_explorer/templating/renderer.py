"""Template rendering service.

Export formats point at a main template file inside the vault plus optional
partials. Partials are registered under fixed names so the main template can
pull them in with ``{% include "header" %}``, ``{% include "annotations" %}``
or ``{% include "footer" %}``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from jinja2 import DictLoader, TemplateError

from ..config import ExportParams
from ..errors import TemplatePathNotFoundError, TemplateRenderError
from ..vault import Vault
from .environment import create_template_environment

logger = logging.getLogger(__name__)


@runtime_checkable
class SupportsTemplateRender(Protocol):
    """Anything that can render an export format against template data."""

    async def render(
        self,
        params: ExportParams,
        template_data: Mapping[str, Any],
        existing_output: str,
        is_preview: bool,
    ) -> str: ...


class TemplateRenderer:
    """Renders export formats with Jinja2, loading templates from a vault."""

    def __init__(self, vault: Vault, use_sandbox: bool = True):
        self.vault = vault
        self.use_sandbox = use_sandbox

    async def _load(self, path: str) -> str:
        return await self.vault.read(self.vault.require_file(path))

    async def render(
        self,
        params: ExportParams,
        template_data: Mapping[str, Any],
        existing_output: str,
        is_preview: bool,
    ) -> str:
        """Render ``params.export_format`` with ``template_data``.

        Raises:
            TemplatePathNotFoundError: a configured template file is missing
            TemplateRenderError: the template failed to compile or render
        """
        export_format = params.export_format
        if not export_format.template_path:
            raise TemplatePathNotFoundError(
                f"Export format {export_format.name!r} has no template file configured"
            )

        source = await self._load(export_format.template_path)
        partials = {
            name: await self._load(path)
            for name, path in export_format.partial_template_paths().items()
        }

        env = create_template_environment(
            use_sandbox=self.use_sandbox,
            loader=DictLoader(partials),
            additional_globals={"isPreview": is_preview},
        )
        logger.log(
            logging.DEBUG if is_preview else logging.INFO,
            f"Rendering export format {export_format.name!r} (preview={is_preview})",
        )
        try:
            template = env.from_string(source)
            return await template.render_async(
                {"existingMarkdown": existing_output, **template_data}
            )
        except TemplateError as e:
            raise TemplateRenderError(str(e)) from e
