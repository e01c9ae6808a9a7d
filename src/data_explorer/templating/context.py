"""Build the context an export template is rendered with."""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from typing import Any

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
"""Neutral reference date used by previews."""


def prepare_template_data(
    data: Mapping[str, Any],
    existing_output: str,
    last_import_date: datetime.datetime | None = None,
) -> dict[str, Any]:
    """Return a copy of ``data`` enriched with export-time context.

    Adds ``lastImportDate`` and its legacy alias ``lastExportDate`` unless the
    record already carries them, and ``existingMarkdown`` with the content of
    the document the export would overwrite. ``data`` is never mutated.
    """
    template_data = dict(data)
    reference = template_data.get("lastImportDate") or last_import_date or EPOCH
    template_data.setdefault("lastImportDate", reference)
    template_data.setdefault("lastExportDate", template_data["lastImportDate"])
    template_data["existingMarkdown"] = existing_output
    return template_data
