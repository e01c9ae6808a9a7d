"""Exception hierarchy for the data explorer."""

from __future__ import annotations


class DataExplorerError(Exception):
    """Base class for errors raised by this package."""


class FormatNotFoundError(DataExplorerError, IndexError):
    """No export format is configured at the requested index."""


class UnsafePathError(DataExplorerError, ValueError):
    """A configured path resolves outside the vault root."""


class TemplateRenderError(DataExplorerError):
    """Rendering an export template failed.

    ``str(error)`` is the message shown to the user in place of the preview.
    """


class TemplatePathNotFoundError(TemplateRenderError):
    """The template file configured for an export format does not exist."""
