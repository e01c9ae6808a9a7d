from .context import EPOCH, prepare_template_data
from .environment import create_template_environment
from .filters import DEFAULT_FILTERS, dedent, format_date, format_datetime, to_json
from .renderer import SupportsTemplateRender, TemplateRenderer

__all__ = [
    # Rendering
    "TemplateRenderer",
    "SupportsTemplateRender",
    "create_template_environment",
    # Context
    "EPOCH",
    "prepare_template_data",
    # Filters
    "DEFAULT_FILTERS",
    "dedent",
    "format_date",
    "format_datetime",
    "to_json",
]
