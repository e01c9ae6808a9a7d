"""
template-data-explorer: browse nested export data, derive the template
expression addressing any node, and preview export templates against it.

Architecture:
- paths: identifier classification and template expression building
- core.event_router: event bus for host change notifications
- templating: Jinja2 rendering service and template data augmentation
- preview: live preview engine and change-notification bridge
- explorer: controller tying data, format selection and copy actions together
"""

from .clipboard import Clipboard, MemoryClipboard
from .config import ExplorerSettings, ExportFormat, ExportParams, SettingsStore
from .core.event_router import EventRouter, Subscription
from .errors import (
    DataExplorerError,
    FormatNotFoundError,
    TemplatePathNotFoundError,
    TemplateRenderError,
    UnsafePathError,
)
from .events import ExplorerEvents
from .explorer import DataExplorer, MenuAction
from .paths import Index, Key, NodeType, build_path_expression, is_valid_identifier, iter_node_paths
from .preview import ChangeNotificationBridge, PreviewState, TemplatePreview
from .sources import DataSource, JsonFileDataSource, StaticDataSource
from .templating import TemplateRenderer, prepare_template_data
from .vault import Vault, VaultFile, sanitize_path

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Paths
    "Index",
    "Key",
    "NodeType",
    "build_path_expression",
    "is_valid_identifier",
    "iter_node_paths",
    # Preview
    "ChangeNotificationBridge",
    "PreviewState",
    "TemplatePreview",
    # Explorer
    "DataExplorer",
    "MenuAction",
    # Data sources
    "DataSource",
    "JsonFileDataSource",
    "StaticDataSource",
    # Rendering
    "TemplateRenderer",
    "prepare_template_data",
    # Settings
    "ExplorerSettings",
    "ExportFormat",
    "ExportParams",
    "SettingsStore",
    # Events
    "EventRouter",
    "ExplorerEvents",
    "Subscription",
    # Host services
    "Clipboard",
    "MemoryClipboard",
    "Vault",
    "VaultFile",
    "sanitize_path",
    # Errors
    "DataExplorerError",
    "FormatNotFoundError",
    "TemplatePathNotFoundError",
    "TemplateRenderError",
    "UnsafePathError",
]
