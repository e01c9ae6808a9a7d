from .bridge import ChangeNotificationBridge
from .engine import TemplatePreview
from .state import (
    INITIAL_REFRESH_TOKEN,
    PreviewState,
    RefreshToken,
    next_refresh_token,
)

__all__ = [
    "ChangeNotificationBridge",
    "TemplatePreview",
    "PreviewState",
    "RefreshToken",
    "INITIAL_REFRESH_TOKEN",
    "next_refresh_token",
]
