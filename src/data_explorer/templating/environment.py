from collections.abc import Callable
from typing import Any

from jinja2 import BaseLoader, Environment, Undefined
from jinja2 import select_autoescape as _select_autoescape
from jinja2.sandbox import SandboxedEnvironment

from .filters import DEFAULT_FILTERS


def create_template_environment(
    use_sandbox: bool = True,
    autoescape: bool | list[str] = False,
    additional_globals: dict[str, Any] | None = None,
    additional_filters: dict[str, Callable] | None = None,
    loader: BaseLoader | None = None,
    undefined: type[Undefined] = Undefined,
    **kwargs: Any,
) -> Environment:
    """Create the async Jinja2 environment export templates are rendered in.

    Whitespace handling matches how export templates are authored: block tags
    swallow their own line and the trailing newline of the template is kept.
    """
    config: dict[str, Any] = {
        "trim_blocks": True,
        "lstrip_blocks": True,
        "keep_trailing_newline": True,
        "enable_async": True,
        "undefined": undefined,
        **kwargs,
    }
    if isinstance(autoescape, list):
        config["autoescape"] = _select_autoescape(autoescape)
    elif autoescape is True:
        config["autoescape"] = _select_autoescape(["html", "xml"])
    else:
        config["autoescape"] = False

    env_cls = SandboxedEnvironment if use_sandbox else Environment
    env = env_cls(loader=loader or BaseLoader(), **config)
    env.filters.update(DEFAULT_FILTERS)
    if additional_filters:
        env.filters.update(additional_filters)
    if additional_globals:
        env.globals.update(additional_globals)
    return env
