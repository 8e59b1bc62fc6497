"""Template loader for mailing label sheets."""

from __future__ import annotations

from typing import Iterable
from importlib import import_module

from .base import LabelTemplate

DEFAULT_TEMPLATE = "5160"

_TEMPLATE_MODULES = {
    "5160": "avery5160",
    "5161": "avery5161",
    "5163": "avery5163",
    "5167": "avery5167",
    "shipping-6up": "shipping6up",
}


def _load_template_module(name: str):
    return import_module(f"{__name__}.{_TEMPLATE_MODULES[name]}")


def get_template(
    name: str,
) -> LabelTemplate:
    """Instantiate the template implementation for ``name``."""

    key = name.strip().lower()
    if key not in _TEMPLATE_MODULES:
        available = ", ".join(list_templates())
        raise SystemExit(
            f"Unknown template '{name}'. Available templates: {available}"
        )

    module = _load_template_module(key)

    template_cls: type[LabelTemplate] | None = getattr(
        module,
        "Template",
        None,
    )
    if not template_cls or not issubclass(template_cls, LabelTemplate):
        raise SystemExit(
            f"Template '{name}' does not export a valid Template class"
        )

    template = template_cls()
    return template


def list_templates() -> Iterable[str]:
    """Return the template identifiers."""

    return sorted(_TEMPLATE_MODULES)


__all__ = ["DEFAULT_TEMPLATE", "LabelTemplate", "get_template", "list_templates"]
