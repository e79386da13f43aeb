"""Resolve hook callbacks named in configuration.

A reference is ``"package.module:attribute"`` (preferred) or the dotted
form ``"package.module.attribute"``. Nested attributes are allowed after
the colon: ``"app.hooks:Audit.on_start"``.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import Any

from restcore.errors import HookReferenceError


def resolve_reference(reference: str) -> Callable[..., Any]:
    """Import and return the callable named by *reference*.

    Raises:
        HookReferenceError: If the module cannot be imported, the
            attribute does not exist, or it is not callable.
    """
    if ":" in reference:
        module_name, _, attr_path = reference.partition(":")
    else:
        module_name, _, attr_path = reference.rpartition(".")
    if not module_name or not attr_path:
        msg = f"Invalid hook reference {reference!r}; expected 'module:attribute'"
        raise HookReferenceError(msg)

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import module {module_name!r} for hook reference {reference!r}"
        raise HookReferenceError(msg) from exc

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            msg = f"Hook reference {reference!r} has no attribute {attr!r}"
            raise HookReferenceError(msg) from exc

    if not callable(target):
        msg = f"Hook reference {reference!r} does not point to a callable"
        raise HookReferenceError(msg)
    return target
