"""Turn a ``"module:attribute"`` target into a router to report on."""

import importlib

from roost.errors import AppResolutionError
from roost.routing.router import Router


def resolve_router(target: str) -> Router:
    """Import *target* and return the :class:`Router` (or ``App``) it names.

    The attribute defaults to ``app`` (``"myapp"`` means ``myapp.app``).
    A callable that is not itself a router is treated as a factory and
    called with no arguments.

    Raises:
        AppResolutionError: The module cannot be imported, the attribute
            is missing, the factory raises, or the result is not a router.
    """
    module_name, _, attr_name = target.partition(":")
    attr_name = attr_name or "app"

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise AppResolutionError(target, f"cannot import {module_name!r}: {exc}") from exc

    obj = getattr(module, attr_name, None)
    if obj is None:
        raise AppResolutionError(target, f"module {module_name!r} has no attribute {attr_name!r}")

    if callable(obj) and not isinstance(obj, Router):
        try:
            obj = obj()
        except Exception as exc:
            raise AppResolutionError(target, f"factory raised {type(exc).__name__}: {exc}") from exc

    if not isinstance(obj, Router):
        raise AppResolutionError(target, f"got {type(obj).__name__}, expected a roost Router or App")
    return obj
