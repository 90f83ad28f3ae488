"""Route introspection — recover (method, path) pairs from a mounted router.

Reads a router's ``stack`` of layer records without touching dispatch.
Any object whose ``stack`` is an iterable of records exposing
``route.path`` and ``route.methods`` can be introspected; records
without a ``route`` (static mounts, nested routers) are skipped.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from roost.errors import MalformedRouterError
from roost.mapping import join_paths

if TYPE_CHECKING:
    from roost.routing.router import Router

# Method marker for bindings that answer every method
WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class MountPoint:
    """A sub-router and the path it is mounted at. Never mutated."""

    mount_path: str
    router: "Router"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One introspected binding: upper-case method (or ``*``) and full path."""

    method: str
    path: str


def _binding_stack(router: Any) -> Iterable[Any]:
    stack = getattr(router, "stack", None)
    if stack is None:
        msg = f"{type(router).__name__} has no 'stack' of registered bindings"
        raise MalformedRouterError(msg)
    if isinstance(stack, (str, bytes)) or not isinstance(stack, Iterable):
        msg = f"{type(router).__name__}.stack is not an iterable of bindings"
        raise MalformedRouterError(msg)
    return stack


def _methods(route: Any) -> tuple[str, ...]:
    methods = getattr(route, "methods", None)
    if methods is None:
        # Single-verb records (``route.method``) are accepted as well
        method = getattr(route, "method", None)
        return (method.upper(),) if method else (WILDCARD,)
    if isinstance(methods, str):
        return (methods.upper(),)
    return tuple(m.upper() for m in methods) or (WILDCARD,)


def introspect(mount_point: MountPoint) -> list[RouteEntry]:
    """Return the bindings of *mount_point* as route entries.

    Entries come out in registration order, one per method of each
    binding.  Paths are ``join_paths("/", mount_path, route.path)``.
    No deduplication happens here.

    Raises:
        MalformedRouterError: If the router lacks an iterable ``stack``
            or a route record lacks a string ``path``.
    """
    entries: list[RouteEntry] = []
    for layer in _binding_stack(mount_point.router):
        route = getattr(layer, "route", None)
        if route is None:
            continue
        path = getattr(route, "path", None)
        if not isinstance(path, str):
            msg = f"Route record {route!r} has no string 'path'"
            raise MalformedRouterError(msg)
        full_path = join_paths("/", mount_point.mount_path, path)
        entries.extend(RouteEntry(method=m, path=full_path) for m in _methods(route))
    return entries


async def introspect_async(mount_point: MountPoint) -> list[RouteEntry]:
    """Awaitable :func:`introspect`, for gathering many mount points at once."""
    return introspect(mount_point)
