"""Directory-to-mount-path mapping.

Turns a controller's containing directory into the URL prefix its
sub-router is mounted at::

    controllers/                 -> {base}
    controllers/api/auth/        -> {base}api/auth
    controllers/charts/          -> {base}charts

All functions are pure: the same inputs always give the same output,
whatever order the directory tree is walked in.
"""

import posixpath
import re
from pathlib import PurePath

_TRAILING_SLASHES_RE = re.compile(r"/+$")


def normalize_base_route(base_route: str | None) -> str:
    """Normalize a base route to exactly one leading and one trailing slash.

    ``""`` and ``None`` become ``"/"``; ``"/api///"`` becomes ``"/api/"``;
    ``"api"`` becomes ``"/api/"``.
    """
    if not base_route:
        return "/"
    base = base_route.replace("\\", "/")
    if not base.startswith("/"):
        base = "/" + base
    return _TRAILING_SLASHES_RE.sub("", base) + "/"


def _as_posix(path: str | PurePath) -> str:
    return posixpath.normpath(str(path).replace("\\", "/"))


def relative_dir(controllers_root: str | PurePath, current_dir: str | PurePath) -> str:
    """Return *current_dir* relative to *controllers_root* with ``/`` separators.

    The root itself maps to ``""``.  Raises ``ValueError`` when
    *current_dir* is outside the root.
    """
    root = _as_posix(controllers_root)
    current = _as_posix(current_dir)
    relative = posixpath.relpath(current, root)
    if relative == ".":
        return ""
    if relative == ".." or relative.startswith("../"):
        msg = f"{current_dir!s} is not inside controllers root {controllers_root!s}"
        raise ValueError(msg)
    return relative


def compute_mount_path(
    base_prefix: str | None,
    controllers_root: str | PurePath,
    current_dir: str | PurePath,
) -> str:
    """Mount path for controllers found in *current_dir*.

    Returns ``normalize_base_route(base_prefix) + relative_dir(...)``.
    When *current_dir* is the root, the result is the normalized base
    exactly, with no doubled separator.
    """
    return normalize_base_route(base_prefix) + relative_dir(controllers_root, current_dir)


def join_paths(*parts: str) -> str:
    """Join URL path fragments into one canonical route path.

    Produces a single leading slash, collapses repeated slashes, and
    drops the trailing slash (except for the bare root).  Parameter and
    wildcard patterns such as ``{id}`` or ``*`` pass through untouched.

    ::

        join_paths("/", "/api", "/")       -> "/api"
        join_paths("/", "/v1/", "/x/{id}") -> "/v1/x/{id}"
    """
    segments = [seg for part in parts for seg in part.split("/") if seg]
    if not segments:
        return "/"
    return posixpath.normpath("/" + "/".join(segments))


class PathMapper:
    """Maps directories under one controllers root to mount paths.

    The base route is normalized once at construction; every call to
    :meth:`compute_mount_path` measures relative to the same root, so
    nested directories never compound their parent's prefix.
    """

    __slots__ = ("base_route", "controllers_root")

    def __init__(self, base_route: str | None, controllers_root: str | PurePath) -> None:
        self.base_route = normalize_base_route(base_route)
        self.controllers_root = controllers_root

    def compute_mount_path(self, current_dir: str | PurePath) -> str:
        return self.base_route + relative_dir(self.controllers_root, current_dir)

    def __repr__(self) -> str:
        return f"PathMapper(base_route={self.base_route!r}, controllers_root={str(self.controllers_root)!r})"
