"""Roost exception hierarchy.

Shared across the loader, introspection, factories, and CLI so every
module raises and catches the same types.
"""


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when loader or report configuration is invalid.

    Typically raised from a config dataclass's ``__post_init__``.
    """


class FilesystemError(RoostError):
    """The controllers root (or a directory below it) could not be read.

    Fatal for the load pass.  Mounts performed before the failure stay
    in effect; nothing is rolled back.
    """

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot read {path!r}: {detail}" if detail else f"Cannot read {path!r}")


class MalformedRouterError(RoostError):
    """A router handle passed to introspection lacks a binding stack.

    This is a programming error in the supplied router, not a
    recoverable condition.
    """


class ModuleLoadError(RoostError):
    """A discovered controller file failed to load or construct.

    Aborts the whole load pass.  The original exception is chained as
    ``__cause__``.
    """

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to load controller {path}: {detail}")


class AppResolutionError(RoostError):
    """An ``"module:attribute"`` string did not lead to a router.

    Raised by the CLI when the module cannot be imported, the attribute
    is missing, a factory fails, or the result is not a ``Router``.
    """

    def __init__(self, target: str, detail: str) -> None:
        self.target = target
        self.detail = detail
        super().__init__(f"Cannot resolve {target!r}: {detail}")
