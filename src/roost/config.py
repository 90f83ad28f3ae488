"""Loader and report configuration.

Both configs are frozen dataclasses, immutable after creation,
IDE-autocompletable, threaded explicitly into the loader and reporter.
There is no process-wide options object.
"""

from dataclasses import dataclass, field
from pathlib import Path

from roost.errors import ConfigurationError

# Legal values for ReportConfig.dedupe
DEDUPE_MODES = frozenset({"entry", "line"})


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """How a route report is rendered. Immutable after creation.

    ::

        config = ReportConfig(color=True, title="Routes")
    """

    # Method column width: the path column starts at this offset for verbs
    # up to ``spacer - 1`` characters long.
    spacer: int = 7

    # False = plain text, True = always ANSI, None = ANSI only on a TTY
    color: bool | None = False

    # Optional first line of the report (rendered magenta when colored)
    title: str | None = None

    # "entry" dedups on (method, path); "line" dedups on the rendered text
    dedupe: str = "entry"

    # Emitted for a mount point whose router has no method bindings
    static_placeholder: str = "*      /   [static]"

    def __post_init__(self) -> None:
        if self.spacer < 1:
            msg = f"ReportConfig.spacer must be at least 1, got {self.spacer}"
            raise ConfigurationError(msg)
        if self.dedupe not in DEDUPE_MODES:
            msg = (
                f"ReportConfig.dedupe must be one of {sorted(DEDUPE_MODES)}, "
                f"got {self.dedupe!r}"
            )
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Where controllers live and how they are mounted. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LoaderConfig(controllers_dir="app/controllers", base_route="/api")
    """

    controllers_dir: str | Path = "controllers"
    base_route: str = "/"

    # Files qualify as controllers by suffix (case-insensitive)
    suffixes: tuple[str, ...] = (".py",)

    # Files whose names start with one of these are never loaded
    ignore_prefixes: tuple[str, ...] = ("_", ".")

    # Module attribute holding the controller callable
    controller_attr: str = "controller"

    report: ReportConfig = field(default_factory=ReportConfig)

    def __post_init__(self) -> None:
        if not self.suffixes:
            msg = "LoaderConfig.suffixes must name at least one file suffix"
            raise ConfigurationError(msg)
        bad = [s for s in self.suffixes if not s.startswith(".")]
        if bad:
            msg = f"LoaderConfig.suffixes must start with '.', got {bad!r}"
            raise ConfigurationError(msg)
        if any(not p for p in self.ignore_prefixes):
            msg = "LoaderConfig.ignore_prefixes must not contain an empty prefix"
            raise ConfigurationError(msg)
        if not self.controller_attr.isidentifier():
            msg = f"LoaderConfig.controller_attr is not an identifier: {self.controller_attr!r}"
            raise ConfigurationError(msg)
