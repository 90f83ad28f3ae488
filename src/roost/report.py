"""Route report rendering.

Turns introspected route entries into one aligned, deduplicated block
of text.  Respects TTY detection when ``ReportConfig.color`` is
``None``: no ANSI codes when piped or redirected.

Example output (plain)::

    Routes
    GET    /api/auth
    POST   /api/auth/login
    DELETE /api/auth/session
    *      /   [static]

"""

from __future__ import annotations

import sys
from collections.abc import Hashable, Iterable, Sequence

from roost.config import ReportConfig
from roost.introspection import RouteEntry


def _use_color(stream: object | None = None) -> bool:
    """True if the output stream supports ANSI color."""
    s = stream or sys.stdout
    try:
        return s.isatty()  # type: ignore[union-attr]
    except Exception:
        return False


class _Palette:
    """ANSI escape sequences; empty strings when color is disabled."""

    __slots__ = ("blue", "green", "grey", "magenta", "red", "reset", "yellow")

    def __init__(self, *, enabled: bool) -> None:
        if enabled:
            self.reset = "\033[39m"
            self.red = "\033[31m"
            self.green = "\033[32m"
            self.yellow = "\033[33m"
            self.blue = "\033[34m"
            self.magenta = "\033[35m"
            self.grey = "\033[90m"
        else:
            self.reset = ""
            self.red = ""
            self.green = ""
            self.yellow = ""
            self.blue = ""
            self.magenta = ""
            self.grey = ""

    def method(self, method: str) -> str:
        match method:
            case "POST":
                color = self.yellow
            case "GET":
                color = self.green
            case "PUT":
                color = self.blue
            case "DELETE":
                color = self.red
            case "PATCH":
                color = self.grey
            case _:
                return method
        return f"{color}{method}{self.reset}" if color else method


class RouteReporter:
    """Render route entries as text.

    Usage::

        reporter = RouteReporter(ReportConfig(color=True))
        print(reporter.render(entries, title="Routes"))
    """

    __slots__ = ("_palette", "config")

    def __init__(self, config: ReportConfig | None = None, *, stream: object | None = None) -> None:
        self.config = config or ReportConfig()
        enabled = _use_color(stream) if self.config.color is None else self.config.color
        self._palette = _Palette(enabled=enabled)

    def format_entry(self, entry: RouteEntry) -> str:
        """One line: method, padding to the path column, path.

        Padding is computed from the visible method length, so escape
        codes never shift the path column.
        """
        padding = " " * max(1, self.config.spacer - len(entry.method))
        return self._palette.method(entry.method) + padding + entry.path

    def render(self, entries: Iterable[RouteEntry], *, title: str | None = None) -> str:
        """Dedup and join *entries*, optionally under *title*.

        With no entries the result is just the title line (or ``""``).
        """
        lines = self._unique(self._keyed(entries))
        return self._with_title("\n".join(lines), title)

    def render_mounts(
        self,
        groups: Iterable[Sequence[RouteEntry]],
        *,
        title: str | None = None,
    ) -> str:
        """Render the entries of several mount points as one report.

        *groups* holds one entry sequence per mount point, in discovery
        order.  A mount point without entries (static files only)
        contributes ``config.static_placeholder`` instead of an empty
        line.  Dedup is global across groups.
        """
        keyed: list[tuple[Hashable, str]] = []
        for entries in groups:
            if entries:
                keyed.extend(self._keyed(entries))
            else:
                placeholder = self.config.static_placeholder
                keyed.append((("static", placeholder), placeholder))
        return self._with_title("\n".join(self._unique(keyed)), title)

    def _keyed(self, entries: Iterable[RouteEntry]) -> list[tuple[Hashable, str]]:
        result: list[tuple[Hashable, str]] = []
        for entry in entries:
            line = self.format_entry(entry)
            key: Hashable = (entry.method, entry.path) if self.config.dedupe == "entry" else line
            result.append((key, line))
        return result

    @staticmethod
    def _unique(keyed: Iterable[tuple[Hashable, str]]) -> list[str]:
        seen: set[Hashable] = set()
        lines: list[str] = []
        for key, line in keyed:
            if key in seen:
                continue
            seen.add(key)
            lines.append(line)
        return lines

    def _with_title(self, body: str, title: str | None) -> str:
        title = title if title is not None else self.config.title
        if not title:
            return body
        c = self._palette
        styled = f"{c.magenta}{title}{c.reset}"
        return f"{styled}\n{body}" if body else styled
