"""Controller discovery — walk a directory tree and mount one router per file.

Each qualifying file under the controllers root is a controller: a
callable that receives a fresh, empty sub-router and the application,
and registers bindings on the router.  The router is then mounted at a
path derived from the file's *directory*::

    controllers/
      api/
        auth/
          read.py        # mounted at {base}api/auth
          write.py       # mounted at {base}api/auth (its own router)
      charts/
        index.py         # mounted at {base}charts

A controller file::

    def controller(router, app):
        @router.get("/")
        def index():
            return "hello"

Discovery is synchronous and blocking; it is meant to run once at
process start, before traffic flows.
"""

import logging
from collections.abc import Callable
from pathlib import Path

import anyio

from roost.config import LoaderConfig
from roost.errors import ModuleLoadError
from roost.factories import ControllerFactory, ImportFactory
from roost.filesystem import DirEntry, Filesystem, LocalFilesystem
from roost.introspection import MountPoint, RouteEntry, introspect_async
from roost.mapping import PathMapper
from roost.report import RouteReporter
from roost.routing.router import Router

logger = logging.getLogger("roost.loader")

MountCallback = Callable[[str, Router], None]


class ControllerLoader:
    """Discover controllers under ``config.controllers_dir`` and mount them.

    Usage::

        app = App()
        loader = ControllerLoader(LoaderConfig(controllers_dir="controllers", base_route="/api"))
        report = await loader.load(app)
        print(report)

    Args:
        config: Where controllers live and how the report is rendered.
        filesystem: Directory listing capability (defaults to the real one).
        factory: Turns a discovered path into a controller callable
            (defaults to :class:`ImportFactory`).
        reporter: Renders the route report (defaults to one built from
            ``config.report``).
    """

    __slots__ = ("_factory", "_filesystem", "_mapper", "_mounts", "config", "reporter")

    def __init__(
        self,
        config: LoaderConfig | None = None,
        *,
        filesystem: Filesystem | None = None,
        factory: ControllerFactory | None = None,
        reporter: RouteReporter | None = None,
    ) -> None:
        self.config = config or LoaderConfig()
        self._filesystem: Filesystem = filesystem or LocalFilesystem()
        self._factory: ControllerFactory = factory or ImportFactory(self.config.controller_attr)
        self.reporter = reporter or RouteReporter(self.config.report)
        self._mapper = PathMapper(self.config.base_route, self.root)
        self._mounts: list[MountPoint] = []

    @property
    def root(self) -> str:
        return str(self.config.controllers_dir)

    @property
    def mounts(self) -> tuple[MountPoint, ...]:
        """Mount points created by the most recent walk, in discovery order."""
        return tuple(self._mounts)

    def is_controller(self, name: str) -> bool:
        """True if a file called *name* should be loaded as a controller."""
        if name.startswith(self.config.ignore_prefixes):
            return False
        lowered = name.lower()
        return any(lowered.endswith(suffix.lower()) for suffix in self.config.suffixes)

    # -- Walk --

    def walk(self, app: Router, mount_callback: MountCallback | None = None) -> None:
        """Mount every controller under the root onto *app*.

        Depth-first, pre-order, in the order the filesystem reports
        entries.  *mount_callback* receives ``(mount_path, router)``
        after each mount.

        Raises:
            FilesystemError: The root (or a directory below it) cannot be
                read.  Mounts already made stay in place.
            ModuleLoadError: A controller file fails to load or run.
        """
        self._mounts = []
        self._walk(app, self.root, mount_callback)

    def _walk(self, app: Router, directory: str, mount_callback: MountCallback | None) -> None:
        for entry in self._filesystem.list_dir(directory):
            if entry.is_dir:
                self._walk(app, entry.path, mount_callback)
            elif self.is_controller(entry.name):
                self._mount(app, directory, entry, mount_callback)

    def _mount(
        self,
        app: Router,
        directory: str,
        entry: DirEntry,
        mount_callback: MountCallback | None,
    ) -> None:
        mount_path = self._mapper.compute_mount_path(directory)
        controller = self._factory.resolve(entry.path)

        router = app.router()
        try:
            controller(router, app)
        except Exception as exc:
            raise ModuleLoadError(entry.path, f"{type(exc).__name__}: {exc}") from exc
        app.mount(mount_path, router)

        self._mounts.append(MountPoint(mount_path=mount_path, router=router))
        logger.debug("Mounted %s at %s", entry.path, mount_path)
        if mount_callback is not None:
            mount_callback(mount_path, router)

    # -- Load --

    async def load(self, app: Router) -> str:
        """Walk, mount, and return the route report for *app*.

        Introspection of every mount point is gathered concurrently once
        all mounting is done; the report keeps discovery order.
        """
        self.walk(app)
        mounts = self._mounts
        results: list[list[RouteEntry]] = [[] for _ in mounts]
        errors: list[Exception | None] = [None] * len(mounts)

        async def collect(index: int, mount_point: MountPoint) -> None:
            try:
                results[index] = await introspect_async(mount_point)
            except Exception as exc:
                errors[index] = exc

        async with anyio.create_task_group() as tg:
            for index, mount_point in enumerate(mounts):
                tg.start_soon(collect, index, mount_point)

        # Re-raise outside the task group so callers see the bare error
        for exc in errors:
            if exc is not None:
                raise exc

        logger.info(
            "Mounted %d controller(s) from %s under %s",
            len(mounts),
            Path(self.root),
            self._mapper.base_route,
        )
        return self.reporter.render_mounts(results)

    def load_sync(self, app: Router) -> str:
        """Blocking :meth:`load` for synchronous bootstrap code."""
        return anyio.run(self.load, app)
