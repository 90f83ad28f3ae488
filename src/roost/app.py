"""Roost application handle.

The router that controllers are mounted on.  It records every mount as
a :class:`~roost.introspection.MountPoint` so the route report can be
rebuilt from the app alone.
"""

from roost.config import LoaderConfig
from roost.introspection import MountPoint
from roost.routing.router import Router


class App(Router):
    """The top-level router that controllers are mounted on.

    ``App`` is itself a :class:`Router`, so controllers may register
    bindings on it directly as well as on the sub-router they receive.
    """

    __slots__ = ("_mounts", "config")

    def __init__(self, config: LoaderConfig | None = None) -> None:
        super().__init__()
        self.config: LoaderConfig = config or LoaderConfig()
        self._mounts: list[MountPoint] = []

    @property
    def mounts(self) -> tuple[MountPoint, ...]:
        """Routers mounted on the app, in mount order."""
        return tuple(self._mounts)

    def mount(self, path: str, router: Router) -> None:
        super().mount(path, router)
        self._mounts.append(MountPoint(mount_path=path, router=router))

    async def load_controllers(self) -> str:
        """Discover and mount controllers per ``self.config``; return the report."""
        from roost.loader import ControllerLoader

        return await ControllerLoader(self.config).load(self)
