"""Routers: ordered binding stacks that can be mounted under a prefix.

A :class:`Router` records every registration as a :class:`Layer` on its
``stack``, in registration order.  Dispatch belongs to the host server;
the stack is what introspection reads to build the route report.
"""

from collections.abc import Callable
from typing import Any

from roost.routing.route import Layer, Route

Handler = Callable[..., Any]


class Router:
    """An isolated collection of bindings that can be mounted under a prefix.

    Usage::

        router = Router()

        @router.get("/")
        def index():
            return "hello"

        @router.route("/items/{id}", methods=["PUT", "PATCH"])
        def update(id):
            ...

        app.mount("/api", router)

    Every registration appends one :class:`Layer` to :attr:`stack`.
    """

    __slots__ = ("_stack",)

    def __init__(self) -> None:
        self._stack: list[Layer] = []

    @property
    def stack(self) -> tuple[Layer, ...]:
        """Registered layers in registration order."""
        return tuple(self._stack)

    def router(self) -> "Router":
        """Create an empty child router."""
        return Router()

    # -- Registration --

    def add_route(
        self,
        path: str,
        handler: Handler,
        *,
        methods: list[str] | tuple[str, ...] | None = None,
        name: str | None = None,
    ) -> Route:
        """Register *handler* at *path* for *methods* (``None`` = any method)."""
        route = Route(
            path=path,
            handler=handler,
            methods=tuple(m.upper() for m in methods or ()),
            name=name,
        )
        self._stack.append(Layer(path=path, route=route))
        return route

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL path pattern relative to the router's mount point.
                Patterns such as ``{id}`` are kept verbatim.
            methods: HTTP methods. ``None`` binds every method.
            name: Optional route name.
        """

        def decorator(func: Handler) -> Handler:
            self.add_route(path, func, methods=methods, name=name)
            return func

        return decorator

    def get(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["GET"], name=name)

    def post(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["POST"], name=name)

    def put(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["PUT"], name=name)

    def delete(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["DELETE"], name=name)

    def patch(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["PATCH"], name=name)

    def head(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["HEAD"], name=name)

    def options(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["OPTIONS"], name=name)

    def all(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Bind *path* for every method."""
        return self.route(path, methods=None, name=name)

    def static(self, directory: str, path: str = "/") -> None:
        """Serve files from *directory* at *path*.

        Static mounts carry no method bindings; introspection skips them.
        """
        self._stack.append(Layer(path=path, static_dir=str(directory)))

    def mount(self, path: str, router: "Router") -> None:
        """Mount *router* so its bindings are reachable under *path*."""
        if router is self:
            msg = "A router cannot be mounted on itself."
            raise ValueError(msg)
        self._stack.append(Layer(path=path, mount=router))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} layers={len(self._stack)}>"
