"""Route and Layer frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from roost.routing.router import Router


@dataclass(frozen=True, slots=True)
class Route:
    """A single method+path binding registered on a router.

    ``methods`` keeps registration order.  An empty tuple means the
    binding answers every method.
    """

    path: str
    handler: Callable[..., Any]
    methods: tuple[str, ...] = ()
    name: str | None = None

    @property
    def any_method(self) -> bool:
        return not self.methods


@dataclass(frozen=True, slots=True)
class Layer:
    """One record in a router's stack, in registration order.

    Exactly one of the fields is set:

    - ``route``: a method+path binding
    - ``static_dir``: a static-file mount served at ``path``
    - ``mount``: a nested router mounted at ``path``
    """

    path: str = "/"
    route: Route | None = None
    static_dir: str | None = None
    mount: "Router | None" = None
