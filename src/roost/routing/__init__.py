"""Routing — registration stacks and mounting.

Controllers register bindings on a :class:`Router`; the application
mounts each router at a prefix.
"""

from roost.routing.route import Layer, Route
from roost.routing.router import Router

__all__ = [
    "Layer",
    "Route",
    "Router",
]
