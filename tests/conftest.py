"""Shared fixtures for the roost test suite."""

import pytest

from roost.introspection import MountPoint
from roost.routing.router import Router


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def _handler() -> str:
    return "ok"


@pytest.fixture
def api_mount() -> MountPoint:
    """A router with GET / and POST /x mounted at /api."""
    router = Router()
    router.add_route("/", _handler, methods=["GET"])
    router.add_route("/x", _handler, methods=["POST"])
    return MountPoint(mount_path="/api", router=router)
