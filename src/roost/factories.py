"""Controller factories — turn a discovered file into a controller callable.

Loading is an explicit, injectable step: the loader hands each
qualifying path to a :class:`ControllerFactory` and calls whatever it
returns as ``controller(router, app)``.
"""

import importlib.machinery
import importlib.util
import logging
import re
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol, runtime_checkable

from roost.errors import ModuleLoadError

logger = logging.getLogger("roost.factories")

Controller = Callable[[Any, Any], object]

_UNSAFE_NAME_RE = re.compile(r"\W")


@runtime_checkable
class ControllerFactory(Protocol):
    def resolve(self, path: str) -> Controller:
        """Return the controller for the file at *path*.

        Raises ``ModuleLoadError`` when the file cannot provide one.
        """
        ...


class ImportFactory:
    """Load controller files as Python modules.

    Each file is executed at most once; later ``resolve`` calls for the
    same resolved path return the cached controller.  Modules are
    registered in ``sys.modules`` under a unique dotted name so imports
    inside controller files (pickling, dataclasses, relative lookups)
    behave normally.

    Args:
        attribute: Module attribute holding the controller callable.
        package: Dotted prefix for the generated module names.
    """

    __slots__ = ("_cache", "attribute", "package")

    def __init__(self, attribute: str = "controller", package: str = "roost_controllers") -> None:
        self.attribute = attribute
        self.package = package
        self._cache: dict[Path, Controller] = {}

    def resolve(self, path: str) -> Controller:
        file = Path(path).resolve()
        cached = self._cache.get(file)
        if cached is not None:
            return cached

        module = self._load_module(file)
        controller = getattr(module, self.attribute, None)
        if controller is None:
            msg = f"module has no {self.attribute!r} attribute"
            raise ModuleLoadError(str(path), msg)
        if not callable(controller):
            msg = f"{self.attribute!r} is a {type(controller).__name__}, not a callable"
            raise ModuleLoadError(str(path), msg)

        self._cache[file] = controller
        return controller

    def _module_name(self, file: Path) -> str:
        # Parent directory + stem keeps names readable and distinct for
        # same-named files in different directories.
        parts = [*file.parent.parts[-2:], file.stem]
        safe = [_UNSAFE_NAME_RE.sub("_", p) for p in parts if p not in ("/", "\\")]
        return f"{self.package}.{'.'.join(safe)}_{abs(hash(file)):x}"

    def _load_module(self, file: Path) -> ModuleType:
        module_name = self._module_name(file)
        # Explicit loader: the suffix allow-list, not importlib's, decides
        # which files are controllers (``Users.PY``, ``.ctrl``).
        loader = importlib.machinery.SourceFileLoader(module_name, str(file))
        spec = importlib.util.spec_from_file_location(module_name, file, loader=loader)
        if spec is None:
            raise ModuleLoadError(str(file), "not an importable Python file")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(module_name, None)
            raise ModuleLoadError(str(file), f"{type(exc).__name__}: {exc}") from exc

        logger.debug("Loaded controller module %s from %s", module_name, file)
        return module


class MappingFactory:
    """Controllers supplied up front, keyed by path.

    Used in tests and by applications that register controllers
    explicitly instead of importing files::

        factory = MappingFactory({"controllers/api/users.py": UsersController})
    """

    __slots__ = ("_controllers",)

    def __init__(self, controllers: Mapping[str, Controller]) -> None:
        self._controllers = {Path(k).as_posix(): v for k, v in controllers.items()}

    def resolve(self, path: str) -> Controller:
        try:
            return self._controllers[Path(path).as_posix()]
        except KeyError:
            raise ModuleLoadError(str(path), "no controller registered for this path") from None
