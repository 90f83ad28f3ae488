"""Roost — mount controllers from a directory tree and list their routes.

Each file under the controllers directory receives its own router,
mounted at a path that mirrors the file's directory.  After loading,
every mounted binding is introspected into an aligned route report.

Basic usage::

    from roost import App, LoaderConfig

    app = App(LoaderConfig(controllers_dir="controllers", base_route="/api"))
    report = await app.load_controllers()
    print(report)

Controller file (``controllers/users/index.py``)::

    def controller(router, app):
        @router.get("/")
        def list_users():
            ...
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppResolutionError",
    "ConfigurationError",
    "ControllerLoader",
    "FilesystemError",
    "ImportFactory",
    "LoaderConfig",
    "MalformedRouterError",
    "MappingFactory",
    "ModuleLoadError",
    "MountPoint",
    "PathMapper",
    "ReportConfig",
    "RoostError",
    "RouteEntry",
    "RouteReporter",
    "Router",
    "compute_mount_path",
    "introspect",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "App": "roost.app",
    "AppResolutionError": "roost.errors",
    "ConfigurationError": "roost.errors",
    "ControllerLoader": "roost.loader",
    "FilesystemError": "roost.errors",
    "ImportFactory": "roost.factories",
    "LoaderConfig": "roost.config",
    "MalformedRouterError": "roost.errors",
    "MappingFactory": "roost.factories",
    "ModuleLoadError": "roost.errors",
    "MountPoint": "roost.introspection",
    "PathMapper": "roost.mapping",
    "ReportConfig": "roost.config",
    "RoostError": "roost.errors",
    "RouteEntry": "roost.introspection",
    "RouteReporter": "roost.report",
    "Router": "roost.routing.router",
    "compute_mount_path": "roost.mapping",
    "introspect": "roost.introspection",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
