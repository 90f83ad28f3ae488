"""Tests for roost.loader — controller discovery, mounting, and the load report."""

from pathlib import Path
from typing import Any

import pytest

from roost.app import App
from roost.config import LoaderConfig, ReportConfig
from roost.errors import FilesystemError, MalformedRouterError, ModuleLoadError
from roost.factories import MappingFactory
from roost.loader import ControllerLoader
from roost.testing import MemoryFilesystem


def _get_root(router: Any, app: Any) -> None:
    router.get("/")(lambda: "ok")


def _static_only(router: Any, app: Any) -> None:
    router.static("public")


def _memory_loader(
    files: dict[str, Any],
    *,
    base_route: str = "/",
    suffixes: tuple[str, ...] = (".ctrl",),
    report: ReportConfig | None = None,
) -> ControllerLoader:
    fs = MemoryFilesystem("R")
    controllers = {fs.add_file(name): ctrl for name, ctrl in files.items()}
    config = LoaderConfig(
        controllers_dir="R",
        base_route=base_route,
        suffixes=suffixes,
        report=report or ReportConfig(),
    )
    return ControllerLoader(config, filesystem=fs, factory=MappingFactory(controllers))


class TestIsController:
    def test_suffix_allow_list(self) -> None:
        loader = ControllerLoader()
        assert loader.is_controller("users.py") is True
        assert loader.is_controller("USERS.PY") is True
        assert loader.is_controller("readme.py.txt") is False
        assert loader.is_controller("notes.md") is False

    def test_ignored_prefixes(self) -> None:
        loader = ControllerLoader()
        assert loader.is_controller("__init__.py") is False
        assert loader.is_controller("_helpers.py") is False
        assert loader.is_controller(".hidden.py") is False

    def test_configurable_suffixes(self) -> None:
        loader = ControllerLoader(LoaderConfig(suffixes=(".ctrl", ".py")))
        assert loader.is_controller("a.ctrl") is True
        assert loader.is_controller("a.py") is True


class TestWalk:
    def test_mount_paths_follow_directories(self) -> None:
        loader = _memory_loader(
            {
                "api/auth/a.ctrl": _get_root,
                "api/auth/b.ctrl": _get_root,
                "charts/index.ctrl": _get_root,
            }
        )
        app = App()
        loader.walk(app)
        assert [mp.mount_path for mp in loader.mounts] == ["/api/auth", "/api/auth", "/charts"]
        assert [mp.mount_path for mp in app.mounts] == ["/api/auth", "/api/auth", "/charts"]

    def test_each_controller_gets_its_own_router(self) -> None:
        loader = _memory_loader({"api/a.ctrl": _get_root, "api/b.ctrl": _get_root})
        loader.walk(App())
        first, second = loader.mounts
        assert first.router is not second.router

    def test_controller_receives_router_and_app(self) -> None:
        received: list[tuple[Any, Any]] = []

        def controller(router: Any, app: Any) -> None:
            received.append((router, app))

        loader = _memory_loader({"x.ctrl": controller})
        app = App()
        loader.walk(app)
        (router, got_app), = received
        assert got_app is app
        assert router is loader.mounts[0].router
        assert router is not app

    def test_root_level_file_mounts_at_base(self) -> None:
        loader = _memory_loader({"index.ctrl": _get_root}, base_route="/v1//")
        loader.walk(App())
        assert loader.mounts[0].mount_path == "/v1/"

    def test_depth_first_pre_order(self) -> None:
        loader = _memory_loader(
            {
                "z.ctrl": _get_root,
                "a/deep/x.ctrl": _get_root,
                "a/y.ctrl": _get_root,
                "b/w.ctrl": _get_root,
            }
        )
        loader.walk(App())
        assert [mp.mount_path for mp in loader.mounts] == ["/", "/a/deep", "/a", "/b"]

    def test_non_controller_files_skipped(self) -> None:
        loader = _memory_loader({"a.ctrl": _get_root})
        loader._filesystem.add_file("readme.ctrl.txt")  # type: ignore[attr-defined]
        loader.walk(App())
        assert len(loader.mounts) == 1

    def test_mount_callback(self) -> None:
        seen: list[str] = []
        loader = _memory_loader({"api/a.ctrl": _get_root})
        loader.walk(App(), lambda path, router: seen.append(path))
        assert seen == ["/api"]

    def test_empty_directories_recurse_harmlessly(self) -> None:
        loader = _memory_loader({"a.ctrl": _get_root})
        loader._filesystem.add_dir("empty/nested")  # type: ignore[attr-defined]
        loader.walk(App())
        assert len(loader.mounts) == 1

    def test_missing_root(self) -> None:
        config = LoaderConfig(controllers_dir="nope")
        loader = ControllerLoader(config, filesystem=MemoryFilesystem("R"), factory=MappingFactory({}))
        app = App()
        with pytest.raises(FilesystemError):
            loader.walk(app)
        assert app.mounts == ()

    def test_module_load_error_aborts_without_rollback(self) -> None:
        fs = MemoryFilesystem("R", ["a/one.ctrl", "b/two.ctrl", "c/three.ctrl"])
        factory = MappingFactory({"R/a/one.ctrl": _get_root, "R/c/three.ctrl": _get_root})
        loader = ControllerLoader(
            LoaderConfig(controllers_dir="R", suffixes=(".ctrl",)),
            filesystem=fs,
            factory=factory,
        )
        app = App()
        with pytest.raises(ModuleLoadError):
            loader.walk(app)
        assert [mp.mount_path for mp in app.mounts] == ["/a"]


class TestLoad:
    @pytest.mark.anyio
    async def test_end_to_end_report(self) -> None:
        loader = _memory_loader(
            {
                "api/auth/a.ctrl": _get_root,
                "api/auth/b.ctrl": _get_root,
                "charts/index.ctrl": _get_root,
            }
        )
        report = await loader.load(App())
        assert report == "GET    /api/auth\nGET    /charts"

    @pytest.mark.anyio
    async def test_report_keeps_discovery_order(self) -> None:
        def many(router: Any, app: Any) -> None:
            router.post("/b")(lambda: "b")
            router.get("/a")(lambda: "a")

        loader = _memory_loader({"x/m.ctrl": many, "w/n.ctrl": _get_root})
        report = await loader.load(App())
        assert report.splitlines() == ["POST   /x/b", "GET    /x/a", "GET    /w"]

    @pytest.mark.anyio
    async def test_static_only_mount_placeholder(self) -> None:
        loader = _memory_loader({"assets/files.ctrl": _static_only, "api/a.ctrl": _get_root})
        report = await loader.load(App())
        assert report.splitlines() == ["*      /   [static]", "GET    /api"]

    @pytest.mark.anyio
    async def test_title_from_config(self) -> None:
        loader = _memory_loader({"a.ctrl": _get_root}, report=ReportConfig(title="Routes"))
        assert await loader.load(App()) == "Routes\nGET    /"

    @pytest.mark.anyio
    async def test_missing_root_rejects(self) -> None:
        loader = ControllerLoader(
            LoaderConfig(controllers_dir="missing"),
            filesystem=MemoryFilesystem("R"),
            factory=MappingFactory({}),
        )
        app = App()
        with pytest.raises(FilesystemError):
            await loader.load(app)
        assert app.mounts == ()

    @pytest.mark.anyio
    async def test_malformed_router_surfaces_bare(self) -> None:
        class _Broken:
            stack = None

        class _App(App):
            def router(self) -> Any:  # type: ignore[override]
                return _Broken()

            def mount(self, path: str, router: Any) -> None:
                pass

        loader = _memory_loader({"a.ctrl": lambda router, app: None})
        with pytest.raises(MalformedRouterError):
            await loader.load(_App())

    def test_load_sync(self) -> None:
        loader = _memory_loader({"api/a.ctrl": _get_root})
        assert loader.load_sync(App()) == "GET    /api"


CONTROLLER_SOURCE = '''
calls = []


def controller(router, app):
    calls.append(app)

    @router.get("/")
    def index():
        return "index"

    @router.post("/items")
    def create():
        return "created"
'''


class TestLocalTree:
    def _write(self, root: Path, relative: str, source: str = CONTROLLER_SOURCE) -> Path:
        file = root / relative
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_text(source, encoding="utf-8")
        return file

    @pytest.mark.anyio
    async def test_loads_python_files(self, tmp_path: Path) -> None:
        self._write(tmp_path, "api/auth/read.py")
        self._write(tmp_path, "charts/index.py")
        self._write(tmp_path, "api/__init__.py", "raise RuntimeError('never imported')\n")
        (tmp_path / "charts" / "notes.txt").write_text("ignored", encoding="utf-8")

        app = App(LoaderConfig(controllers_dir=tmp_path, base_route="/v1"))
        report = await app.load_controllers()

        assert report.splitlines() == [
            "GET    /v1/api/auth",
            "POST   /v1/api/auth/items",
            "GET    /v1/charts",
            "POST   /v1/charts/items",
        ]
        charts = [mp.router for mp in app.mounts if mp.mount_path == "/v1/charts"]
        assert charts[0].stack[1].route.handler() == "created"

    @pytest.mark.anyio
    async def test_upper_case_suffix_is_loaded(self, tmp_path: Path) -> None:
        self._write(tmp_path, "api/Users.PY", "def controller(router, app):\n    router.get('/')(lambda: 'ok')\n")
        app = App(LoaderConfig(controllers_dir=tmp_path))
        assert await app.load_controllers() == "GET    /api"

    @pytest.mark.anyio
    async def test_failing_controller_raises_module_load_error(self, tmp_path: Path) -> None:
        self._write(tmp_path, "bad.py", "def controller(router, app):\n    raise ValueError('boom')\n")
        app = App(LoaderConfig(controllers_dir=tmp_path))
        with pytest.raises(ModuleLoadError, match="ValueError: boom"):
            await app.load_controllers()

    @pytest.mark.anyio
    async def test_syntax_error_raises_module_load_error(self, tmp_path: Path) -> None:
        self._write(tmp_path, "bad.py", "def controller(:\n")
        app = App(LoaderConfig(controllers_dir=tmp_path))
        with pytest.raises(ModuleLoadError, match="SyntaxError"):
            await app.load_controllers()

    @pytest.mark.anyio
    async def test_missing_directory(self, tmp_path: Path) -> None:
        app = App(LoaderConfig(controllers_dir=tmp_path / "absent"))
        with pytest.raises(FilesystemError):
            await app.load_controllers()
        assert app.mounts == ()
