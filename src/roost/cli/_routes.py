"""``roost routes`` — print the route report.

Either loads a controllers directory into a fresh App, or reports on
an existing router resolved from an import string.  An ``App`` with
nothing mounted yet loads its configured controllers first.
"""

import argparse
import dataclasses
import sys

import anyio

from roost.app import App
from roost.cli._resolve import resolve_router
from roost.config import LoaderConfig, ReportConfig
from roost.errors import RoostError
from roost.introspection import MountPoint, introspect
from roost.loader import ControllerLoader
from roost.report import RouteReporter
from roost.routing.router import Router


def _report_config(args: argparse.Namespace) -> ReportConfig:
    return ReportConfig(color=args.color, title=args.title, dedupe=args.dedupe)


def _mount_points(router: Router) -> list[MountPoint]:
    """The router's own bindings at ``/``, then each router mounted on it."""
    if isinstance(router, App):
        return list(router.mounts)
    points = [MountPoint("/", router)] if any(layer.mount is None for layer in router.stack) else []
    points.extend(
        MountPoint(layer.path, layer.mount) for layer in router.stack if layer.mount is not None
    )
    return points


def _existing_router_report(router: Router, report: ReportConfig) -> str:
    if isinstance(router, App) and not router.mounts:
        config = dataclasses.replace(router.config, report=report)
        return anyio.run(ControllerLoader(config).load, router)
    reporter = RouteReporter(report)
    return reporter.render_mounts(introspect(mp) for mp in _mount_points(router))


def run_routes(args: argparse.Namespace) -> None:
    """Print the route report for a controllers directory or a router."""
    report = _report_config(args)
    try:
        if args.app is not None:
            output = _existing_router_report(resolve_router(args.app), report)
        else:
            config = LoaderConfig(
                controllers_dir=args.controllers_dir,
                base_route=args.base,
                suffixes=tuple(args.suffix) if args.suffix else (".py",),
                controller_attr=args.attr,
                report=report,
            )
            output = ControllerLoader(config).load_sync(App(config))
    except RoostError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not output:
        print("No routes registered.")
        return
    print(output)
