from __future__ import annotations

import argparse

from rich.table import Table

from installkit.application.services.resource_service import ResourceService
from installkit.application.services.validation_service import ValidationReport, ValidationService
from installkit.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("validate", help="Check build.properties without network access")
    parser.set_defaults(handler=run_validate)

    parser = subparsers.add_parser(
        "validate-downloads",
        help="Validate, then download and verify every configured resource",
    )
    parser.set_defaults(handler=run_validate_downloads)

    parser = subparsers.add_parser(
        "validate-cache",
        help="Validate, then warm the cache with the packaging tool and payload",
    )
    parser.set_defaults(handler=run_validate_cache)


def run_validate(args: argparse.Namespace, ctx: CLIContext) -> int:
    report = _service(ctx).validate()
    _print_report(ctx, report)
    return 0


def run_validate_downloads(args: argparse.Namespace, ctx: CLIContext) -> int:
    report = _service(ctx).validate(fetch_on_validate=True)
    _print_report(ctx, report)
    return 0


def run_validate_cache(args: argparse.Namespace, ctx: CLIContext) -> int:
    service = _service(ctx)
    report = service.validate()
    _print_report(ctx, report)
    for path in service.resources.warm():
        ctx.console.print(f"[green]Cached[/green] {path.name}")
    return 0


def _service(ctx: CLIContext) -> ValidationService:
    resources = ResourceService(ctx.config, ctx.settings, ctx.cache)
    return ValidationService(ctx.config, ctx.settings, resources)


def _print_report(ctx: CLIContext, report: ValidationReport) -> None:
    table = Table(title=f"Resources ({len(report.resource_ids)})")
    table.add_column("ID")
    table.add_column("Status")
    table.add_column("Path", overflow="fold")
    for resource_id in report.resource_ids:
        fetched = report.fetched.get(resource_id)
        status = "verified" if fetched is not None else "valid"
        table.add_row(resource_id, status, str(fetched) if fetched is not None else "")
    ctx.console.print(table)
    ctx.console.print(f"[green]Configuration valid[/green] version {report.version}")
