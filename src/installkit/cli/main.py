from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from installkit.cli.commands import build_cmd, validate_cmd
from installkit.cli.context import CLIContext
from installkit.core.config import (
    AppPaths,
    BuildConfig,
    load_build_config,
    load_paths,
    load_settings,
    load_tool_environment,
)
from installkit.core.errors import ConfigurationError, InstallkitError
from installkit.core.logging import configure_logging
from installkit.infrastructure.cache.store import ResourceCache

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="installkit",
        description="Download hash-pinned resources and build installers",
    )
    parser.add_argument(
        "--working-dir",
        type=Path,
        default=None,
        help="Directory holding build.properties, config/ and cache/ (default: current working directory)",
    )
    parser.add_argument(
        "--product",
        default=None,
        help="Product name; selects the <product>.version key (default: netbeans)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command")
    build_cmd.register(subparsers)
    validate_cmd.register(subparsers)
    parser.set_defaults(handler=validate_cmd.run_validate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    configure_logging(args.verbose, console=console)

    try:
        ctx = _prepare_context(args, console)
        code = args.handler(args, ctx)
    except InstallkitError as exc:
        logger.error(str(exc))
        return 1

    if code == 0:
        console.print("OK - Exiting")
    return code


def _prepare_context(args: argparse.Namespace, console: Console) -> CLIContext:
    paths = load_paths(args.working_dir)
    console.print(f"Working Dir: {paths.working_dir}")

    cache = ResourceCache(paths.cache_dir)
    if cache.ensure_layout():
        _print_cache(console, cache)
    else:
        console.print(f"[yellow]Created cache directory[/yellow] {paths.cache_dir}")

    config = _load_config(paths)
    _print_config(console, config)

    return CLIContext(
        paths=paths,
        settings=load_settings(args.product),
        environment=load_tool_environment(),
        config=config,
        cache=cache,
        console=console,
    )


def _load_config(paths: AppPaths) -> BuildConfig:
    if not paths.properties_path.is_file():
        raise ConfigurationError(f"Configuration not found: {paths.properties_path}")
    return load_build_config(paths.properties_path)


def _print_cache(console: Console, cache: ResourceCache) -> None:
    table = Table(title=f"Cache {cache.cache_dir}")
    table.add_column("File", overflow="fold")
    for name in cache.list_entries():
        table.add_row(name)
    console.print(table)


def _print_config(console: Console, config: BuildConfig) -> None:
    table = Table(title="Configuration")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key in sorted(config):
        table.add_row(key, config[key])
    console.print(table)


if __name__ == "__main__":
    raise SystemExit(main())
