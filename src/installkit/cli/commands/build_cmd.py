from __future__ import annotations

import argparse

from rich.panel import Panel

from installkit.application.services.build_service import BuildService
from installkit.application.services.resource_service import ResourceService
from installkit.application.services.validation_service import ValidationService
from installkit.cli.context import CLIContext
from installkit.domain.models.build import BuildTarget


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("build", help="Download resources and build one installer")
    parser.add_argument("os", help="Target operating system, e.g. linux, windows, macos")
    parser.add_argument("arch", help="Target architecture, e.g. x64, aarch64")
    parser.add_argument("package_type", help="Package type: deb, rpm, innosetup or pkg")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    resources = ResourceService(ctx.config, ctx.settings, ctx.cache)
    report = ValidationService(ctx.config, ctx.settings).validate()

    target = BuildTarget(os=args.os, arch=args.arch, package_type=args.package_type)
    service = BuildService(
        paths=ctx.paths,
        settings=ctx.settings,
        environment=ctx.environment,
        resources=resources,
        target=target,
    )
    artifact = service.build(report.version)

    ctx.console.print(
        Panel.fit(
            f"Artifact: {artifact.path}\n"
            f"SHA-256: {artifact.digest_sha256}\n"
            f"Checksum file: {artifact.checksum_path.name}",
            title=f"Build {target.config_name}",
        )
    )
    return 0
