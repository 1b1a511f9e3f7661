from __future__ import annotations

import logging
import shutil
import subprocess
import zipfile
from pathlib import Path, PurePosixPath

from installkit.core.config import AppPaths, ToolEnvironment
from installkit.core.errors import ConfigurationError, PackagerFailedError
from installkit.core.files import ensure_directory, make_executable
from installkit.domain.models.build import BuildTarget

logger = logging.getLogger(__name__)

TOOL_DIR_PATTERN = "nbpackage*"
LAUNCHER_NAME = "nbpackage"


class PackagerService:
    """Prepares and drives the external packaging tool for one build target."""

    def __init__(self, paths: AppPaths, target: BuildTarget, environment: ToolEnvironment) -> None:
        self.paths = paths
        self.target = target
        self.environment = environment

    def configure(self, tool_archive: Path) -> Path:
        """Unpack the tool once into the working directory and return its launcher."""
        tool_dir = self.paths.packager_dir
        if tool_dir.exists():
            logger.info("Found existing packager dir: %s", tool_dir)
        else:
            unpack_tool(tool_archive, tool_dir)

        bin_dir = tool_dir / "bin"
        if self.target.os == "windows":
            launcher = bin_dir / f"{LAUNCHER_NAME}.cmd"
        else:
            launcher = bin_dir / LAUNCHER_NAME
        if not launcher.is_file():
            raise ConfigurationError(
                f"Packager launcher not found: {launcher} (remove {tool_dir} to unpack again)"
            )
        if self.target.os != "windows":
            make_executable(launcher)
        return launcher

    def package_config(self) -> Path:
        path = self.paths.config_dir / f"{self.target.config_name}.properties"
        if not path.is_file():
            raise ConfigurationError(f"Package config not found: {path}")
        return path

    def build_command_line(
        self,
        launcher: Path,
        payload: Path,
        package_config: Path,
        output_dir: Path,
        version: str,
        runtime: Path | None = None,
    ) -> list[str]:
        cmd = [
            str(launcher),
            "--verbose",
            "--input",
            str(payload),
            "--config",
            str(package_config),
            f"-Pversion={version}",
        ]
        if runtime is not None:
            cmd.append(f"-Pruntime={runtime}")

        if self.target.package_type == "innosetup":
            cmd.append(f"-Pinnosetup.tool={self.environment.innosetup_path}")
        elif self.target.package_type == "pkg":
            if self.environment.app_cert_id is not None:
                cmd.append(f"-Pmacos.codesign-id={self.environment.app_cert_id}")
            if self.environment.inst_cert_id is not None:
                cmd.append(f"-Pmacos.pkgbuild-id={self.environment.inst_cert_id}")

        cmd.extend(["--output", str(output_dir)])
        return cmd

    def run(self, cmd: list[str]) -> None:
        logger.info("Running packager: %s", cmd)
        completed = _run(cmd)
        if completed.returncode != 0:
            raise PackagerFailedError(
                f"Packager exited with status {completed.returncode}: {cmd[0]}"
            )


def unpack_tool(archive: Path, tool_dir: Path) -> None:
    """Extract into a sibling staging dir and move it into place only on success."""
    staging = tool_dir.with_name(f".{tool_dir.name}.tmp")
    if staging.exists():
        shutil.rmtree(staging)
    staging.mkdir()
    try:
        extract_tool_archive(archive, staging)
    except (zipfile.BadZipFile, OSError) as exc:
        shutil.rmtree(staging, ignore_errors=True)
        raise ConfigurationError(f"Cannot unpack packager archive {archive.name}: {exc}") from exc
    except ConfigurationError:
        shutil.rmtree(staging, ignore_errors=True)
        raise
    staging.rename(tool_dir)


def extract_tool_archive(archive: Path, destination: Path) -> None:
    """Copy the archive's ``nbpackage*`` top-level directory into ``destination``."""
    with zipfile.ZipFile(archive) as zf:
        names = [PurePosixPath(name) for name in zf.namelist()]
        roots = sorted({name.parts[0] for name in names if len(name.parts) > 1})
        matches = [root for root in roots if PurePosixPath(root).match(TOOL_DIR_PATTERN)]
        if not matches:
            raise ConfigurationError(
                f"No {TOOL_DIR_PATTERN} directory found in {archive.name}"
            )
        source_root = matches[0]

        for info in zf.infolist():
            name = PurePosixPath(info.filename)
            if len(name.parts) < 2 or name.parts[0] != source_root:
                continue
            relative = PurePosixPath(*name.parts[1:])
            if ".." in relative.parts:
                raise ConfigurationError(f"Unsafe path in {archive.name}: {info.filename}")
            target = destination.joinpath(*relative.parts)
            if info.is_dir():
                ensure_directory(target)
                continue
            ensure_directory(target.parent)
            with zf.open(info) as src, target.open("xb") as dst:
                shutil.copyfileobj(src, dst)


def _run(cmd: list[str]) -> subprocess.CompletedProcess[bytes]:
    # Standard streams are inherited; no timeout.
    return subprocess.run(cmd, check=False)
