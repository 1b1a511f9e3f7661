from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from installkit.core.properties import load_properties


@dataclass(frozen=True)
class AppPaths:
    working_dir: Path
    properties_path: Path
    config_dir: Path
    cache_dir: Path
    packager_dir: Path
    dist_dir: Path


@dataclass(frozen=True)
class AppSettings:
    product: str = "netbeans"
    tool_resource: str = "nbpackage"
    payload_resource: str = "netbeans"
    runtime_prefix: str = "jdk"

    @property
    def version_key(self) -> str:
        return f"{self.product}.version"

    def runtime_resource(self, os_name: str, arch: str) -> str:
        return f"{self.runtime_prefix}.{os_name}.{arch}"


@dataclass(frozen=True)
class ToolEnvironment:
    innosetup_path: str | None = None
    app_cert_id: str | None = None
    inst_cert_id: str | None = None


@dataclass(frozen=True)
class BuildConfig(Mapping[str, str]):
    """Read-only snapshot of ``build.properties``."""

    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __getitem__(self, key: str) -> str:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def value(self, key: str) -> str | None:
        """Return the trimmed value for ``key``; blank values count as absent."""
        raw = self.entries.get(key)
        if raw is None:
            return None
        stripped = raw.strip()
        return stripped or None


DEFAULT_PROPERTIES_FILENAME = "build.properties"


def load_paths(working_dir: Path | None = None) -> AppPaths:
    root = (working_dir or Path.cwd()).expanduser().resolve()

    cache_raw = os.getenv("INSTALLKIT_CACHE_DIR")
    if cache_raw:
        cache_dir = Path(cache_raw).expanduser().resolve()
    else:
        cache_dir = root / "cache"

    return AppPaths(
        working_dir=root,
        properties_path=root / DEFAULT_PROPERTIES_FILENAME,
        config_dir=root / "config",
        cache_dir=cache_dir,
        packager_dir=root / "nbpackage",
        dist_dir=root / "dist",
    )


def load_settings(product: str | None = None) -> AppSettings:
    chosen = (product or os.getenv("INSTALLKIT_PRODUCT") or "").strip()
    if not chosen or chosen == "netbeans":
        return AppSettings()
    return AppSettings(product=chosen, payload_resource=chosen)


def load_tool_environment(environ: Mapping[str, str] | None = None) -> ToolEnvironment:
    env = os.environ if environ is None else environ
    return ToolEnvironment(
        innosetup_path=env.get("INNOSETUP_PATH"),
        app_cert_id=env.get("APP_CERT_ID"),
        inst_cert_id=env.get("INST_CERT_ID"),
    )


def load_build_config(path: Path) -> BuildConfig:
    return BuildConfig(load_properties(path))
