from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from installkit.core.config import AppPaths, AppSettings, BuildConfig, ToolEnvironment
from installkit.infrastructure.cache.store import ResourceCache


@dataclass(slots=True)
class CLIContext:
    paths: AppPaths
    settings: AppSettings
    environment: ToolEnvironment
    config: BuildConfig
    cache: ResourceCache
    console: Console
