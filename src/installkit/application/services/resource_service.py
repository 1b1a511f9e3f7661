from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from installkit.core.config import AppSettings, BuildConfig
from installkit.core.errors import MissingResourceFieldError
from installkit.domain.models.resource import ResourceSpec
from installkit.infrastructure.cache.store import ResourceCache

URL_SUFFIX = ".url"
SHA_SUFFIX = ".sha"


def list_resource_ids(config: BuildConfig) -> list[str]:
    """Every ``<id>.url`` key defines one resource id, sorted for stable logs."""
    return sorted(key[: -len(URL_SUFFIX)] for key in config if key.endswith(URL_SUFFIX))


def resource_spec(config: BuildConfig, resource_id: str) -> ResourceSpec:
    url = config.value(resource_id + URL_SUFFIX)
    expected_hash = config.value(resource_id + SHA_SUFFIX)
    if url is None or expected_hash is None:
        raise MissingResourceFieldError(f"Missing url and hash for resource: {resource_id}")
    return ResourceSpec(id=resource_id, url=url, expected_hash=expected_hash)


class ResourceService:
    def __init__(self, config: BuildConfig, settings: AppSettings, cache: ResourceCache) -> None:
        self.config = config
        self.settings = settings
        self.cache = cache

    def is_configured(self, resource_id: str) -> bool:
        return (resource_id + URL_SUFFIX) in self.config or (resource_id + SHA_SUFFIX) in self.config

    def acquire(self, resource_id: str) -> Path:
        return self.cache.acquire(resource_spec(self.config, resource_id))

    def acquire_all(self, resource_ids: Iterable[str]) -> list[Path]:
        return [self.acquire(resource_id) for resource_id in resource_ids]

    def warm(self) -> list[Path]:
        """Fetch the packaging tool and payload ahead of a build."""
        specs = [
            resource_spec(self.config, self.settings.tool_resource),
            resource_spec(self.config, self.settings.payload_resource),
        ]
        return self.cache.warm(specs)
