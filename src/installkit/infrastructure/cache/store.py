from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from installkit.core.files import ensure_directory
from installkit.core.hashing import verify_file_digest
from installkit.domain.models.resource import ResourceSpec
from installkit.infrastructure.http.downloader import download_to_file

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, Path], None]


class ResourceCache:
    """Flat directory of downloaded resources, keyed by URL file name.

    Files are written once and verified against their pinned hash on every
    access. A cached file that fails verification is an error; it is never
    replaced automatically.
    """

    def __init__(self, cache_dir: Path, fetch: Fetcher = download_to_file) -> None:
        self.cache_dir = cache_dir
        self.fetch = fetch

    def ensure_layout(self) -> bool:
        """Create the cache directory. Returns True if it already existed."""
        existed = self.cache_dir.is_dir()
        ensure_directory(self.cache_dir)
        return existed

    def path_for(self, spec: ResourceSpec) -> Path:
        return self.cache_dir / spec.file_name

    def acquire(self, spec: ResourceSpec) -> Path:
        destination = self.path_for(spec)
        if destination.exists():
            logger.info("Cache hit for %s: %s", spec.id, destination.name)
        else:
            ensure_directory(self.cache_dir)
            logger.info("Downloading %s from %s", spec.id, spec.url)
            self.fetch(spec.url, destination)

        logger.info("Verifying: %s", destination.name)
        verify_file_digest(destination, spec.expected_hash)
        return destination

    def warm(self, specs: Iterable[ResourceSpec]) -> list[Path]:
        return [self.acquire(spec) for spec in specs]

    def list_entries(self) -> list[str]:
        if not self.cache_dir.is_dir():
            return []
        return sorted(p.name for p in self.cache_dir.iterdir())
