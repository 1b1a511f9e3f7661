from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit

from installkit.application.services.resource_service import (
    SHA_SUFFIX,
    URL_SUFFIX,
    ResourceService,
    list_resource_ids,
)
from installkit.core.config import AppSettings, BuildConfig
from installkit.core.errors import (
    InvalidHashFormatError,
    InvalidURLError,
    MissingResourceFieldError,
    MissingVersionError,
)
from installkit.core.hashing import identify_algorithm
from installkit.domain.models.resource import ResourceSpec

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidationReport:
    version: str
    resource_ids: list[str]
    fetched: dict[str, Path] = field(default_factory=dict)


class ValidationService:
    """Rejects a malformed configuration before any network or process work.

    Checks stop at the first violation. Resources are only fetched, when
    asked to, after every resource entry has passed the syntactic checks.
    """

    def __init__(
        self,
        config: BuildConfig,
        settings: AppSettings,
        resources: ResourceService | None = None,
    ) -> None:
        self.config = config
        self.settings = settings
        self.resources = resources

    def validate(self, fetch_on_validate: bool = False) -> ValidationReport:
        version = self.config.value(self.settings.version_key)
        if version is None:
            raise MissingVersionError(f"{self.settings.version_key} is not set")

        resource_ids = list_resource_ids(self.config)
        for resource_id in resource_ids:
            self._check_url(resource_id)
            self._check_hash(resource_id)

        report = ValidationReport(version=version, resource_ids=resource_ids)
        if fetch_on_validate:
            if self.resources is None:
                raise ValueError("fetch_on_validate requires a ResourceService")
            paths = self.resources.acquire_all(resource_ids)
            report.fetched = dict(zip(resource_ids, paths))

        logger.info("Configuration valid: %d resource(s)", len(resource_ids))
        return report

    def _check_url(self, resource_id: str) -> None:
        url = self.config.value(resource_id + URL_SUFFIX)
        if url is None:
            raise MissingResourceFieldError(f"Resource url not set: {resource_id}")
        if not is_valid_resource_url(url):
            raise InvalidURLError(f"Invalid URL for resource: {resource_id} ({url})")

    def _check_hash(self, resource_id: str) -> None:
        hash_string = self.config.value(resource_id + SHA_SUFFIX)
        if hash_string is None:
            raise MissingResourceFieldError(f"Resource hash not set: {resource_id}")
        try:
            identify_algorithm(hash_string)
        except InvalidHashFormatError as exc:
            raise InvalidHashFormatError(f"Invalid hash for resource: {resource_id}") from exc
        if not _is_hex(hash_string):
            raise InvalidHashFormatError(f"Invalid hash for resource: {resource_id} (not hex)")


def is_valid_resource_url(url: str) -> bool:
    if any(ch.isspace() or ord(ch) < 0x20 for ch in url):
        return False
    try:
        parts = urlsplit(url)
        parts.port  # raises on a malformed port
    except ValueError:
        return False
    if not parts.scheme:
        return False
    if parts.scheme != "file" and not parts.netloc:
        return False
    file_name = ResourceSpec(id="", url=url, expected_hash="").file_name
    return file_name not in {"", ".", ".."} and "\\" not in file_name


def _is_hex(value: str) -> bool:
    return all(ch in "0123456789abcdefABCDEF" for ch in value)
