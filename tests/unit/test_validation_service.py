import hashlib
from pathlib import Path

import pytest

from installkit.application.services.resource_service import ResourceService
from installkit.application.services.validation_service import (
    ValidationService,
    is_valid_resource_url,
)
from installkit.core.config import AppSettings, BuildConfig
from installkit.core.errors import (
    InvalidHashFormatError,
    InvalidURLError,
    MissingResourceFieldError,
    MissingVersionError,
)
from installkit.infrastructure.cache.store import ResourceCache

NB_BYTES = b"netbeans payload"
TOOL_BYTES = b"nbpackage tool"


class RecordingFetcher:
    def __init__(self, payloads: dict[str, bytes] | None = None) -> None:
        self.payloads = payloads or {}
        self.calls: list[str] = []

    def __call__(self, url: str, destination: Path) -> None:
        self.calls.append(url)
        destination.write_bytes(self.payloads[url])


def _valid_entries() -> dict[str, str]:
    return {
        "netbeans.version": "27",
        "netbeans.url": "https://example.org/netbeans-27-bin.zip",
        "netbeans.sha": hashlib.sha512(NB_BYTES).hexdigest(),
        "nbpackage.url": "https://example.org/nbpackage-1.0-bin.zip",
        "nbpackage.sha": hashlib.sha256(TOOL_BYTES).hexdigest(),
    }


def _service(tmp_path: Path, entries: dict[str, str], fetch: RecordingFetcher) -> ValidationService:
    config = BuildConfig(entries)
    settings = AppSettings()
    resources = ResourceService(config, settings, ResourceCache(tmp_path / "cache", fetch=fetch))
    return ValidationService(config, settings, resources)


def test_validate_accepts_complete_configuration(tmp_path: Path) -> None:
    fetch = RecordingFetcher()
    report = _service(tmp_path, _valid_entries(), fetch).validate()

    assert report.version == "27"
    assert report.resource_ids == ["nbpackage", "netbeans"]
    assert report.fetched == {}
    assert fetch.calls == []
    assert not (tmp_path / "cache").exists()


def test_validate_with_fetch_acquires_every_resource(tmp_path: Path) -> None:
    fetch = RecordingFetcher(
        {
            "https://example.org/netbeans-27-bin.zip": NB_BYTES,
            "https://example.org/nbpackage-1.0-bin.zip": TOOL_BYTES,
        }
    )
    report = _service(tmp_path, _valid_entries(), fetch).validate(fetch_on_validate=True)

    assert sorted(report.fetched) == ["nbpackage", "netbeans"]
    assert report.fetched["netbeans"] == tmp_path / "cache" / "netbeans-27-bin.zip"
    assert len(fetch.calls) == 2


def test_validate_fails_before_any_fetch(tmp_path: Path) -> None:
    entries = _valid_entries()
    entries["netbeans.version"] = "  "
    del entries["nbpackage.sha"]
    fetch = RecordingFetcher()

    with pytest.raises(MissingVersionError):
        _service(tmp_path, entries, fetch).validate(fetch_on_validate=True)
    assert fetch.calls == []


def test_validate_missing_sha_fails_before_any_fetch(tmp_path: Path) -> None:
    entries = _valid_entries()
    del entries["nbpackage.sha"]
    fetch = RecordingFetcher()

    with pytest.raises(MissingResourceFieldError, match="nbpackage"):
        _service(tmp_path, entries, fetch).validate(fetch_on_validate=True)
    assert fetch.calls == []


def test_validate_blank_url(tmp_path: Path) -> None:
    entries = _valid_entries()
    entries["netbeans.url"] = " "

    with pytest.raises(MissingResourceFieldError, match="netbeans"):
        _service(tmp_path, entries, RecordingFetcher()).validate()


def test_validate_invalid_url(tmp_path: Path) -> None:
    entries = _valid_entries()
    entries["netbeans.url"] = "https://example.org/bad path.zip"

    with pytest.raises(InvalidURLError, match="netbeans"):
        _service(tmp_path, entries, RecordingFetcher()).validate()


@pytest.mark.parametrize("bad_hash", ["abc", "0" * 63, "z" * 64])
def test_validate_invalid_hash(tmp_path: Path, bad_hash: str) -> None:
    entries = _valid_entries()
    entries["nbpackage.sha"] = bad_hash

    with pytest.raises(InvalidHashFormatError, match="nbpackage"):
        _service(tmp_path, entries, RecordingFetcher()).validate()


def test_validate_uses_product_version_key() -> None:
    entries = {"product.version": "1.2.3"}
    settings = AppSettings(product="product")

    report = ValidationService(BuildConfig(entries), settings).validate()

    assert report.version == "1.2.3"
    with pytest.raises(MissingVersionError, match="netbeans.version"):
        ValidationService(BuildConfig(entries), AppSettings()).validate()


@pytest.mark.parametrize(
    ("url", "ok"),
    [
        ("https://example.org/a/b/tool.zip", True),
        ("http://example.org:8080/tool.zip", True),
        ("file:///srv/mirror/tool.zip", True),
        ("example.org/tool.zip", False),
        ("https:///tool.zip", False),
        ("https://example.org/", False),
        ("https://example.org:port/tool.zip", False),
        ("https://example.org/tool .zip", False),
        ("https://example.org/%2E%2E", False),
    ],
)
def test_is_valid_resource_url(url: str, ok: bool) -> None:
    assert is_valid_resource_url(url) is ok
