from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import unquote, urlsplit


@dataclass(frozen=True, slots=True)
class ResourceSpec:
    id: str
    url: str
    expected_hash: str

    @property
    def file_name(self) -> str:
        """Last path segment of the URL, used as the cache file name."""
        path = unquote(urlsplit(self.url).path)
        return path.rsplit("/", 1)[-1]
