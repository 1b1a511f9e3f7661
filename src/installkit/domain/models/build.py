from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class BuildTarget:
    os: str
    arch: str
    package_type: str

    @property
    def config_name(self) -> str:
        return f"{self.os}-{self.arch}-{self.package_type}"


@dataclass(frozen=True, slots=True)
class BuildArtifact:
    path: Path
    digest_sha256: str
    checksum_path: Path
