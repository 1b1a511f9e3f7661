from __future__ import annotations

import logging
from pathlib import Path

from installkit.core.errors import OutputNotFoundError, UnsupportedPackageTypeError
from installkit.core.files import glob_sorted
from installkit.core.hashing import HashAlgorithm, compute_file_digest
from installkit.domain.models.build import BuildArtifact

logger = logging.getLogger(__name__)

OUTPUT_PATTERNS: dict[str, str] = {
    "deb": "*.deb",
    "rpm": "*.rpm",
    "innosetup": "*.exe",
    "pkg": "*.pkg",
}

CHECKSUM_SUFFIX = ".sha256"


def output_pattern(package_type: str) -> str:
    try:
        return OUTPUT_PATTERNS[package_type]
    except KeyError:
        raise UnsupportedPackageTypeError(
            f"Unsupported package type: {package_type} "
            f"(expected one of: {', '.join(sorted(OUTPUT_PATTERNS))})"
        ) from None


class ArtifactService:
    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir

    def locate(self, package_type: str) -> Path:
        pattern = output_pattern(package_type)
        matches = glob_sorted(self.output_dir, pattern) if self.output_dir.is_dir() else []
        if not matches:
            raise OutputNotFoundError(f"No file found matching {pattern} in {self.output_dir}")
        if len(matches) > 1:
            names = ", ".join(p.name for p in matches)
            raise OutputNotFoundError(
                f"Expected one file matching {pattern} in {self.output_dir}, found {len(matches)}: {names}"
            )
        return matches[0]

    def write_checksum(self, artifact: Path) -> BuildArtifact:
        digest = compute_file_digest(artifact, HashAlgorithm.SHA256)
        checksum_path = artifact.with_name(artifact.name + CHECKSUM_SUFFIX)
        checksum_path.write_text(f"{digest}  {artifact.name}\n", encoding="utf-8")
        logger.info("Wrote %s", checksum_path.name)
        return BuildArtifact(path=artifact, digest_sha256=digest, checksum_path=checksum_path)

    def process_output(self, package_type: str) -> BuildArtifact:
        return self.write_checksum(self.locate(package_type))
