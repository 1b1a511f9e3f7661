import hashlib
from pathlib import Path

import pytest

from installkit.application.services.artifact_service import ArtifactService, output_pattern
from installkit.core.errors import OutputNotFoundError, UnsupportedPackageTypeError


@pytest.mark.parametrize(
    ("package_type", "pattern"),
    [("deb", "*.deb"), ("rpm", "*.rpm"), ("innosetup", "*.exe"), ("pkg", "*.pkg")],
)
def test_output_pattern(package_type: str, pattern: str) -> None:
    assert output_pattern(package_type) == pattern


def test_output_pattern_unknown_type() -> None:
    with pytest.raises(UnsupportedPackageTypeError, match="msi"):
        output_pattern("msi")


def test_process_output_writes_checksum_sidecar(tmp_path: Path) -> None:
    dist = tmp_path / "dist"
    dist.mkdir()
    artifact = dist / "apache-netbeans_27-1_amd64.deb"
    artifact.write_bytes(b"debian package")
    (dist / "notes.txt").write_text("ignored", encoding="utf-8")

    result = ArtifactService(dist).process_output("deb")

    digest = hashlib.sha256(b"debian package").hexdigest()
    assert result.path == artifact
    assert result.digest_sha256 == digest
    assert result.checksum_path == dist / "apache-netbeans_27-1_amd64.deb.sha256"
    assert result.checksum_path.read_text(encoding="utf-8") == f"{digest}  apache-netbeans_27-1_amd64.deb\n"


def test_locate_requires_a_match(tmp_path: Path) -> None:
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "setup.msi").write_bytes(b"")

    with pytest.raises(OutputNotFoundError, match=r"\*\.exe"):
        ArtifactService(dist).locate("innosetup")


def test_locate_missing_output_dir(tmp_path: Path) -> None:
    with pytest.raises(OutputNotFoundError):
        ArtifactService(tmp_path / "dist").locate("pkg")


def test_locate_rejects_multiple_matches(tmp_path: Path) -> None:
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "a.rpm").write_bytes(b"a")
    (dist / "b.rpm").write_bytes(b"b")

    with pytest.raises(OutputNotFoundError, match="found 2"):
        ArtifactService(dist).locate("rpm")
