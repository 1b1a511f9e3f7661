from __future__ import annotations

import shutil
import stat
from pathlib import Path


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def make_executable(path: Path) -> None:
    # rwxr-xr-x
    path.chmod(
        stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH
    )


def glob_sorted(directory: Path, pattern: str) -> list[Path]:
    return sorted(p for p in directory.glob(pattern) if p.is_file())


def reset_directory(path: Path) -> None:
    """Remove ``path`` and everything under it, then recreate it empty."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
