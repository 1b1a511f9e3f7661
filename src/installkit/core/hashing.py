from __future__ import annotations

import hashlib
from enum import Enum
from pathlib import Path

from installkit.core.errors import HashMismatchError, InvalidHashFormatError


class HashAlgorithm(Enum):
    SHA1 = ("sha1", 40)
    SHA256 = ("sha256", 64)
    SHA512 = ("sha512", 128)

    def __init__(self, hashlib_name: str, hex_length: int) -> None:
        self.hashlib_name = hashlib_name
        self.hex_length = hex_length


def identify_algorithm(hash_string: str) -> HashAlgorithm:
    """Pick the algorithm whose hex digest length matches ``hash_string``."""
    for alg in HashAlgorithm:
        if alg.hex_length == len(hash_string):
            return alg
    raise InvalidHashFormatError(f"Invalid hash format: {hash_string!r}")


def compute_file_digest(
    path: Path,
    alg: HashAlgorithm = HashAlgorithm.SHA256,
    chunk_size: int = 1024 * 1024,
) -> str:
    h = hashlib.new(alg.hashlib_name)
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def verify_file_digest(path: Path, expected_hash: str) -> HashAlgorithm:
    """Check ``path`` against ``expected_hash``, comparing case-insensitively.

    The algorithm is inferred from the length of ``expected_hash``.
    """
    try:
        alg = identify_algorithm(expected_hash)
    except InvalidHashFormatError as exc:
        raise InvalidHashFormatError(
            f"Invalid hash format: {expected_hash!r} for file: {path.name}"
        ) from exc

    actual = compute_file_digest(path, alg)
    if actual.lower() != expected_hash.lower():
        raise HashMismatchError(path, expected_hash, actual)
    return alg
