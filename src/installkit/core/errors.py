from __future__ import annotations

from pathlib import Path


class InstallkitError(Exception):
    """Base error for all user-facing installkit exceptions."""


class ConfigurationError(InstallkitError):
    """Raised when configuration is invalid or incomplete."""


class MissingVersionError(ConfigurationError):
    """Raised when the product version setting is absent or blank."""


class MissingResourceFieldError(ConfigurationError):
    """Raised when a resource lacks its url or sha entry."""


class InvalidURLError(ConfigurationError):
    """Raised when a resource url is not a usable absolute URI."""


class InvalidHashFormatError(InstallkitError):
    """Raised when a hash string does not map to a supported algorithm."""


class DownloadFailedError(InstallkitError):
    """Raised when a resource cannot be transferred into the cache."""


class HashMismatchError(InstallkitError):
    """Raised when a file's digest differs from the pinned hash."""

    def __init__(self, file: Path, expected: str, actual: str) -> None:
        self.file = file
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Incorrect hash for file: {file.name}\n"
            f"Expected : {expected}\n"
            f"Actual   : {actual}"
        )


class MissingEnvironmentError(InstallkitError):
    """Raised when a required environment variable is not set."""


class UnsupportedPackageTypeError(InstallkitError):
    """Raised when no output pattern is known for a package type."""


class PackagerFailedError(InstallkitError):
    """Raised when the external packaging tool exits unsuccessfully."""


class OutputNotFoundError(InstallkitError):
    """Raised when the packager output cannot be located unambiguously."""
