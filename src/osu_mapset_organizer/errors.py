"""Exception hierarchy for the mapset organizer.

Per-file problems (missing audio reference, folder creation failure, missing
asset) are reported through FileResult and never raised. Only run-level
failures use these exceptions.
"""

from pathlib import Path


class OrganizerError(Exception):
    """Base exception for all organizer errors."""


class ConfigError(OrganizerError):
    """Invalid or missing configuration."""


class SourceDirectoryError(OrganizerError):
    """The mapset folder does not exist or is not a directory."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class CopyError(OrganizerError):
    """A file copy failed with an I/O error (raised only in strict mode)."""

    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        super().__init__(f"Failed to copy {source} -> {destination}: {reason}")
        self.source = source
        self.destination = destination
        self.reason = reason
