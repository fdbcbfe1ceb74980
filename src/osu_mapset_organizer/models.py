"""Core enums, constants, and type definitions for the mapset organizer.

Enums:
    Section      -- Extractor state: whether the current line is inside [Events].
    AssetKind    -- Which of the three per-difficulty assets a copy refers to.
    AssetStatus  -- Outcome of one asset placement (copied, missing, failed, planned).
    FileStatus   -- Outcome of one difficulty file (organized, skipped, failed).
"""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

DIFFICULTY_EXTENSION = ".osu"
EVENTS_HEADER = "[Events]"


class Section(StrEnum):
    OUTSIDE = "outside"
    EVENTS = "events"


class AssetKind(StrEnum):
    DIFFICULTY = "difficulty"
    AUDIO = "audio"
    BACKGROUND = "background"


class AssetStatus(StrEnum):
    COPIED = "copied"
    MISSING = "missing"
    FAILED = "failed"
    PLANNED = "planned"


class FileStatus(StrEnum):
    ORGANIZED = "organized"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class DifficultyMetadata:
    """Fields pulled from one difficulty file. Only audio_filename is mandatory."""

    source_path: Path
    audio_filename: str = ""
    background_filename: str = ""
    title: str = ""
    artist: str = ""
    version: str = ""

    @property
    def is_valid(self) -> bool:
        return bool(self.audio_filename)


@dataclass
class Extraction:
    """Either a valid metadata record or the reason the file is unusable."""

    source_path: Path
    metadata: DifficultyMetadata | None = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.metadata is not None


@dataclass
class AssetResult:
    kind: AssetKind
    filename: str
    status: AssetStatus
    destination: Path | None = None
    error: str = ""


@dataclass
class FileResult:
    """Outcome of organizing a single difficulty file."""

    source_path: Path
    status: FileStatus
    folder_name: str = ""
    reason: str = ""
    assets: list[AssetResult] = field(default_factory=list)


@dataclass
class RunSummary:
    """Result summary from organizing one mapset folder."""

    source_dir: Path
    results: list[FileResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def organized(self) -> int:
        return sum(1 for r in self.results if r.status == FileStatus.ORGANIZED)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.status == FileStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == FileStatus.FAILED)
