"""Metadata extraction from .osu difficulty files.

The format is line oriented: bracketed section headers ("[General]",
"[Events]", ...), "Key:value" lines, and comma-separated records. Only the
fields needed to name and populate an output folder are read.
"""

import re
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from .models import EVENTS_HEADER, DifficultyMetadata, Extraction, Section

log = logger.bind(stage="extract")

MISSING_AUDIO = "missing audio reference"

# Applied to every line in order; a later match overwrites an earlier one.
FIELD_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"AudioFilename:\s*(.+)"), "audio_filename"),
    (re.compile(r"Title:(.+)"), "title"),
    (re.compile(r"Artist:(.+)"), "artist"),
    (re.compile(r"Version:(.+)"), "version"),
]

# Background event: 0,0,"bg.jpg",0,0
BACKGROUND_PATTERN = re.compile(r'\d+,\d+,"(.+)",')


def next_section(line: str, current: Section) -> Section:
    """Return the section state after reading ``line``."""
    stripped = line.strip()
    if stripped == EVENTS_HEADER:
        return Section.EVENTS
    if stripped.startswith("[") and stripped.endswith("]"):
        return Section.OUTSIDE
    return current


def parse_lines(lines: Iterable[str], source_path: Path) -> DifficultyMetadata:
    """Scan difficulty file lines into a metadata record (no validation)."""
    metadata = DifficultyMetadata(source_path=source_path)
    section = Section.OUTSIDE

    for line in lines:
        section = next_section(line, section)

        for pattern, attr in FIELD_PATTERNS:
            match = pattern.search(line)
            if match:
                setattr(metadata, attr, match.group(1).strip())

        if section == Section.EVENTS:
            match = BACKGROUND_PATTERN.search(line)
            if match:
                metadata.background_filename = match.group(1).strip()

    return metadata


def extract_metadata(path: Path, encoding: str = "utf-8") -> Extraction:
    """Read one difficulty file and return its metadata or a failure reason.

    Undecodable bytes are replaced rather than raised, so a file in an
    unexpected encoding still yields whatever ASCII keys it contains.
    """
    log.debug(f"extract_metadata: {path}")
    try:
        with path.open(encoding=encoding, errors="replace") as f:
            metadata = parse_lines(f, path)
    except OSError as e:
        log.warning(f"Cannot read {path.name}: {e}")
        return Extraction(source_path=path, reason=f"unreadable: {e}")

    if not metadata.is_valid:
        log.warning(f"No audio filename found in {path.name}")
        return Extraction(source_path=path, reason=MISSING_AUDIO)

    log.debug(
        f"Extracted: audio={metadata.audio_filename!r} "
        f"bg={metadata.background_filename!r} artist={metadata.artist!r} "
        f"title={metadata.title!r} version={metadata.version!r}"
    )
    return Extraction(source_path=path, metadata=metadata)
