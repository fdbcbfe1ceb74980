"""Build output folder names and place difficulty assets into them.

Pure file operations: nothing here prints. Callers turn the returned
AssetResult values into user-facing notices.
"""

from __future__ import annotations

import shutil
from pathlib import Path, PurePosixPath

from loguru import logger

from ..errors import CopyError
from ..models import AssetKind, AssetResult, AssetStatus, DifficultyMetadata
from ..sanitize import sanitize_folder_name, strip_extension

log = logger.bind(stage="placement")

_RESERVED_NAMES = frozenset({"", ".", ".."})


def build_folder_name(metadata: DifficultyMetadata) -> str:
    """Derive the output folder name for one difficulty.

    "Artist - Title [Version]" when artist and title are both present,
    otherwise just the version. The difficulty file's stem stands in for a
    missing version.
    """
    version = metadata.version.strip()
    if version:
        base = sanitize_folder_name(metadata.version)
    else:
        base = sanitize_folder_name(strip_extension(metadata.source_path.name))

    if metadata.artist.strip() and metadata.title.strip():
        name = sanitize_folder_name(
            f"{metadata.artist} - {metadata.title} [{base}]"
        )
    else:
        name = base

    log.debug(f"build_folder_name: {metadata.source_path.name} -> '{name}'")
    return name


def ensure_folder(source_dir: Path, name: str, dry_run: bool = False) -> tuple[Path, bool]:
    """Make sure ``source_dir/name`` exists as a directory.

    Returns (folder, created). An existing directory is reused. Raises
    OSError when the name is unusable or the directory cannot be created.
    """
    if name.strip() in _RESERVED_NAMES:
        raise OSError(f"Invalid folder name: {name!r}")

    folder = source_dir / name
    if folder.is_dir():
        return folder, False
    if folder.exists():
        raise FileExistsError(f"Not a directory: {folder}")
    if dry_run:
        return folder, True

    folder.mkdir()
    log.info(f"Created folder {folder}")
    return folder, True


def reference_parts(filename: str) -> tuple[str, ...]:
    """Split an asset reference into path parts relative to the mapset folder.

    Backslashes count as separators. An absolute reference is read relative
    to the mapset folder ("/x/a.mp3" -> x/a.mp3). A reference containing
    ".." keeps only its final component.
    """
    path = PurePosixPath(filename.replace("\\", "/"))
    parts = path.parts[1:] if path.is_absolute() else path.parts
    if ".." in parts:
        return (path.name,) if path.name not in ("", "..") else ()
    return parts


def copy_file(
    source: Path,
    destination: Path,
    kind: AssetKind,
    filename: str,
    dry_run: bool = False,
    strict: bool = False,
) -> AssetResult:
    """Copy ``source`` to ``destination``, overwriting any existing file.

    I/O errors produce a FAILED result, or a CopyError when strict.
    """
    if dry_run:
        return AssetResult(kind, filename, AssetStatus.PLANNED, destination)

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
    except OSError as e:
        log.error(f"Copy failed {source} -> {destination}: {e}")
        if strict:
            raise CopyError(source, destination, str(e)) from e
        return AssetResult(kind, filename, AssetStatus.FAILED, destination, str(e))

    log.debug(f"Copy {source} -> {destination}")
    return AssetResult(kind, filename, AssetStatus.COPIED, destination)


def place_asset(
    source_dir: Path,
    folder: Path,
    kind: AssetKind,
    filename: str,
    dry_run: bool = False,
    strict: bool = False,
) -> AssetResult:
    """Copy a referenced asset from ``source_dir`` into ``folder`` if it exists.

    Source and destination use the same normalized reference, so nothing
    outside ``source_dir`` is ever read.
    """
    parts = reference_parts(filename)
    source = source_dir.joinpath(*parts)
    if not parts or not source.is_file():
        log.warning(f"{kind.value} file not found: {source}")
        return AssetResult(kind, filename, AssetStatus.MISSING)

    destination = folder.joinpath(*parts)
    return copy_file(source, destination, kind, filename, dry_run=dry_run, strict=strict)
