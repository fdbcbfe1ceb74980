"""Mapset runner -- lists difficulty files and organizes each one."""

from __future__ import annotations

from pathlib import Path

import click
from loguru import logger

from .config import OrganizerConfig
from .errors import SourceDirectoryError
from .extract import extract_metadata
from .models import (
    DIFFICULTY_EXTENSION,
    AssetKind,
    AssetResult,
    AssetStatus,
    FileResult,
    FileStatus,
    RunSummary,
)
from .ops.placement import (
    build_folder_name,
    copy_file,
    ensure_folder,
    place_asset,
)

log = logger.bind(stage="runner")


def find_difficulty_files(
    source_dir: Path, extension: str = DIFFICULTY_EXTENSION
) -> list[Path]:
    """List regular files directly inside ``source_dir`` ending in ``extension``.

    Matching is case-insensitive. Raises SourceDirectoryError when the
    directory is missing or is not a directory.
    """
    if not source_dir.exists():
        raise SourceDirectoryError(source_dir, "Mapset folder does not exist")
    if not source_dir.is_dir():
        raise SourceDirectoryError(source_dir, "Mapset folder is not a directory")

    extension = extension.lower()
    return sorted(
        p
        for p in source_dir.iterdir()
        if p.is_file() and p.name.lower().endswith(extension)
    )


class MapsetRunner:
    """Organizes every difficulty of one mapset folder into its own subfolder."""

    def __init__(self, config: OrganizerConfig) -> None:
        self.config = config

    def run(self, source_dir: Path) -> RunSummary:
        """Organize ``source_dir`` and return a per-file summary.

        Only a missing or invalid source directory raises; each difficulty
        file is handled independently and its failures land in the summary.
        """
        files = find_difficulty_files(source_dir, self.config.difficulty_extension)
        click.echo(f"Analyzing mapset folder: {source_dir.resolve()}")
        summary = RunSummary(source_dir=source_dir)

        if not files:
            click.echo(
                f"No {self.config.difficulty_extension} files found in the specified folder."
            )
            return summary

        click.echo(
            f"Found {len(files)} {self.config.difficulty_extension} files. Analyzing..."
        )
        if self.config.dry_run:
            click.echo("[DRY-RUN] No changes will be made")

        for path in files:
            summary.results.append(self.organize_file(source_dir, path))

        click.echo(
            f"Organization complete! {summary.organized} organized, "
            f"{summary.skipped} skipped, {summary.failed} failed"
        )
        log.info(
            f"Run finished for {source_dir}: total={summary.total} "
            f"organized={summary.organized} skipped={summary.skipped} "
            f"failed={summary.failed}"
        )
        return summary

    def organize_file(self, source_dir: Path, path: Path) -> FileResult:
        """Extract, name, create folder, then copy difficulty, audio and background."""
        dry_run = self.config.dry_run
        strict = self.config.strict

        extraction = extract_metadata(path, encoding=self.config.encoding)
        if not extraction.ok:
            click.echo(
                f"Skipping {path.name} - unable to extract required information "
                f"({extraction.reason})",
                err=True,
            )
            return FileResult(path, FileStatus.SKIPPED, reason=extraction.reason)
        metadata = extraction.metadata

        folder_name = build_folder_name(metadata)
        try:
            folder, created = ensure_folder(source_dir, folder_name, dry_run=dry_run)
        except OSError as e:
            click.echo(f"Failed to create folder: {source_dir / folder_name} ({e})", err=True)
            return FileResult(
                path, FileStatus.FAILED, folder_name=folder_name, reason=str(e)
            )

        if dry_run:
            click.echo(f"[DRY-RUN] Would use folder: {folder_name}")
        elif created:
            click.echo(f"Created folder: {folder_name}")
        else:
            click.echo(f"Using existing folder: {folder_name}")

        result = FileResult(path, FileStatus.ORGANIZED, folder_name=folder_name)

        asset = copy_file(
            path,
            folder / path.name,
            AssetKind.DIFFICULTY,
            path.name,
            dry_run=dry_run,
            strict=strict,
        )
        if not self._record(result, asset):
            return result

        for kind, filename in (
            (AssetKind.AUDIO, metadata.audio_filename),
            (AssetKind.BACKGROUND, metadata.background_filename),
        ):
            if not filename:
                continue
            asset = place_asset(
                source_dir, folder, kind, filename, dry_run=dry_run, strict=strict
            )
            if not self._record(result, asset):
                return result

        return result

    def _record(self, result: FileResult, asset: AssetResult) -> bool:
        """Report one asset outcome. Returns False when the file should stop."""
        result.assets.append(asset)

        if asset.status == AssetStatus.COPIED:
            click.echo(f"  - Copied {asset.kind.value}: {asset.filename}")
        elif asset.status == AssetStatus.PLANNED:
            click.echo(f"  - [DRY-RUN] Would copy {asset.kind.value}: {asset.filename}")
        elif asset.status == AssetStatus.MISSING:
            click.echo(
                f"  - Warning: {asset.kind.value.capitalize()} file not found: "
                f"{asset.filename}",
                err=True,
            )
        else:
            click.echo(
                f"  - ERROR: Failed to copy {asset.kind.value} {asset.filename}: "
                f"{asset.error}",
                err=True,
            )
            result.status = FileStatus.FAILED
            result.reason = asset.error
            return False
        return True
