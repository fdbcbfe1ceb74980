"""CLI entry point for the mapset organizer."""

from pathlib import Path

import click
from loguru import logger

from .config import load_config
from .errors import ConfigError, CopyError, SourceDirectoryError
from .runner import MapsetRunner

log = logger.bind(stage="cli")


@click.command()
@click.argument(
    "mapset_path",
    required=False,
    type=click.Path(file_okay=True, dir_okay=True, path_type=Path),
)
@click.option(
    "--dry-run", is_flag=True, help="Show what would happen without doing it."
)
@click.option(
    "--strict",
    is_flag=True,
    help="Abort the run on the first copy I/O error instead of skipping the file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to .env file.",
)
@click.pass_context
def main(
    ctx: click.Context,
    mapset_path: Path | None,
    dry_run: bool,
    strict: bool,
    verbose: bool,
    config_file: Path | None,
) -> None:
    """Split an osu! mapset folder into one subfolder per difficulty.

    Each subfolder holds a copy of the .osu file plus the audio and
    background it references. Original files are never moved or deleted.
    """
    if mapset_path is None:
        click.echo(ctx.get_usage())
        click.echo("Try 'osu-mapset-organizer --help' for help.")
        return

    # Only pass flags that were set so env/.env values still apply
    config_kwargs: dict[str, object] = {}
    if dry_run:
        config_kwargs["dry_run"] = True
    if strict:
        config_kwargs["strict"] = True
    if verbose:
        config_kwargs["verbose"] = True
    if config_file is not None:
        config_kwargs["_env_file"] = config_file

    try:
        config = load_config(**config_kwargs)
    except ConfigError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    config.setup_logging()

    log.debug(
        f"Starting organizer: source={mapset_path} dry_run={config.dry_run} "
        f"strict={config.strict}"
    )

    runner = MapsetRunner(config=config)
    try:
        runner.run(mapset_path)
    except SourceDirectoryError as e:
        raise click.UsageError(str(e)) from e
    except CopyError as e:
        raise click.ClickException(f"Error organizing mapset: {e}") from e
