"""Organizer configuration via pydantic-settings (.env + env vars)."""

import sys
from pathlib import Path

from loguru import logger
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import DIFFICULTY_EXTENSION


class OrganizerConfig(BaseSettings):
    """All organizer configuration with layered resolution:
    .env file < environment variables (OSU_ORGANIZER_*) < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="OSU_ORGANIZER_",
        extra="ignore",
    )

    # -- Input --
    difficulty_extension: str = DIFFICULTY_EXTENSION
    encoding: str = "utf-8"

    # -- Behavior --
    dry_run: bool = False
    strict: bool = False
    verbose: bool = False

    # -- Logging --
    log_level: str = "INFO"
    log_dir: Path | None = None

    @field_validator("difficulty_extension")
    @classmethod
    def _extension_has_dot(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"difficulty_extension must look like '.osu', got {value!r}")
        return value.lower()

    def setup_logging(self) -> None:
        """Configure loguru for the organizer."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<10} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        logger.add(
            sys.stderr,
            format=log_format,
            level="DEBUG" if self.verbose else self.log_level.upper(),
            filter=_default_extra,
        )

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / "organizer.log"),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )


def load_config(**overrides) -> OrganizerConfig:
    """Build an OrganizerConfig, turning validation failures into ConfigError."""
    try:
        return OrganizerConfig(**overrides)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
