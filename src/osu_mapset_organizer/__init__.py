"""osu! Mapset Organizer -- split a mapset folder into one folder per difficulty.

Core modules:
    config    -- Organizer configuration via pydantic-settings (OSU_ORGANIZER_* env
                 vars) and loguru setup. CLI flags passed as kwargs to
                 OrganizerConfig (no env pollution).
    cli       -- Click CLI entry point. No argument prints usage and exits 0;
                 an invalid mapset folder is a usage error.
    runner    -- Lists .osu files and organizes each independently, collecting
                 a RunSummary. Per-file problems never abort the run.
    extract   -- Line-oriented .osu metadata extraction (audio, background,
                 title, artist, version) with an explicit [Events] section state.
    sanitize  -- Folder name sanitization for filesystem safety
    models    -- Enums and dataclasses shared across modules
    errors    -- Run-level exception hierarchy

Subpackages:
    ops       -- File operations (folder naming, creation, asset copy)
"""
