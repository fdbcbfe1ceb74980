"""Folder name sanitization for filesystem safety."""

import re

from loguru import logger

log = logger.bind(stage="sanitize")

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|]')


def sanitize_folder_name(name: str) -> str:
    """Replace each character that is invalid in a Windows file name with '_'.

    One-for-one replacement (no collapsing, no trimming), so applying it twice
    gives the same result as applying it once.
    """
    sanitized = _UNSAFE_CHARS.sub("_", name)
    if sanitized != name:
        log.debug(f"sanitize_folder_name: '{name}' -> '{sanitized}'")
    return sanitized


def strip_extension(filename: str) -> str:
    """Drop the last extension from a file name.

    A name whose only dot is the leading one (".osu") is returned unchanged.
    """
    dot = filename.rfind(".")
    if dot > 0:
        return filename[:dot]
    return filename
