"""File operations for the mapset organizer.

Submodules:
    placement -- Output folder naming ("Artist - Title [Version]" with the
                 difficulty file stem as version fallback), folder creation
                 that reuses an existing directory, and overwrite-copy of the
                 difficulty file, audio and background into it. Asset
                 references are normalized once (backslashes, absolute and
                 ".." parts) and read and written at the same relative path,
                 so nothing outside the mapset folder is read. Copy
                 I/O errors become FAILED results, or CopyError when strict.
"""
