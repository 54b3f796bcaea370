"""Artifact naming for pipeline stages.

Every stage writes its output beside its input, with the same directory
and stem and a stage-specific extension.
"""

from __future__ import annotations

from pathlib import Path


def strip_extension(path: str | Path) -> Path:
    """Remove one trailing ``.<ext>`` suffix from a file name.

    Only the final suffix is removed and the directory is preserved. A
    name without an extension is returned unchanged.

    Args:
        path: File path to strip.

    Returns:
        Path without its last extension.

    Example:
        >>> strip_extension("a/b.c.i")
        PosixPath('a/b.c')
        >>> strip_extension("a/prog")
        PosixPath('a/prog')
    """
    path = Path(path)
    return path.with_suffix("") if path.suffix else path


def artifact_path(path: str | Path, extension: str) -> Path:
    """Derive a stage output path from an input path.

    Args:
        path: Input file path.
        extension: New extension without the leading dot. An empty
            string produces an extensionless path (the final executable).

    Returns:
        Path with the same directory and stem and the new extension.

    Example:
        >>> artifact_path("a/b.c.i", "s")
        PosixPath('a/b.c.s')
        >>> artifact_path("hello.s", "")
        PosixPath('hello')
    """
    base = strip_extension(path)
    if not extension:
        return base
    return base.with_name(f"{base.name}.{extension}")
