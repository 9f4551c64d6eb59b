"""Filesystem operations for the post collection.

INVARIANT: Files are truth. postctl keeps no index; every command reads
the post directories afresh.

Pure parsing lives in :mod:`postctl.domain` (dependency direction:
infrastructure -> domain). This module only does I/O, path resolution,
and file discovery.
"""

from __future__ import annotations

from pathlib import Path


def read_text(path: Path) -> str:
    """Read a post file as UTF-8, dropping a leading byte order mark.

    Raises:
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    return path.read_text(encoding="utf-8-sig")


def write_text(path: Path, text: str) -> None:
    """Write *text* to *path* as UTF-8, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def resolve_post_path(directory: Path, filename: str) -> Path:
    """Join *filename* onto *directory*, refusing paths that escape it."""
    result = directory / filename
    if not result.resolve().is_relative_to(directory.resolve()):
        msg = f"Path escapes post directory: {result}"
        raise ValueError(msg)
    return result


def find_post_files(directory: Path, extensions: tuple[str, ...]) -> list[Path]:
    """Discover post files under *directory*.

    Jekyll allows posts in subdirectories of ``_posts``, so the walk is
    recursive. Hidden files and directories are skipped. A missing
    directory yields an empty list.
    """
    if not directory.is_dir():
        return []

    results: list[Path] = []
    for path in directory.rglob("*"):
        if not path.is_file():
            continue
        rel_parts = path.relative_to(directory).parts
        if any(part.startswith(".") for part in rel_parts):
            continue
        if path.name.endswith(extensions):
            results.append(path)

    return sorted(results)
