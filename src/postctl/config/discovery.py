"""Locating ``postctl.toml`` and the site directory it describes.

A site is marked by ``postctl.toml`` at its root. Commands run from any
directory inside the site find it by walking up, the way git finds
``.git/``. ``POSTCTL_CONFIG`` points at a file explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "postctl.toml"
CONFIG_ENV_VAR = "POSTCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd).

    ``POSTCTL_CONFIG`` wins when set; if it names a missing file there
    is no config at all rather than a silent fallback to walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_site_root(site_root: Path | None, config_path: Path | None) -> Path:
    """Pick the site directory: ``--root``, else the config's directory, else cwd."""
    if site_root is not None:
        return site_root
    if config_path is not None:
        return config_path.parent
    return Path.cwd()
