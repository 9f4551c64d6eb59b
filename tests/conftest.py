"""Shared pytest fixtures and test helpers for postctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from postctl.config.settings import PostctlSettings
from postctl.infrastructure.blog import Blog
from postctl.services.telemetry import disable_telemetry

GOOD_POST = """\
---
layout: post
title: "Fixing the N+1 problem"
---

Lazy collections issued one query per row.

```java
@OneToMany(mappedBy = "owner", fetch = FetchType.LAZY)
private Set<Item> items;
```

A native query fetched everything at once.
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary site directory with ``_posts/`` and ``_drafts/``.

    Single source of truth for the site layout; every site fixture
    builds on it.
    """
    monkeypatch.delenv("POSTCTL_CONFIG", raising=False)
    (tmp_path / "_posts").mkdir()
    (tmp_path / "_drafts").mkdir()
    return tmp_path


@pytest.fixture
def blog(site_root: Path) -> Blog:
    """Blog over the temporary site with default settings."""
    return Blog(PostctlSettings.from_cli(site_root=site_root))


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp site so CLI invocations operate on it.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command
    test classes.
    """
    monkeypatch.chdir(site_root)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` enables telemetry for the whole context; switch it back off."""
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None]:
    """CLI invocations attach a handler bound to the runner's stderr; drop it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = logging.getLogger("postctl").level
    yield
    root.handlers = handlers
    logging.getLogger("postctl").setLevel(level)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_post(root: Path, name: str, content: str = GOOD_POST, *, draft: bool = False) -> Path:
    """Write a post (or draft) file under *root* and return its path."""
    path = root / ("_drafts" if draft else "_posts") / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def post_text(title: str = "A post", *, layout: str = "post", extra: str = "", body: str = "Body.\n") -> str:
    """Build post content with the given front matter fields."""
    return f"---\nlayout: {layout}\ntitle: {title!r}\n{extra}---\n{body}"
