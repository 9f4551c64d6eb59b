"""Post model: front matter schema plus the parsed file.

Attributes on :class:`PostFrontmatter` map 1:1 to YAML keys; unknown
keys are kept. :class:`Post` ties a file path to its parsed front
matter and body without holding any I/O handles.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from postctl.domain.fences import CodeFence, scan_fences
from postctl.domain.naming import PostName

_LEADING_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")


def _as_list(value: Any) -> list[str]:
    # Jekyll accepts a space-separated string as well as a list.
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


class PostFrontmatter(BaseModel):
    """Front matter keys a post is expected to carry."""

    model_config = {"frozen": True, "extra": "allow"}

    layout: str
    title: str
    date: str | None = None
    author: str | None = None
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_str(cls, value: Any) -> Any:
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return value

    @field_validator("categories", "tags", mode="before")
    @classmethod
    def _split_words(cls, value: Any) -> list[str]:
        return _as_list(value)


def frontmatter_day(value: Any) -> date | None:
    """Extract the calendar day from a front matter ``date`` value.

    Accepts ``date``/``datetime`` objects and strings that start with
    ``YYYY-MM-DD`` (``"2015-03-01 10:00:00 +0100"``).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return None
    match = _LEADING_DATE_RE.match(str(value))
    if match is None:
        return None
    try:
        return date(int(match[1]), int(match[2]), int(match[3]))
    except ValueError:
        return None


@dataclass(frozen=True)
class Post:
    """A post file read from disk.

    ``name`` is None for drafts and for files whose name does not follow
    the dated convention.
    """

    path: Path
    frontmatter: dict[str, Any]
    body: str
    body_offset: int = 0
    name: PostName | None = None
    draft: bool = False

    @property
    def id(self) -> str:
        return self.path.stem

    @property
    def title(self) -> str:
        value = self.frontmatter.get("title")
        return str(value).strip() if value is not None else ""

    @property
    def layout(self) -> str | None:
        value = self.frontmatter.get("layout")
        return str(value) if value is not None else None

    @property
    def day(self) -> date | None:
        """Publication day: front matter ``date`` wins over the file name."""
        day = frontmatter_day(self.frontmatter.get("date"))
        if day is None and self.name is not None:
            day = self.name.date
        return day

    @property
    def tags(self) -> list[str]:
        return _as_list(self.frontmatter.get("tags"))

    @property
    def categories(self) -> list[str]:
        return _as_list(self.frontmatter.get("categories") or self.frontmatter.get("category"))

    def fences(self) -> list[CodeFence]:
        return scan_fences(self.body, self.body_offset)

    def word_count(self) -> int:
        return len(self.body.split())

    def to_summary(self, root: Path | None = None) -> dict[str, Any]:
        """Row used by list and show output."""
        path = self.path
        if root is not None and path.is_relative_to(root):
            path = path.relative_to(root)
        day = self.day
        return {
            "id": self.id,
            "title": self.title,
            "date": day.isoformat() if day else None,
            "layout": self.layout,
            "tags": self.tags,
            "categories": self.categories,
            "path": str(path),
            "draft": self.draft,
        }

