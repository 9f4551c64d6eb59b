"""Post file naming: ``YYYY-MM-DD-slug.markdown``.

The date prefix is the publication date the site generator uses for
permalinks. The slug is everything between the date and the extension.
Drafts carry no date and are named ``slug.markdown``.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from datetime import date

DEFAULT_EXTENSIONS: tuple[str, ...] = (".markdown", ".md")

_POST_NAME_RE = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)$")
_CANONICAL_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class PostNameError(ValueError):
    """A file name that does not follow the post naming convention.

    ``reason`` is one of ``extension``, ``pattern``, ``date`` or ``slug``.
    """

    def __init__(self, message: str, *, reason: str = "pattern") -> None:
        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True)
class PostName:
    """Parsed components of a dated post file name."""

    date: date
    slug: str
    ext: str

    @property
    def stem(self) -> str:
        return f"{self.date.isoformat()}-{self.slug}"

    @property
    def filename(self) -> str:
        return f"{self.stem}{self.ext}"


def split_extension(name: str, extensions: tuple[str, ...] = DEFAULT_EXTENSIONS) -> tuple[str, str]:
    """Split *name* into ``(stem, ext)`` for the first accepted extension.

    Raises:
        PostNameError: If *name* ends with none of *extensions*.
    """
    for ext in extensions:
        if name.endswith(ext) and len(name) > len(ext):
            return name[: -len(ext)], ext
    msg = f"{name!r} does not end with one of {', '.join(extensions)}"
    raise PostNameError(msg, reason="extension")


def parse_post_filename(
    name: str,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> PostName:
    """Parse a ``YYYY-MM-DD-slug.ext`` file name.

    Raises:
        PostNameError: If the extension is not accepted, the name has no
            date prefix, or the prefix is not a real calendar date.
    """
    stem, ext = split_extension(name, extensions)
    match = _POST_NAME_RE.match(stem)
    if match is None:
        msg = f"{name!r} does not match YYYY-MM-DD-title{ext}"
        raise PostNameError(msg)

    try:
        day = date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError as exc:
        msg = f"{name!r} has an invalid date prefix: {exc}"
        raise PostNameError(msg, reason="date") from exc

    return PostName(date=day, slug=match["slug"], ext=ext)


def is_canonical_slug(slug: str) -> bool:
    """True for lowercase ASCII words joined by single hyphens."""
    return _CANONICAL_SLUG_RE.match(slug) is not None


def slugify(title: str) -> str:
    """Turn a post title into a file-name slug.

    Examples:
        >>> slugify("Hibernate: fixing the N+1 problem")
        'hibernate-fixing-the-n-1-problem'
        >>> slugify("  Déjà vu  ")
        'deja-vu'
    """
    text = unicodedata.normalize("NFKD", title)
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    return "-".join(re.findall(r"[a-z0-9]+", text))


def build_post_filename(day: date, title: str, ext: str = ".markdown") -> str:
    """Build ``YYYY-MM-DD-<slug><ext>`` for a new post."""
    slug = slugify(title)
    if not slug:
        msg = f"Title {title!r} produces an empty slug"
        raise PostNameError(msg, reason="slug")
    return f"{day.isoformat()}-{slug}{ext}"
