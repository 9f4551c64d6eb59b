"""QueryService: read-only views over the post collection.

Three operations:
- **list_posts**: filtered, sorted post summaries
- **get_post**: one post with body statistics and code blocks
- **stats**: collection-wide counts by year, tag, and code language
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import TYPE_CHECKING, Any

from ruamel.yaml.comments import TaggedScalar

from postctl.domain.content import FrontmatterError
from postctl.services.base import BaseService
from postctl.services.result import ServiceResult
from postctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from postctl.domain.post import Post

logger = logging.getLogger(__name__)

SORT_KEYS = ("date", "title", "path")


class QueryService(BaseService):
    """Read-only queries across posts."""

    def _load_all(self, *, include_drafts: bool) -> tuple[list[Post], list[str]]:
        """Load every post, skipping unreadable ones with a warning."""
        posts: list[Post] = []
        warnings: list[str] = []
        for path in self._blog.find_posts(include_drafts=include_drafts):
            try:
                posts.append(self._blog.load_post(path))
            except (FrontmatterError, UnicodeDecodeError) as exc:
                logger.debug("Skipping %s: %s", path, exc)
                warnings.append(f"Skipped {self._blog.relative(path)}: {exc}")
        return posts, warnings

    # ------------------------------------------------------------------
    # list
    # ------------------------------------------------------------------

    @traced
    def list_posts(
        self,
        *,
        sort: str = "date",
        descending: bool = True,
        limit: int | None = None,
        year: int | None = None,
        tag: str | None = None,
        category: str | None = None,
        layout: str | None = None,
        include_drafts: bool = False,
    ) -> ServiceResult:
        """List post summaries, newest first by default.

        Undated posts (drafts, misnamed files without a ``date`` key) sort
        after dated ones regardless of direction.
        """
        if sort not in SORT_KEYS:
            return ServiceResult.failure(
                "list_posts",
                "INVALID_SORT",
                f"Unknown sort key {sort!r}; expected one of {', '.join(SORT_KEYS)}",
            )

        with trace_span("load"):
            posts, warnings = self._load_all(include_drafts=include_drafts)

        if year is not None:
            posts = [p for p in posts if p.day is not None and p.day.year == year]
        if tag is not None:
            posts = [p for p in posts if tag in p.tags]
        if category is not None:
            posts = [p for p in posts if category in p.categories]
        if layout is not None:
            posts = [p for p in posts if p.layout == layout]

        if sort == "date":
            dated = sorted(
                (p for p in posts if p.day is not None),
                key=lambda p: (p.day, p.path.name),
                reverse=descending,
            )
            undated = sorted((p for p in posts if p.day is None), key=lambda p: p.path.name)
            posts = dated + undated
        elif sort == "title":
            posts.sort(key=lambda p: p.title.casefold(), reverse=descending)
        else:
            posts.sort(key=lambda p: str(p.path), reverse=descending)

        if limit is not None:
            posts = posts[:limit]

        items = [p.to_summary(self._blog.root) for p in posts]
        return ServiceResult(
            ok=True,
            op="list_posts",
            data={"items": items, "count": len(items)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # get
    # ------------------------------------------------------------------

    @traced
    def get_post(self, identifier: str) -> ServiceResult:
        """Show one post by file name, stem, or slug."""
        matches = self._blog.resolve(identifier)
        if not matches:
            return ServiceResult.failure(
                "get_post", "NOT_FOUND", f"No post matches {identifier!r}"
            )
        if len(matches) > 1:
            candidates = [self._blog.relative(p) for p in matches]
            return ServiceResult.failure(
                "get_post",
                "AMBIGUOUS",
                f"{identifier!r} matches {len(matches)} posts",
                candidates=candidates,
            )

        path = matches[0]
        try:
            post = self._blog.load_post(path)
        except (FrontmatterError, UnicodeDecodeError) as exc:
            return ServiceResult.failure(
                "get_post",
                "INVALID_FRONT_MATTER",
                f"Cannot read {self._blog.relative(path)}: {exc}",
            )

        data = post.to_summary(self._blog.root)
        data["word_count"] = post.word_count()
        data["code_blocks"] = [
            {"start_line": f.start_line, "end_line": f.end_line, "language": f.language}
            for f in post.fences()
        ]
        data["frontmatter"] = {k: _plain(v) for k, v in post.frontmatter.items()}
        return ServiceResult(ok=True, op="get_post", data=data)

    # ------------------------------------------------------------------
    # stats
    # ------------------------------------------------------------------

    @traced
    def stats(self) -> ServiceResult:
        """Counts across the whole collection, drafts included."""
        posts, warnings = self._load_all(include_drafts=True)

        years: Counter[int] = Counter()
        tags: Counter[str] = Counter()
        languages: Counter[str] = Counter()
        for post in posts:
            if post.day is not None:
                years[post.day.year] += 1
            tags.update(post.tags)
            languages.update(f.language or "(none)" for f in post.fences())

        drafts = sum(1 for p in posts if p.draft)
        return ServiceResult(
            ok=True,
            op="stats",
            data={
                "posts": len(posts) - drafts,
                "drafts": drafts,
                "by_year": {str(y): n for y, n in sorted(years.items())},
                "tags": dict(tags.most_common()),
                "code_languages": dict(languages.most_common()),
            },
            warnings=warnings,
        )


def _plain(value: Any) -> Any:
    """Convert ruamel round-trip values into JSON-friendly builtins."""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, str):
        return str(value)
    if isinstance(value, TaggedScalar):
        return str(value.value)
    if value is None:
        return None
    # other local tags and custom types
    return str(value)
