"""CheckService: structural linting of the post collection.

Read-only ``check()`` follows the linter pattern: every post is run
through each category and issues are collected, never raised.
Categories: file naming, front matter, content, code fences.

``fix()`` repairs only what can be repaired mechanically without
changing how a post renders.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from postctl.domain.content import (
    FrontmatterError,
    dump_frontmatter,
    load_frontmatter,
    split_frontmatter,
)
from postctl.domain.fences import scan_fences
from postctl.domain.naming import PostNameError, is_canonical_slug, parse_post_filename
from postctl.domain.post import Post, frontmatter_day
from postctl.infrastructure.filesystem import read_text
from postctl.services.base import BaseService
from postctl.services.result import ServiceResult
from postctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
_SEVERITY_RANK = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}

CAT_NAMING = "file_naming"
CAT_FRONT_MATTER = "front_matter"
CAT_CONTENT = "content"
CAT_FENCES = "code_fences"

_FRONTMATTER_RULES = {
    "UNCLOSED": "unclosed_front_matter",
    "INVALID_YAML": "invalid_yaml",
    "NOT_A_MAPPING": "not_a_mapping",
}


class CheckService(BaseService):
    """Checks posts for well-formed names, front matter, and code fences."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def check(
        self,
        *,
        min_severity: str = SEVERITY_WARNING,
        include_drafts: bool = False,
    ) -> ServiceResult:
        """Report issues without modifying anything."""
        include_drafts = include_drafts or self._blog.settings.check.check_drafts

        issues: list[dict[str, Any]] = []
        posts: list[Post] = []
        paths = self._blog.find_posts(include_drafts=include_drafts)

        for path in paths:
            draft = self._blog.is_draft(path)
            if not draft:
                with trace_span("file_naming"):
                    issues.extend(self._check_naming(path))
            with trace_span("front_matter"):
                post, fm_issues = self._load(path)
                issues.extend(fm_issues)
                if post is not None:
                    issues.extend(self._check_frontmatter_keys(post))
            if post is None:
                continue
            posts.append(post)
            with trace_span("content"):
                issues.extend(self._check_body(post))
            with trace_span("code_fences"):
                issues.extend(self._check_fences(post))

        with trace_span("duplicate_titles"):
            issues.extend(self._check_duplicate_titles(posts))

        threshold = _SEVERITY_RANK.get(min_severity, 0)
        visible = [i for i in issues if _SEVERITY_RANK[i["severity"]] >= threshold]
        error_count = sum(1 for i in visible if i["severity"] == SEVERITY_ERROR)
        warning_count = sum(1 for i in visible if i["severity"] == SEVERITY_WARNING)

        return ServiceResult(
            ok=True,
            op="check",
            data={
                "issues": visible,
                "count": len(visible),
                "error_count": error_count,
                "warning_count": warning_count,
                "hidden_warning_count": len(issues) - len(visible),
                "healthy": error_count == 0,
                "posts_checked": len(paths),
            },
        )

    @traced
    def fix(self, *, include_drafts: bool = False) -> ServiceResult:
        """Insert missing default layouts and close trailing open fences."""
        include_drafts = include_drafts or self._blog.settings.check.check_drafts

        fixes: list[str] = []
        warnings: list[str] = []
        default_layout = self._blog.settings.posts.default_layout

        for path in self._blog.find_posts(include_drafts=include_drafts):
            rel = self._blog.relative(path)
            try:
                text = read_text(path)
                yaml_text, body, _offset = split_frontmatter(text)
                if yaml_text is None:
                    warnings.append(f"{rel}: no front matter, left unchanged")
                    continue
                fm = load_frontmatter(yaml_text)
            except (FrontmatterError, UnicodeDecodeError) as exc:
                warnings.append(f"{rel}: {exc}, left unchanged")
                continue

            changed: list[str] = []
            if "layout" not in fm:
                fm.insert(0, "layout", default_layout)
                yaml_text = dump_frontmatter(fm).rstrip("\n")
                changed.append(f"{rel}: added layout '{default_layout}'")

            closed_body = _close_trailing_fence(body)
            if closed_body is not None:
                body = closed_body
                changed.append(f"{rel}: closed unterminated code fence")

            if changed:
                header = f"---\n{yaml_text}\n---\n" if yaml_text else "---\n---\n"
                self._blog.write(path, header + body, overwrite=True)
                fixes.extend(changed)

        return ServiceResult(
            ok=True,
            op="fix",
            data={"fixes": fixes, "count": len(fixes)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Per-post checks
    # ------------------------------------------------------------------

    def _issue(
        self,
        path: Path,
        category: str,
        rule: str,
        severity: str,
        message: str,
        line: int | None = None,
    ) -> dict[str, Any]:
        return {
            "category": category,
            "rule": rule,
            "severity": severity,
            "path": self._blog.relative(path),
            "line": line,
            "message": message,
        }

    def _check_naming(self, path: Path) -> list[dict[str, Any]]:
        try:
            name = parse_post_filename(path.name, self._blog.extensions)
        except PostNameError as exc:
            rule = "filename_date" if exc.reason == "date" else "filename_pattern"
            return [self._issue(path, CAT_NAMING, rule, SEVERITY_ERROR, str(exc))]

        if not is_canonical_slug(name.slug):
            return [
                self._issue(
                    path,
                    CAT_NAMING,
                    "slug_style",
                    SEVERITY_WARNING,
                    f"Slug {name.slug!r} is not lowercase words joined by hyphens",
                )
            ]
        return []

    def _load(self, path: Path) -> tuple[Post | None, list[dict[str, Any]]]:
        """Load a post strictly, converting parse failures into issues."""
        try:
            post = self._blog.load_post(path)
        except UnicodeDecodeError as exc:
            logger.debug("Cannot decode %s", path, exc_info=True)
            msg = f"File is not valid UTF-8: {exc.reason}"
            issue = self._issue(path, CAT_FRONT_MATTER, "invalid_encoding", SEVERITY_ERROR, msg)
            return None, [issue]
        except FrontmatterError as exc:
            logger.debug("Unreadable front matter in %s: %s", path, exc.code)
            rule = _FRONTMATTER_RULES[exc.code]
            issue = self._issue(
                path, CAT_FRONT_MATTER, rule, SEVERITY_ERROR, exc.message, exc.line
            )
            return None, [issue]

        if post.body_offset == 0:
            msg = "No front matter block; the file must start with '---'"
            issue = self._issue(
                path, CAT_FRONT_MATTER, "missing_front_matter", SEVERITY_ERROR, msg, 1
            )
            return None, [issue]
        return post, []

    def _check_frontmatter_keys(self, post: Post) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        config = self._blog.settings.posts
        fm = post.frontmatter

        for key in config.required_keys:
            if key not in fm:
                issues.append(
                    self._issue(
                        post.path,
                        CAT_FRONT_MATTER,
                        "missing_key",
                        SEVERITY_ERROR,
                        f"Front matter is missing required key '{key}'",
                    )
                )

        if "title" in fm:
            title = fm["title"]
            if not isinstance(title, str) or not title.strip():
                issues.append(
                    self._issue(
                        post.path,
                        CAT_FRONT_MATTER,
                        "empty_title",
                        SEVERITY_ERROR,
                        "Title must be a non-empty string",
                    )
                )

        layout = fm.get("layout")
        allowed = config.allowed_layouts
        if allowed and layout is not None and str(layout) not in allowed:
            issues.append(
                self._issue(
                    post.path,
                    CAT_FRONT_MATTER,
                    "unknown_layout",
                    SEVERITY_WARNING,
                    f"Layout {str(layout)!r} is not one of {allowed}",
                )
            )

        if post.name is not None and "date" in fm:
            fm_day = frontmatter_day(fm["date"])
            if fm_day is not None and fm_day != post.name.date:
                issues.append(
                    self._issue(
                        post.path,
                        CAT_FRONT_MATTER,
                        "date_mismatch",
                        SEVERITY_WARNING,
                        f"Front matter date {fm_day.isoformat()} differs from "
                        f"file name date {post.name.date.isoformat()}",
                    )
                )
        return issues

    def _check_body(self, post: Post) -> list[dict[str, Any]]:
        if post.body.strip():
            return []
        return [
            self._issue(post.path, CAT_CONTENT, "empty_body", SEVERITY_WARNING, "Post body is empty")
        ]

    def _check_fences(self, post: Post) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        require_language = self._blog.settings.check.require_fence_language
        for fence in post.fences():
            if not fence.closed:
                issues.append(
                    self._issue(
                        post.path,
                        CAT_FENCES,
                        "unclosed_fence",
                        SEVERITY_ERROR,
                        f"Code fence {fence.marker} opened on line {fence.start_line} "
                        "is never closed",
                        fence.start_line,
                    )
                )
            if require_language and fence.language is None:
                issues.append(
                    self._issue(
                        post.path,
                        CAT_FENCES,
                        "missing_language",
                        SEVERITY_WARNING,
                        "Code fence has no language",
                        fence.start_line,
                    )
                )
        return issues

    def _check_duplicate_titles(self, posts: list[Post]) -> list[dict[str, Any]]:
        seen: dict[str, Post] = {}
        issues: list[dict[str, Any]] = []
        for post in posts:
            key = post.title.casefold()
            if not key:
                continue
            first = seen.setdefault(key, post)
            if first is not post:
                issues.append(
                    self._issue(
                        post.path,
                        CAT_CONTENT,
                        "duplicate_title",
                        SEVERITY_WARNING,
                        f"Title {post.title!r} is also used by {self._blog.relative(first.path)}",
                    )
                )
        return issues


def _close_trailing_fence(body: str) -> str | None:
    """Append a closing fence if the last fence in *body* is open.

    Returns None when every fence is already closed.
    """
    fences = scan_fences(body)
    if not fences or fences[-1].closed:
        return None
    if body and not body.endswith("\n"):
        body += "\n"
    return f"{body}{fences[-1].marker}\n"
