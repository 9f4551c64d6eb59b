"""CreateService: scaffold new posts.

Pipeline: VALIDATE → NAME → RENDER → PERSIST → RESPOND

A scaffolded post always carries ``layout`` and ``title`` so it passes
``postctl check`` as written.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from postctl.domain.content import render_frontmatter
from postctl.domain.naming import PostNameError, build_post_filename, slugify
from postctl.domain.post import PostFrontmatter
from postctl.infrastructure.templates import build_template_environment
from postctl.services._helpers import today
from postctl.services.base import BaseService
from postctl.services.result import ServiceResult
from postctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from datetime import date

logger = logging.getLogger(__name__)


class CreateService(BaseService):
    """Creates post and draft files."""

    @traced
    def create_post(
        self,
        title: str,
        *,
        day: date | None = None,
        layout: str | None = None,
        tags: list[str] | None = None,
        categories: list[str] | None = None,
        draft: bool = False,
        overwrite: bool = False,
    ) -> ServiceResult:
        """Write a new post (or draft) with front matter and a starter body."""
        op = "create_post"
        settings = self._blog.settings

        # ── VALIDATE ──
        title = title.strip()
        if not title:
            return ServiceResult.failure(op, "INVALID_TITLE", "Title must not be empty")

        day = day or today()
        ext = settings.site.default_extension
        try:
            frontmatter = PostFrontmatter(
                layout=layout or settings.posts.default_layout,
                title=title,
                tags=tags or [],
                categories=categories or [],
            )
        except ValidationError as exc:
            return ServiceResult.failure(op, "INVALID_FRONT_MATTER", str(exc))

        # ── NAME ──
        try:
            if draft:
                filename = f"{slugify(title)}{ext}"
                if filename == ext:
                    raise PostNameError(f"Title {title!r} produces an empty slug", reason="slug")
            else:
                filename = build_post_filename(day, title, ext)
            path = self._blog.post_path(filename, draft=draft)
        except (PostNameError, ValueError) as exc:
            return ServiceResult.failure(op, "INVALID_TITLE", str(exc))

        if path.exists() and not overwrite:
            return ServiceResult.failure(
                op,
                "ALREADY_EXISTS",
                f"{self._blog.relative(path)} already exists",
                path=self._blog.relative(path),
            )

        # ── RENDER ──
        with trace_span("render"):
            fm = frontmatter.model_dump(exclude_defaults=True, exclude_none=True)
            env = build_template_environment("post", site_root=self._blog.root)
            body = env.get_template("post.md.j2").render(title=title, draft=draft, day=day)
            text = render_frontmatter(fm, body)

        # ── PERSIST ──
        self._blog.write(path, text, overwrite=overwrite)
        logger.debug("Created %s", path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": path.stem,
                "path": self._blog.relative(path),
                "title": title,
                "layout": frontmatter.layout,
                "date": None if draft else day.isoformat(),
                "draft": draft,
            },
        )
