"""Blog: repository over the post and draft directories.

The Blog is the single dependency injected into every service. It owns
path resolution, discovery, and reading/writing post files; services
own the decisions about what to do with them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from postctl.domain.content import load_frontmatter, split_frontmatter
from postctl.domain.naming import PostNameError, parse_post_filename
from postctl.domain.post import Post
from postctl.infrastructure.filesystem import (
    find_post_files,
    read_text,
    resolve_post_path,
    write_text,
)

if TYPE_CHECKING:
    from pathlib import Path

    from postctl.config.settings import PostctlSettings

logger = logging.getLogger(__name__)


class Blog:
    """A site's post collection rooted at ``settings.site_root``."""

    def __init__(self, settings: PostctlSettings) -> None:
        self.settings = settings
        self.root: Path = settings.site_root

    @property
    def posts_dir(self) -> Path:
        return self.root / self.settings.site.posts_dir

    @property
    def drafts_dir(self) -> Path:
        return self.root / self.settings.site.drafts_dir

    @property
    def extensions(self) -> tuple[str, ...]:
        return tuple(self.settings.site.extensions)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def find_posts(self, *, include_drafts: bool = False) -> list[Path]:
        """List post files, published first, then drafts."""
        paths = find_post_files(self.posts_dir, self.extensions)
        if include_drafts:
            paths.extend(find_post_files(self.drafts_dir, self.extensions))
        logger.debug("Discovered %d post files under %s", len(paths), self.root)
        return paths

    def is_draft(self, path: Path) -> bool:
        return path.is_relative_to(self.drafts_dir)

    def resolve(self, identifier: str, *, include_drafts: bool = True) -> list[Path]:
        """Find posts matching *identifier*.

        Matches, in order of preference: exact file name, file stem,
        then slug (the stem without its date prefix). Returns every
        match at the first level that has any.
        """
        paths = self.find_posts(include_drafts=include_drafts)
        by_name = [p for p in paths if p.name == identifier]
        if by_name:
            return by_name
        by_stem = [p for p in paths if p.stem == identifier]
        if by_stem:
            return by_stem
        return [p for p in paths if self._slug_of(p) == identifier]

    def _slug_of(self, path: Path) -> str:
        try:
            return parse_post_filename(path.name, self.extensions).slug
        except PostNameError:
            return path.stem

    # ------------------------------------------------------------------
    # Reading / writing
    # ------------------------------------------------------------------

    def load_post(self, path: Path) -> Post:
        """Read and parse a post file strictly.

        Raises:
            FrontmatterError: If the front matter is unclosed, invalid
                YAML, or not a mapping. A file with no front matter
                loads with an empty mapping.
            UnicodeDecodeError: If the file is not UTF-8.
        """
        text = read_text(path)
        yaml_text, body, offset = split_frontmatter(text)
        frontmatter = load_frontmatter(yaml_text) if yaml_text is not None else {}

        draft = self.is_draft(path)
        name = None
        if not draft:
            try:
                name = parse_post_filename(path.name, self.extensions)
            except PostNameError:
                name = None

        return Post(
            path=path,
            frontmatter=frontmatter,
            body=body,
            body_offset=offset,
            name=name,
            draft=draft,
        )

    def post_path(self, filename: str, *, draft: bool = False) -> Path:
        """Path for a new post file inside the posts or drafts directory."""
        directory = self.drafts_dir if draft else self.posts_dir
        return resolve_post_path(directory, filename)

    def write(self, path: Path, text: str, *, overwrite: bool = False) -> None:
        """Write a post file.

        Raises:
            FileExistsError: If *path* exists and *overwrite* is False.
        """
        if path.exists() and not overwrite:
            raise FileExistsError(str(path))
        write_text(path, text)
        logger.debug("Wrote %s", path)

    def relative(self, path: Path) -> str:
        """Path relative to the site root, for display."""
        if path.is_relative_to(self.root):
            return str(path.relative_to(self.root))
        return str(path)
