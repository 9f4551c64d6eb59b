"""BaseService: foundation for all postctl services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from postctl.infrastructure.blog import Blog


class BaseService:
    """Base for service-layer classes.

    Every service receives a :class:`Blog` at construction time and
    reaches the filesystem only through it.

    Usage::

        class QueryService(BaseService):
            def list_posts(self, ...) -> ServiceResult:
                for path in self._blog.find_posts():
                    ...
    """

    def __init__(self, blog: Blog) -> None:
        self._blog = blog
