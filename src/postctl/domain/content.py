"""Front matter parsing and rendering.

A post opens with ``---`` on its first line (after an optional UTF-8 BOM);
the next line that starts with ``---`` at column 0 and has nothing but
trailing whitespace after it closes the YAML block. An indented ``---``
belongs to the YAML. Everything after the closing line is the body.

Two readers are provided:

- :func:`split_frontmatter` + :func:`load_frontmatter`: strict, raise
  :class:`FrontmatterError` with a code the checker turns into an issue.
- :func:`parse_frontmatter`: lenient, returns ``({}, content)`` for
  anything that is not a well-formed block.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import MarkedYAMLError, YAMLError

_FRONTMATTER_DELIMITER = "---"

CANONICAL_KEY_ORDER: list[str] = [
    "layout",
    "title",
    "date",
    "author",
    "categories",
    "tags",
]


class FrontmatterError(Exception):
    """Front matter that cannot be read.

    Attributes:
        code: ``UNCLOSED``, ``INVALID_YAML`` or ``NOT_A_MAPPING``.
        line: 1-based file line the problem was detected on, if known.
    """

    def __init__(self, code: str, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.line = line


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful; a failed dump can leave a
    shared instance broken, so every call gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


def split_frontmatter(content: str) -> tuple[str | None, str, int]:
    """Split *content* into ``(yaml_text, body, body_offset)``.

    ``yaml_text`` is None when the content does not open with ``---``.
    ``body_offset`` is the number of file lines that precede the body.

    Raises:
        FrontmatterError: ``UNCLOSED`` if the block is never closed.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if lines[0].lstrip("\ufeff").rstrip() != _FRONTMATTER_DELIMITER:
        return None, normalized, 0

    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip() == _FRONTMATTER_DELIMITER:
            yaml_text = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1 :])
            return yaml_text, body, i + 1

    raise FrontmatterError("UNCLOSED", "Front matter opened on line 1 is never closed", line=1)


def load_frontmatter(yaml_text: str) -> CommentedMap:
    """Parse a front matter YAML block into a round-trip mapping.

    The result keeps comments and quote styles, so it can be edited in
    place and dumped back with :func:`dump_frontmatter`.

    Raises:
        FrontmatterError: ``INVALID_YAML`` or ``NOT_A_MAPPING``.
    """
    try:
        data = _new_yaml().load(yaml_text)
    except YAMLError as exc:
        line = None
        if isinstance(exc, MarkedYAMLError) and exc.problem_mark is not None:
            # +2: the opening delimiter line, and marks are 0-based
            line = exc.problem_mark.line + 2
        problem = getattr(exc, "problem", None) or str(exc)
        raise FrontmatterError("INVALID_YAML", f"Invalid YAML: {problem}", line=line) from exc

    if data is None:
        return CommentedMap()
    if not isinstance(data, dict):
        msg = f"Front matter must be a mapping, got {type(data).__name__}"
        raise FrontmatterError("NOT_A_MAPPING", msg, line=2)
    return data


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse front matter and body, tolerating malformed input.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. If there is no
        closed block, returns ``({}, content)``. One blank line directly
        after the closing delimiter is dropped from the body.
    """
    try:
        yaml_text, body, _offset = split_frontmatter(content)
    except FrontmatterError:
        return {}, content
    if yaml_text is None:
        return {}, content

    fm = load_frontmatter(yaml_text)
    if body.startswith("\n"):
        body = body[1:]
    return fm, body


def order_frontmatter(fm: dict[str, Any]) -> dict[str, Any]:
    """Return *fm* with keys in canonical order.

    Keys in :data:`CANONICAL_KEY_ORDER` come first, then the remaining
    keys alphabetically. ``None`` values are omitted.
    """
    ordered: dict[str, Any] = {}
    for key in CANONICAL_KEY_ORDER:
        if key in fm and fm[key] is not None:
            ordered[key] = fm[key]

    for key in sorted(fm.keys()):
        if key not in ordered and fm[key] is not None:
            ordered[key] = fm[key]

    return ordered


def dump_frontmatter(frontmatter: dict[str, Any]) -> str:
    """Serialize a mapping to YAML text without delimiters."""
    buf = StringIO()
    _new_yaml().dump(frontmatter, buf)
    return buf.getvalue()


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a front matter dict and body text into a post file."""
    yaml_text = dump_frontmatter(order_frontmatter(frontmatter))
    parts = [_FRONTMATTER_DELIMITER, "\n", yaml_text, _FRONTMATTER_DELIMITER, "\n"]
    if body:
        parts.append(body)
    return "".join(parts)
