"""Fenced code block scanning.

Follows the CommonMark fence rules closely enough for linting:

- An opening fence is up to three spaces of indentation followed by at
  least three backticks or tildes, then an optional info string.
  Backtick fences may not have a backtick in the info string.
- A closing fence uses the same character, at least as many of them,
  and nothing but whitespace after.
- A fence that is never closed runs to the end of the document.

Fences nested inside list items or block quotes with deeper indentation
are not recognized.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_OPEN_RE = re.compile(r"^ {0,3}(?P<marker>`{3,}|~{3,})(?P<info>.*)$")
_CLOSE_RE = re.compile(r"^ {0,3}(?P<marker>`{3,}|~{3,})[ \t]*$")


@dataclass(frozen=True)
class CodeFence:
    """One fenced code block. Line numbers are 1-based file lines."""

    start_line: int
    end_line: int | None
    marker: str
    info: str = ""

    @property
    def closed(self) -> bool:
        return self.end_line is not None

    @property
    def language(self) -> str | None:
        words = self.info.split()
        return words[0] if words else None


def _opening(line: str) -> tuple[str, str] | None:
    match = _OPEN_RE.match(line)
    if match is None:
        return None
    marker = match["marker"]
    info = match["info"].strip()
    if marker[0] == "`" and "`" in info:
        return None
    return marker, info


def _closes(line: str, marker: str) -> bool:
    match = _CLOSE_RE.match(line)
    if match is None:
        return False
    candidate = match["marker"]
    return candidate[0] == marker[0] and len(candidate) >= len(marker)


def scan_fences(body: str, line_offset: int = 0) -> list[CodeFence]:
    """Return every fenced code block in *body*, in document order.

    Args:
        body: Markdown text (front matter already removed).
        line_offset: Number of file lines preceding *body*, so reported
            line numbers point into the original file.
    """
    fences: list[CodeFence] = []
    open_marker: str | None = None
    open_info = ""
    open_line = 0

    for index, line in enumerate(body.split("\n")):
        lineno = line_offset + index + 1
        if open_marker is None:
            opened = _opening(line)
            if opened is not None:
                open_marker, open_info = opened
                open_line = lineno
        elif _closes(line, open_marker):
            fences.append(CodeFence(open_line, lineno, open_marker, open_info))
            open_marker = None

    if open_marker is not None:
        fences.append(CodeFence(open_line, None, open_marker, open_info))

    return fences
