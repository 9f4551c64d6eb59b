"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console backed by StringIO; the caller
extracts the text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from postctl.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from postctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if item.get("id"))

    issues = result.data.get("issues")
    if result.op == "check" and issues:
        return "\n".join(_issue_line(issue) for issue in issues)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _issue_line(issue: dict[str, Any]) -> str:
    """``path:line: severity: message [rule]``, the compiler-style form."""
    location = str(issue.get("path", ""))
    if issue.get("line"):
        location += f":{issue['line']}"
    return f"{location}: {issue.get('severity')}: {issue.get('message')} [{issue.get('rule')}]"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "post.ok"), (f"  {result.op}", "post.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="post.key")
    style = {"id": "post.id", "path": "post.path", "title": "post.title", "date": "post.date"}
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"), default=str)
    v = Text(str(value), style=style.get(key, ""))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations")
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _post_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Date", style="post.date", no_wrap=True)
    table.add_column("Title", style="post.title")
    table.add_column("Layout")
    table.add_column("Tags")
    if verbose:
        table.add_column("Path", style="post.path")

    for item in items:
        title = Text(str(item.get("title", "")))
        if item.get("draft"):
            title.append(" (draft)", style="post.draft")
        row: list[Any] = [
            str(item.get("date") or "-"),
            title,
            str(item.get("layout") or ""),
            ", ".join(item.get("tags", [])),
        ]
        if verbose:
            row.append(str(item.get("path", "")))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text.assemble(("ERROR", "post.error"), (f"  {result.op}", "post.op"), f" — {msg}")
    console.print(line)
    if err and err.detail:
        candidates = err.detail.get("candidates")
        if candidates:
            for candidate in candidates:
                console.print(Text(f"  - {candidate}"))
        elif verbose:
            for key, value in err.detail.items():
                _field(console, key, value)


# ── Check ─────────────────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Issues grouped by category, then a one-line summary."""
    issues = result.data.get("issues", [])
    checked = result.data.get("posts_checked", 0)
    hidden = result.data.get("hidden_warning_count", 0)
    hidden_note = f" ({hidden} warning(s) hidden)" if hidden else ""

    if not issues:
        console.print(f"[post.ok]OK[/post.ok]  {checked} posts checked, no issues found.{hidden_note}")
        return

    by_category: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_category.setdefault(str(issue.get("category", "unknown")), []).append(issue)

    for category, cat_issues in by_category.items():
        console.print(f"\n[bold]{category}[/bold]")
        for issue in cat_issues:
            sev = str(issue.get("severity", "warning"))
            style = style_for_severity(sev)
            location = str(issue.get("path", ""))
            if issue.get("line"):
                location += f":{issue['line']}"
            line = Text.assemble(
                "  ",
                (sev, style),
                " ",
                (location, "post.path"),
                f": {issue.get('message', '')}",
            )
            if verbose:
                line.append(f" ({issue.get('rule')})", style="dim")
            console.print(line)

    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", 0)
    console.print()
    console.print(f"{checked} posts checked: {errors} error(s), {warnings} warning(s){hidden_note}")
    if verbose:
        _render_meta(console, result)


def _render_fix(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    fixes = result.data.get("fixes", [])
    if not fixes:
        console.print("  Nothing to fix.")
    for fix in fixes:
        console.print(Text.assemble("  ", ("fixed", "post.ok"), f" {fix}"))


# ── Query ─────────────────────────────────────────────────────────────


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No posts found.")
        return
    console.print(_post_table(items, verbose=verbose))
    console.print(f"{result.data.get('count', len(items))} post(s)", style="dim")
    if verbose:
        _render_meta(console, result)


def _render_post(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    for key in ("id", "title", "date", "layout", "path", "tags", "categories", "word_count"):
        if data.get(key) not in (None, [], ""):
            _field(console, key, data[key])
    if data.get("draft"):
        _field(console, "draft", True)

    blocks = data.get("code_blocks", [])
    if blocks:
        console.print(Text("  code blocks:", style="post.key"))
        for block in blocks:
            end = block.get("end_line") or "unclosed"
            language = block.get("language") or "(none)"
            console.print(f"    lines {block.get('start_line')}-{end}  {language}")

    if verbose:
        extra = {
            k: v
            for k, v in data.get("frontmatter", {}).items()
            if k not in ("title", "layout", "tags", "categories", "date")
        }
        for key, value in extra.items():
            _field(console, key, value)
        _render_meta(console, result)


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "posts", data.get("posts", 0))
    _field(console, "drafts", data.get("drafts", 0))
    for section in ("by_year", "tags", "code_languages"):
        counts = data.get(section) or {}
        if not counts:
            continue
        console.print(Text(f"  {section}:", style="post.key"))
        for name, count in counts.items():
            console.print(f"    {name}: {count}")


# ── Mutations ─────────────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("id", "title", "path", "date", "layout"):
        if result.data.get(key) is not None:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "check": _render_check,
    "fix": _render_fix,
    "list_posts": _render_list,
    "get_post": _render_post,
    "stats": _render_stats,
    "create_post": _render_mutation,
}
