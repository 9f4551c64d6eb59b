"""Tests for operation-specific renderers."""

from __future__ import annotations

from typing import Any

from postctl.output.renderers import render_quiet, render_result
from postctl.services.result import ServiceResult


def _issue(**overrides: Any) -> dict[str, Any]:
    issue = {
        "category": "code_fences",
        "rule": "unclosed_fence",
        "severity": "error",
        "path": "_posts/2015-03-01-a.markdown",
        "line": 7,
        "message": "Code fence ``` opened on line 7 is never closed",
    }
    issue.update(overrides)
    return issue


def _check_result(issues: list[dict[str, Any]], checked: int = 2) -> ServiceResult:
    errors = sum(1 for i in issues if i["severity"] == "error")
    return ServiceResult(
        ok=True,
        op="check",
        data={
            "issues": issues,
            "count": len(issues),
            "error_count": errors,
            "warning_count": len(issues) - errors,
            "healthy": errors == 0,
            "posts_checked": checked,
        },
    )


class TestRenderCheck:
    def test_clean(self) -> None:
        output = render_result(_check_result([], checked=5))
        assert output == "OK  5 posts checked, no issues found."

    def test_issues_grouped_by_category(self) -> None:
        issues = [
            _issue(),
            _issue(
                category="file_naming",
                rule="slug_style",
                severity="warning",
                path="_posts/2015-03-01-Bad.markdown",
                line=None,
                message="Slug 'Bad' is not lowercase words joined by hyphens",
            ),
        ]
        output = render_result(_check_result(issues))
        assert "code_fences" in output
        assert "file_naming" in output
        assert "_posts/2015-03-01-a.markdown:7" in output
        assert "_posts/2015-03-01-Bad.markdown: Slug" in output
        assert output.endswith("2 posts checked: 1 error(s), 1 warning(s)")

    def test_hidden_warnings_noted(self) -> None:
        result = _check_result([], checked=3)
        data = {**result.data, "hidden_warning_count": 2}
        output = render_result(result.model_copy(update={"data": data}))
        assert output == "OK  3 posts checked, no issues found. (2 warning(s) hidden)"

    def test_message_brackets_not_markup(self) -> None:
        output = render_result(_check_result([_issue(message="Layout 'x' is not one of ['post']")]))
        assert "['post']" in output

    def test_verbose_shows_rule(self) -> None:
        output = render_result(_check_result([_issue()]), verbose=True)
        assert "(unclosed_fence)" in output


class TestRenderFix:
    def test_nothing_to_fix(self) -> None:
        result = ServiceResult(ok=True, op="fix", data={"fixes": [], "count": 0})
        assert "Nothing to fix." in render_result(result)

    def test_fixes_listed(self) -> None:
        result = ServiceResult(
            ok=True,
            op="fix",
            data={"fixes": ["_posts/a.markdown: added layout 'post'"], "count": 1},
        )
        assert "fixed _posts/a.markdown: added layout 'post'" in render_result(result)


class TestRenderList:
    def _items(self) -> list[dict[str, Any]]:
        return [
            {
                "id": "2015-03-01-n-plus-one",
                "title": "Fixing the N+1 problem",
                "date": "2015-03-01",
                "layout": "post",
                "tags": ["java", "orm"],
                "categories": [],
                "path": "_posts/2015-03-01-n-plus-one.markdown",
                "draft": False,
            },
            {
                "id": "idea",
                "title": "Idea",
                "date": None,
                "layout": "post",
                "tags": [],
                "categories": [],
                "path": "_drafts/idea.markdown",
                "draft": True,
            },
        ]

    def test_table(self) -> None:
        result = ServiceResult(ok=True, op="list_posts", data={"items": self._items(), "count": 2})
        output = render_result(result)
        assert "Fixing the N+1 problem" in output
        assert "java, orm" in output
        assert "Idea (draft)" in output
        assert output.endswith("2 post(s)")
        assert "_drafts/idea.markdown" not in output

    def test_verbose_adds_path(self) -> None:
        result = ServiceResult(ok=True, op="list_posts", data={"items": self._items(), "count": 2})
        assert "_drafts/idea.markdown" in render_result(result, verbose=True)

    def test_empty(self) -> None:
        result = ServiceResult(ok=True, op="list_posts", data={"items": [], "count": 0})
        assert render_result(result) == "No posts found."


class TestRenderPost:
    def test_fields_and_code_blocks(self) -> None:
        result = ServiceResult(
            ok=True,
            op="get_post",
            data={
                "id": "2015-03-01-a",
                "title": "A",
                "date": "2015-03-01",
                "layout": "post",
                "path": "_posts/2015-03-01-a.markdown",
                "tags": [],
                "categories": [],
                "draft": False,
                "word_count": 12,
                "code_blocks": [
                    {"start_line": 8, "end_line": 11, "language": "java"},
                    {"start_line": 14, "end_line": None, "language": None},
                ],
                "frontmatter": {"layout": "post", "title": "A", "comments": True},
            },
        )
        output = render_result(result)
        assert "word_count: 12" in output
        assert "lines 8-11  java" in output
        assert "lines 14-unclosed  (none)" in output
        assert "comments" not in output
        assert "comments: True" in render_result(result, verbose=True)


class TestRenderStats:
    def test_sections(self) -> None:
        result = ServiceResult(
            ok=True,
            op="stats",
            data={
                "posts": 3,
                "drafts": 1,
                "by_year": {"2014": 1, "2015": 2},
                "tags": {},
                "code_languages": {"java": 2},
            },
        )
        output = render_result(result)
        assert "posts: 3" in output
        assert "by_year:" in output
        assert "2015: 2" in output
        assert "tags:" not in output
        assert "java: 2" in output


class TestRenderError:
    def test_error_line(self) -> None:
        result = ServiceResult.failure("get_post", "NOT_FOUND", "No post matches 'x'")
        output = render_result(result)
        assert output.startswith("ERROR  get_post")
        assert "No post matches 'x'" in output

    def test_candidates_listed(self) -> None:
        result = ServiceResult.failure(
            "get_post", "AMBIGUOUS", "'same' matches 2 posts", candidates=["_posts/a.md", "_posts/b.md"]
        )
        output = render_result(result)
        assert "  - _posts/a.md" in output
        assert "  - _posts/b.md" in output


class TestRenderQuiet:
    def test_list_ids(self) -> None:
        result = ServiceResult(ok=True, op="list_posts", data={"items": [{"id": "a"}, {"id": "b"}]})
        assert render_quiet(result) == "a\nb"

    def test_check_issue_lines(self) -> None:
        result = _check_result([_issue(), _issue(line=None, severity="warning", rule="empty_body", message="Post body is empty")])
        assert render_quiet(result).splitlines() == [
            "_posts/2015-03-01-a.markdown:7: error: Code fence ``` opened on line 7 is never closed [unclosed_fence]",
            "_posts/2015-03-01-a.markdown: warning: Post body is empty [empty_body]",
        ]

    def test_check_clean(self) -> None:
        assert render_quiet(_check_result([])) == "OK: check"

    def test_error(self) -> None:
        result = ServiceResult.failure("create_post", "ALREADY_EXISTS", "exists")
        assert render_quiet(result) == "ERROR: create_post — exists"

    def test_generic(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="stats", data={"posts": 1})) == "OK: stats"
