"""Tests for fenced code block scanning."""

from postctl.domain.fences import CodeFence, scan_fences


class TestScanFences:
    def test_no_fences(self) -> None:
        assert scan_fences("Just prose.\n\nMore prose.") == []

    def test_closed_backtick_fence(self) -> None:
        body = "Intro\n```java\nclass A {}\n```\nOutro"
        fences = scan_fences(body)
        assert fences == [CodeFence(start_line=2, end_line=4, marker="```", info="java")]
        assert fences[0].closed
        assert fences[0].language == "java"

    def test_tilde_fence(self) -> None:
        fences = scan_fences("~~~\ncode\n~~~")
        assert len(fences) == 1
        assert fences[0].closed
        assert fences[0].language is None

    def test_unclosed_fence(self) -> None:
        fences = scan_fences("```sql\nSELECT 1;\n")
        assert len(fences) == 1
        assert not fences[0].closed
        assert fences[0].end_line is None

    def test_line_offset(self) -> None:
        fences = scan_fences("\n```\nx\n```", line_offset=4)
        assert fences[0].start_line == 6
        assert fences[0].end_line == 8

    def test_mismatched_marker_does_not_close(self) -> None:
        fences = scan_fences("```\ncode\n~~~\n")
        assert not fences[0].closed

    def test_shorter_marker_does_not_close(self) -> None:
        fences = scan_fences("````\n```\ninner\n```\n````")
        assert len(fences) == 1
        assert fences[0].start_line == 1
        assert fences[0].end_line == 5

    def test_longer_marker_closes(self) -> None:
        fences = scan_fences("```\ncode\n`````")
        assert fences[0].end_line == 3

    def test_closing_fence_with_info_does_not_close(self) -> None:
        fences = scan_fences("```\ncode\n```java\n")
        assert not fences[0].closed

    def test_backtick_in_info_is_not_a_fence(self) -> None:
        assert scan_fences("```inline ` code```\n") == []

    def test_four_space_indent_is_not_a_fence(self) -> None:
        assert scan_fences("    ```\n    code\n") == []

    def test_indented_up_to_three_spaces(self) -> None:
        fences = scan_fences("   ```\ncode\n   ```")
        assert fences[0].closed

    def test_multiple_fences_in_order(self) -> None:
        body = "```java\na\n```\ntext\n```sql\nb\n```\n```\nopen"
        fences = scan_fences(body)
        assert [f.language for f in fences] == ["java", "sql", None]
        assert [f.closed for f in fences] == [True, True, False]

    def test_info_string_first_word_is_language(self) -> None:
        fences = scan_fences("``` java title=Owner.java\nx\n```")
        assert fences[0].language == "java"
        assert fences[0].info == "java title=Owner.java"
