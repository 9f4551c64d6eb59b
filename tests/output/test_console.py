"""Tests for the Rich Console factory and theme."""

from io import StringIO

from postctl.output.console import (
    POSTCTL_THEME,
    create_console,
    get_output,
    style_for_severity,
)


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[post.error]broken[/post.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "broken" in output

    def test_width(self) -> None:
        assert create_console(width=80).width == 80
        assert create_console().width == 120


class TestTheme:
    def test_post_styles_defined(self) -> None:
        for name in ("post.ok", "post.error", "post.warning", "post.path", "post.draft"):
            assert name in POSTCTL_THEME.styles

    def test_severity_styles(self) -> None:
        assert style_for_severity("error") == "post.error"
        assert style_for_severity("warning") == "post.warning"
        assert style_for_severity("info") == ""
