"""Tests for front matter splitting, loading, and rendering."""

import pytest

from postctl.domain.content import (
    FrontmatterError,
    load_frontmatter,
    order_frontmatter,
    parse_frontmatter,
    render_frontmatter,
    split_frontmatter,
)


class TestSplitFrontmatter:
    def test_basic(self) -> None:
        yaml_text, body, offset = split_frontmatter("---\nlayout: post\n---\nBody")
        assert yaml_text == "layout: post"
        assert body == "Body"
        assert offset == 3

    def test_no_frontmatter(self) -> None:
        yaml_text, body, offset = split_frontmatter("# Heading\n")
        assert yaml_text is None
        assert body == "# Heading\n"
        assert offset == 0

    def test_empty_content(self) -> None:
        assert split_frontmatter("") == (None, "", 0)

    def test_unclosed(self) -> None:
        with pytest.raises(FrontmatterError) as exc_info:
            split_frontmatter("---\ntitle: Oops\nNo closing delimiter")
        assert exc_info.value.code == "UNCLOSED"
        assert exc_info.value.line == 1

    def test_crlf_normalized(self) -> None:
        yaml_text, body, offset = split_frontmatter("---\r\ntitle: X\r\n---\r\nBody\r\n")
        assert yaml_text == "title: X"
        assert body == "Body\n"
        assert offset == 3

    def test_delimiter_with_trailing_space(self) -> None:
        yaml_text, _body, _offset = split_frontmatter("--- \ntitle: X\n---  \nBody")
        assert yaml_text == "title: X"

    def test_indented_delimiter_does_not_close(self) -> None:
        text = "---\nnote: |\n  ---\n  indented\ntitle: T\n---\nBody"
        yaml_text, body, offset = split_frontmatter(text)
        assert yaml_text == "note: |\n  ---\n  indented\ntitle: T"
        assert body == "Body"
        assert offset == 6

    def test_leading_byte_order_mark(self) -> None:
        yaml_text, body, _offset = split_frontmatter("\ufeff---\ntitle: X\n---\nBody")
        assert yaml_text == "title: X"
        assert body == "Body"

    def test_empty_block(self) -> None:
        yaml_text, body, offset = split_frontmatter("---\n---\nBody")
        assert yaml_text == ""
        assert body == "Body"
        assert offset == 2

    def test_body_keeps_leading_blank_line(self) -> None:
        _yaml, body, offset = split_frontmatter("---\na: 1\n---\n\nBody")
        assert body == "\nBody"
        assert offset == 3


class TestLoadFrontmatter:
    def test_mapping(self) -> None:
        fm = load_frontmatter('layout: post\ntitle: "Quoted: title"')
        assert fm["layout"] == "post"
        assert fm["title"] == "Quoted: title"

    def test_empty_is_empty_mapping(self) -> None:
        assert load_frontmatter("") == {}

    def test_invalid_yaml(self) -> None:
        with pytest.raises(FrontmatterError) as exc_info:
            load_frontmatter("title: [unclosed\nlayout: post")
        assert exc_info.value.code == "INVALID_YAML"

    def test_invalid_yaml_reports_file_line(self) -> None:
        with pytest.raises(FrontmatterError) as exc_info:
            load_frontmatter("layout: post\ntitle: a: b")
        assert exc_info.value.line is not None
        assert exc_info.value.line >= 2

    def test_scalar_is_not_a_mapping(self) -> None:
        with pytest.raises(FrontmatterError) as exc_info:
            load_frontmatter("just a sentence")
        assert exc_info.value.code == "NOT_A_MAPPING"

    def test_list_is_not_a_mapping(self) -> None:
        with pytest.raises(FrontmatterError) as exc_info:
            load_frontmatter("- a\n- b")
        assert exc_info.value.code == "NOT_A_MAPPING"


class TestParseFrontmatter:
    def test_basic_parse(self) -> None:
        fm, body = parse_frontmatter("---\nlayout: post\ntitle: Test\n---\nBody text here.")
        assert fm["title"] == "Test"
        assert body == "Body text here."

    def test_strips_one_leading_blank_line(self) -> None:
        _fm, body = parse_frontmatter("---\ntitle: T\n---\n\nBody")
        assert body == "Body"

    def test_no_frontmatter(self) -> None:
        assert parse_frontmatter("Just plain text.") == ({}, "Just plain text.")

    def test_unclosed_returns_content(self) -> None:
        content = "---\ntitle: T\nno end"
        assert parse_frontmatter(content) == ({}, content)

    def test_list_values(self) -> None:
        fm, _body = parse_frontmatter("---\ntags:\n  - java\n  - hibernate\n---\n")
        assert list(fm["tags"]) == ["java", "hibernate"]


class TestRenderFrontmatter:
    def test_canonical_order(self) -> None:
        fm = {"tags": ["a"], "zebra": 1, "title": "T", "layout": "post", "date": "2015-03-01"}
        assert list(order_frontmatter(fm)) == ["layout", "title", "date", "tags", "zebra"]

    def test_none_omitted(self) -> None:
        assert "author" not in order_frontmatter({"title": "T", "author": None})

    def test_render_then_parse(self) -> None:
        text = render_frontmatter({"title": "Native SQL", "layout": "post"}, "Body\n")
        assert text.startswith("---\nlayout: post\ntitle: Native SQL\n---\n")
        fm, body = parse_frontmatter(text)
        assert fm == {"layout": "post", "title": "Native SQL"}
        assert body == "Body\n"

    def test_preserves_quote_style(self) -> None:
        fm, body = parse_frontmatter('---\nlayout: post\ntitle: "Quoted"\n---\nBody')
        text = render_frontmatter(fm, body)
        assert 'title: "Quoted"' in text

    def test_empty_body(self) -> None:
        assert render_frontmatter({"title": "T"}, "").endswith("---\n")
