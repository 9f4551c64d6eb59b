"""Tests for the Post value object and PostFrontmatter schema."""

from datetime import date, datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from postctl.domain.naming import parse_post_filename
from postctl.domain.post import Post, PostFrontmatter, frontmatter_day


def _post(name: str = "2015-03-01-n-plus-one.markdown", **fm: object) -> Post:
    path = Path("/site/_posts") / name
    return Post(
        path=path,
        frontmatter={"layout": "post", "title": "N+1", **fm},
        body="\nSome words here.\n\n```java\nx\n```\n",
        body_offset=3,
        name=parse_post_filename(name),
    )


class TestPostFrontmatter:
    def test_required_keys(self) -> None:
        fm = PostFrontmatter(layout="post", title="T")
        assert fm.tags == []
        assert fm.date is None

    def test_missing_title(self) -> None:
        with pytest.raises(ValidationError):
            PostFrontmatter.model_validate({"layout": "post"})

    def test_extra_keys_kept(self) -> None:
        fm = PostFrontmatter.model_validate({"layout": "post", "title": "T", "comments": True})
        assert fm.model_dump()["comments"] is True

    def test_space_separated_tags(self) -> None:
        fm = PostFrontmatter.model_validate({"layout": "post", "title": "T", "tags": "java orm"})
        assert fm.tags == ["java", "orm"]

    def test_date_object_to_string(self) -> None:
        fm = PostFrontmatter.model_validate(
            {"layout": "post", "title": "T", "date": date(2015, 3, 1)}
        )
        assert fm.date == "2015-03-01"

    def test_frozen(self) -> None:
        fm = PostFrontmatter(layout="post", title="T")
        with pytest.raises(ValidationError):
            fm.title = "Changed"  # type: ignore[misc]


class TestFrontmatterDay:
    def test_date(self) -> None:
        assert frontmatter_day(date(2015, 3, 1)) == date(2015, 3, 1)

    def test_datetime(self) -> None:
        assert frontmatter_day(datetime(2015, 3, 1, 10, 0)) == date(2015, 3, 1)

    def test_jekyll_string_with_offset(self) -> None:
        assert frontmatter_day("2015-03-01 10:00:00 +0100") == date(2015, 3, 1)

    def test_garbage(self) -> None:
        assert frontmatter_day("yesterday") is None
        assert frontmatter_day(None) is None

    def test_invalid_calendar_date(self) -> None:
        assert frontmatter_day("2015-02-30") is None


class TestPost:
    def test_id_is_stem(self) -> None:
        assert _post().id == "2015-03-01-n-plus-one"

    def test_day_from_filename(self) -> None:
        assert _post().day == date(2015, 3, 1)

    def test_frontmatter_date_wins(self) -> None:
        assert _post(date="2015-03-02 08:00:00").day == date(2015, 3, 2)

    def test_title_stripped(self) -> None:
        assert _post(title="  Spaced  ").title == "Spaced"

    def test_categories_singular_key(self) -> None:
        post = _post(category="programming")
        assert post.categories == ["programming"]

    def test_fences_use_file_lines(self) -> None:
        fences = _post().fences()
        assert len(fences) == 1
        assert fences[0].start_line == 7
        assert fences[0].end_line == 9

    def test_word_count(self) -> None:
        assert _post().word_count() == 6

    def test_summary(self) -> None:
        summary = _post(tags=["java"]).to_summary(Path("/site"))
        assert summary == {
            "id": "2015-03-01-n-plus-one",
            "title": "N+1",
            "date": "2015-03-01",
            "layout": "post",
            "tags": ["java"],
            "categories": [],
            "path": "_posts/2015-03-01-n-plus-one.markdown",
            "draft": False,
        }
