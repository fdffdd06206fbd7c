"""Tests for frontmatter extraction and post rows."""

import pytest

from src.supamarker.errors import (
    FrontmatterParseError,
    MissingClosingDelimiter,
)
from src.supamarker.frontmatter import parse_frontmatter
from src.supamarker.models import FrontMatter, PostRow


# ---------------------------------------------------------------------------
# parse_frontmatter
# ---------------------------------------------------------------------------

class TestParseFrontmatter:
    def test_full_frontmatter(self):
        text = (
            "---\n"
            "title: Hello World\n"
            "summary: A short intro\n"
            "tags: [intro, meta]\n"
            "slug: custom-slug\n"
            "---\n"
            "# Body\n"
        )
        fm, body = parse_frontmatter(text)
        assert fm == FrontMatter(
            title="Hello World",
            summary="A short intro",
            tags=["intro", "meta"],
            slug="custom-slug",
        )
        assert body == "# Body\n"

    def test_title_only(self):
        fm, body = parse_frontmatter("---\ntitle: Only\n---\nbody")
        assert fm.title == "Only"
        assert fm.summary is None
        assert fm.tags is None
        assert fm.slug is None
        assert body == "body"

    def test_body_excludes_block(self):
        fm, body = parse_frontmatter("---\ntitle: T\ntags:\n  - a\n---\n\n\nText here")
        assert fm is not None
        assert "title:" not in body
        assert "---" not in body
        assert body == "Text here"

    def test_leading_whitespace_allowed(self):
        fm, _ = parse_frontmatter("\n\n  ---\ntitle: Indented\n---\nbody")
        assert fm.title == "Indented"

    def test_no_frontmatter_returns_original(self):
        text = "  # Just markdown\n\nNo frontmatter.\n"
        fm, body = parse_frontmatter(text)
        assert fm is None
        assert body == text

    def test_empty_text(self):
        assert parse_frontmatter("") == (None, "")

    def test_missing_closing_delimiter(self):
        with pytest.raises(MissingClosingDelimiter):
            parse_frontmatter("---\ntitle: Never closed\n")

    def test_missing_title(self):
        with pytest.raises(FrontmatterParseError):
            parse_frontmatter("---\nsummary: no title\n---\nbody")

    def test_invalid_yaml(self):
        with pytest.raises(FrontmatterParseError):
            parse_frontmatter("---\ntitle: [unclosed\n---\nbody")

    def test_non_mapping_yaml(self):
        with pytest.raises(FrontmatterParseError):
            parse_frontmatter("---\n- just\n- a list\n---\nbody")

    def test_empty_block(self):
        with pytest.raises(FrontmatterParseError):
            parse_frontmatter("---\n---\nbody")

    def test_tags_must_be_list(self):
        with pytest.raises(FrontmatterParseError):
            parse_frontmatter("---\ntitle: T\ntags: {a: 1}\n---\n")

    def test_extra_keys_ignored(self):
        fm, _ = parse_frontmatter("---\ntitle: T\ndate: 2024-01-01\ndraft: true\n---\n")
        assert fm.title == "T"

    def test_numeric_title_accepted(self):
        fm, _ = parse_frontmatter("---\ntitle: 2024\n---\n")
        assert fm.title == "2024"

    def test_body_keeps_later_delimiters(self):
        fm, body = parse_frontmatter("---\ntitle: T\n---\nabove\n---\nbelow\n")
        assert body == "above\n---\nbelow\n"


class TestPostRow:
    def test_defaults_from_frontmatter(self):
        row = PostRow.from_frontmatter("s", FrontMatter(title="T"))
        assert row.model_dump() == {"slug": "s", "title": "T", "summary": "", "tags": []}

    def test_values_from_frontmatter(self):
        fm = FrontMatter(title="T", summary="S", tags=["a"], slug="ignored-here")
        row = PostRow.from_frontmatter("chosen", fm)
        assert row.slug == "chosen"
        assert row.summary == "S"
        assert row.tags == ["a"]
