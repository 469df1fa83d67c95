"""Tests for the front-matter codec and small helpers."""

from datetime import date, datetime

import pytest

from blogcorpus.errors import ParseError
from blogcorpus.utils import (
    has_frontmatter,
    natural_key,
    normalize_title,
    parse_frontmatter,
    require_title,
    slugify,
    split_tags,
    yaml_frontmatter_block,
)


class TestSlugify:
    def test_lowercases_and_joins(self) -> None:
        assert slugify("Pi Digits") == "pi-digits"

    def test_collapses_separators(self) -> None:
        assert slugify("--Hello,  World!--") == "hello-world"

    def test_underscores_become_dashes(self) -> None:
        assert slugify("pi_digits") == "pi-digits"


class TestNaturalKey:
    def test_numbers_sort_numerically(self) -> None:
        names = ["post10", "post2", "post1"]
        assert sorted(names, key=natural_key) == ["post1", "post2", "post10"]


class TestNormalizeTitle:
    def test_case_and_punctuation_insensitive(self) -> None:
        assert normalize_title("Benchmarks!") == normalize_title("benchmarks")

    def test_collapses_whitespace(self) -> None:
        assert normalize_title("  lots   of  space ") == "lots of space"


class TestParseFrontmatter:
    def test_splits_mapping_and_body(self) -> None:
        fm, body = parse_frontmatter("---\ntitle: Example\n---\nHello")
        assert fm == {"title": "Example"}
        assert body == "Hello"

    def test_no_frontmatter(self) -> None:
        fm, body = parse_frontmatter("# Just markdown\n")
        assert fm is None
        assert body == "# Just markdown\n"

    def test_frontmatter_only(self) -> None:
        fm, body = parse_frontmatter("---\ntitle: Example\n---\n")
        assert fm == {"title": "Example"}
        assert body == ""

    def test_closing_delimiter_at_eof(self) -> None:
        fm, body = parse_frontmatter("---\ntitle: Example\n---")
        assert fm == {"title": "Example"}
        assert body == ""

    def test_empty_block_is_empty_mapping(self) -> None:
        fm, body = parse_frontmatter("---\n---\nbody\n")
        assert fm == {}
        assert body == "body\n"

    def test_leading_blank_lines_dropped_from_body(self) -> None:
        _, body = parse_frontmatter("---\ntitle: x\n---\n\n\nHello\n")
        assert body == "Hello\n"

    def test_crlf_and_bom(self) -> None:
        fm, body = parse_frontmatter("\ufeff---\r\ntitle: x\r\n---\r\nHi\r\n")
        assert fm == {"title": "x"}
        assert body == "Hi\n"

    def test_unclosed_block_raises(self) -> None:
        with pytest.raises(ParseError, match="not closed"):
            parse_frontmatter("---\ntitle: x\nbody\n")

    def test_invalid_yaml_raises(self) -> None:
        with pytest.raises(ParseError, match="invalid front matter"):
            parse_frontmatter("---\ntitle: [unclosed\n---\n")

    def test_impossible_timestamp_raises(self) -> None:
        with pytest.raises(ParseError, match="invalid front matter"):
            parse_frontmatter("---\ntitle: x\ndate: 2015-13-40\n---\n")

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(ParseError, match="mapping"):
            parse_frontmatter("---\n- a\n- b\n---\n")

    def test_has_frontmatter(self) -> None:
        assert has_frontmatter("---\ntitle: x\n---\n")
        assert not has_frontmatter("title: x\n")


class TestSplitTags:
    def test_list(self) -> None:
        assert split_tags(["a", " b ", None, ""]) == frozenset({"a", "b"})

    def test_space_separated_string(self) -> None:
        assert split_tags("python  perf") == frozenset({"python", "perf"})

    def test_missing(self) -> None:
        assert split_tags(None) == frozenset()

    def test_scalar_number(self) -> None:
        assert split_tags(2015) == frozenset({"2015"})

    def test_mapping_rejected(self) -> None:
        with pytest.raises(ParseError):
            split_tags({"a": 1})

    def test_nested_list_rejected(self) -> None:
        with pytest.raises(ParseError):
            split_tags([["a"]])


class TestRequireTitle:
    def test_missing(self) -> None:
        with pytest.raises(ParseError, match="title"):
            require_title({"layout": "post"})

    def test_blank(self) -> None:
        with pytest.raises(ParseError, match="empty"):
            require_title({"title": "   "})

    def test_non_string_scalar_is_stringified(self) -> None:
        assert require_title({"title": 2015}) == "2015"


class TestYamlFrontmatterBlock:
    def test_keeps_key_order(self) -> None:
        block = yaml_frontmatter_block({"layout": "post", "title": "Example"})
        assert block == "---\nlayout: post\ntitle: Example\n---\n\n"

    def test_datetimes_become_plain_dates(self) -> None:
        block = yaml_frontmatter_block(
            {"date": datetime(2015, 3, 2, 10, 30), "updated": date(2016, 1, 1)}
        )
        assert "date: 2015-03-02\n" in block
        assert "updated: 2016-01-01\n" in block

    def test_string_date_key_is_normalized(self) -> None:
        block = yaml_frontmatter_block({"date": "2015-03-02"})
        assert "date: 2015-03-02\n" in block
