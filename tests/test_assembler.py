"""Tests for turning an entry and its blocks into a complete document."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from notion_publish.markdown.assembler import PLACEHOLDER_BODY, assemble_document, derive_description
from notion_publish.markdown.frontmatter import FrontmatterError
from notion_publish.markdown.models import Block, BlockType, Category, Entry, RichTextSpan


def paragraph(*texts):
    return Block(type=BlockType.PARAGRAPH, spans=tuple(RichTextSpan(t) for t in texts))


def make_entry(**overrides):
    values = dict(
        id="page-1",
        page_id="page-1",
        title="First Post",
        created_at=datetime(2023, 1, 1, 9, 30, tzinfo=timezone.utc),
        category=Category.BLOG,
    )
    values.update(overrides)
    return Entry(**values)


class TestBlogDocuments:
    def test_first_post(self):
        doc = assemble_document(make_entry(), [paragraph("Hello world.")])
        assert doc.content == (
            "---\n"
            "id: page-1\n"
            "title: First Post\n"
            "description: Hello world.\n"
            "date: 2023-01-01\n"
            "---\n"
            "\n"
            "Hello world.  \n"
        )
        assert doc.body == "Hello world.  \n\n"

    def test_long_body_description_is_truncated_with_ellipsis(self):
        doc = assemble_document(make_entry(), [paragraph("word " * 30)])
        # 14 words and their separators fill exactly 70 characters
        assert f"description: {'word ' * 14}...\n" in doc.frontmatter_text

    def test_description_strips_links(self):
        block = Block(
            type=BlockType.PARAGRAPH,
            spans=(RichTextSpan("Read "), RichTextSpan("the docs", "https://docs"), RichTextSpan(" now")),
        )
        doc = assemble_document(make_entry(), [block])
        assert "description: Read the docs now\n" in doc.frontmatter_text
        assert "Read [the docs](https://docs) now  " in doc.content

    def test_empty_body_leaves_description_unset(self):
        log = Mock()
        doc = assemble_document(make_entry(), [], log=log)
        assert "description" not in doc.frontmatter_text
        log.info.assert_called_once()

    def test_explicit_description_wins(self):
        entry = make_entry(description="See [here](https://x) first")
        doc = assemble_document(entry, [paragraph("Body text")])
        assert "description: See here first\n" in doc.frontmatter_text

    def test_tags_and_draft(self):
        entry = make_entry(tags=("a", "b"), draft=True)
        doc = assemble_document(entry, [paragraph("x")])
        assert 'tags: ["a", "b"]\ndraft: true\n' in doc.frontmatter_text

    def test_weather_is_not_written_for_blog(self):
        entry = make_entry(weather="sunny")
        doc = assemble_document(entry, [paragraph("x")])
        assert "weather" not in doc.frontmatter_text
        assert doc.frontmatter_text.endswith("date: 2023-01-01\n")

    def test_published_at(self):
        entry = make_entry(published_at=datetime(2023, 2, 3))
        doc = assemble_document(entry, [paragraph("x")])
        assert "publishedAt: 2023-02-03\ndate: 2023-01-01\n" in doc.frontmatter_text


class TestDiaryDocuments:
    def test_diary_without_description_has_none(self):
        entry = make_entry(category=Category.DIARY)
        doc = assemble_document(entry, [paragraph("Today was long.")])
        assert "description" not in doc.frontmatter_text

    def test_diary_description_and_weather(self):
        entry = make_entry(category=Category.DIARY, description="[晴れ](https://x)の日", weather="☀️ sunny")
        doc = assemble_document(entry, [paragraph("本文")])
        assert doc.frontmatter_text.endswith("description: 晴れの日\ndate: 2023-01-01\nweather: ☀️ sunny\n")


def test_placeholder_body_when_blocks_missing():
    doc = assemble_document(make_entry(category=Category.DIARY), None)
    assert doc.body == PLACEHOLDER_BODY
    assert doc.content.endswith("---\n\n" + PLACEHOLDER_BODY)


def test_empty_lines_are_collapsed_after_frontmatter_is_added():
    blocks = [paragraph("one"), paragraph("two"), Block(type=BlockType.DIVIDER), paragraph("three")]
    doc = assemble_document(make_entry(category=Category.DIARY), blocks)
    body = doc.content.split("---\n\n", 1)[1]
    assert body == "one  \ntwo  \n---  \n\nthree  \n"


def test_missing_title_raises():
    with pytest.raises(FrontmatterError):
        assemble_document(make_entry(title=""), [paragraph("x")])


def test_image_resolver_is_used():
    block = Block(type=BlockType.IMAGE, image_url="https://x/a.png")
    doc = assemble_document(make_entry(category=Category.DIARY), [block], image_resolver=lambda url: "/images/a.png")
    assert "![Image](/images/a.png)  " in doc.content


class TestDeriveDescription:
    def test_exactly_limit_has_no_suffix(self):
        assert derive_description("a" * 70) == "a" * 70

    def test_over_limit_gets_suffix(self):
        assert derive_description("a" * 71) == "a" * 70 + "..."

    def test_japanese(self):
        text = "日本語" * 30
        result = derive_description(text)
        assert result == text[:70] + "..."
