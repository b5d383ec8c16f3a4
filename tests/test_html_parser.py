from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from page_blocks.config import ParserConfig
from page_blocks.errors import ContentExtractionGap, StructuralParseWarning
from page_blocks.models.block import (
    BlockType,
    FeatureListContent,
    StyleRecord,
    TestimonialContent as QuoteContent,
)
from page_blocks.parser import html_to_blocks, load_html_path, parse_html, parse_theme


def test_parse_minimal_page_splits_blocks_and_theme() -> None:
    source = (
        "<html><head><title>T</title></head><body><main>"
        "<h1>Hello</h1><p>World</p>"
        "</main></body></html>"
    )

    result = parse_html(source)

    assert [(block.id, block.type, block.content) for block in result.blocks] == [
        ("block-1", BlockType.HEADLINE, "Hello"),
        ("block-2", BlockType.PARAGRAPH, "World"),
    ]
    assert all(block.styles is None for block in result.blocks)
    assert "<main></main>" in result.theme.html
    assert "<title>T</title>" in result.theme.html
    assert result.warnings == []


def test_parse_sample_page(sample_page: str) -> None:
    result = parse_html(sample_page)

    assert [block.type for block in result.blocks] == [
        BlockType.HEADLINE,
        BlockType.SUBHEADLINE,
        BlockType.FEATURE_LIST,
        BlockType.CALL_TO_ACTION,
        BlockType.TESTIMONIAL,
        BlockType.PARAGRAPH,
        BlockType.FOOTER,
    ]
    assert [block.id for block in result.blocks] == [f"block-{n}" for n in range(1, 8)]

    theme = BeautifulSoup(result.theme.html, "lxml")
    assert theme.body.main.contents == []
    assert theme.body.nav is not None
    assert theme.body.script is not None
    assert theme.head.style is not None


def test_feature_list_content() -> None:
    source = '<body><main><ul data-element="feature-list"><li>A</li><li> B </li></ul></main></body>'

    (block,) = html_to_blocks(source)

    assert block.type is BlockType.FEATURE_LIST
    assert block.content == FeatureListContent(features=("A", "B"))
    assert block.content_text() == "A\nB"


def test_testimonial_content_keeps_full_text(sample_page: str) -> None:
    block = html_to_blocks(sample_page)[4]

    assert block.content == QuoteContent(
        text="Loved it. Jane CTO Acme",
        author="Jane",
        role="CTO",
        company="Acme",
    )


def test_missing_testimonial_fields_are_reported_as_gaps() -> None:
    source = (
        "<body><main><blockquote>Great. "
        '<span class="author">Sam</span></blockquote></main></body>'
    )

    result = parse_html(source)

    assert result.blocks[0].content.author == "Sam"
    assert result.blocks[0].content.role == ""
    assert result.gaps == [
        ContentExtractionGap(block_id="block-1", field="role"),
        ContentExtractionGap(block_id="block-1", field="company"),
    ]


def test_inline_styles_are_whitelisted() -> None:
    source = (
        "<body><main>"
        '<h1 style="color: red; font-size: 32px; margin: 0">A</h1>'
        '<p style="background-color: blue">B</p>'
        '<p style="padding: 4px">C</p>'
        "</main></body>"
    )

    headline, tinted, plain = html_to_blocks(source)

    assert headline.styles == StyleRecord(color="red", font_size="32px")
    assert tinted.styles == StyleRecord(background="blue")
    assert plain.styles is None


def test_unrecognised_children_are_skipped() -> None:
    source = "<body><main><div>spacer</div><h1>Title</h1><hr/></main></body>"

    blocks = html_to_blocks(source)

    assert [(block.id, block.type) for block in blocks] == [("block-1", BlockType.HEADLINE)]


def test_only_direct_children_are_blocks() -> None:
    source = "<body><main><section><h1>Nested</h1></section><p>Top</p></main></body>"

    blocks = html_to_blocks(source)

    assert [block.type for block in blocks] == [BlockType.PARAGRAPH]


def test_missing_wrapper_returns_input_as_theme() -> None:
    source = "<html><body><div><h1>No wrapper</h1></div></body></html>"

    with pytest.warns(StructuralParseWarning):
        result = parse_html(source)

    assert result.blocks == []
    assert result.theme.html == source
    assert len(result.warnings) == 1


def test_nested_wrapper_is_not_used() -> None:
    source = "<html><body><div><main><h1>Deep</h1></main></div></body></html>"

    with pytest.warns(StructuralParseWarning):
        result = parse_html(source)

    assert result.blocks == []


def test_empty_wrapper_warns() -> None:
    source = "<html><body><main><div></div></main></body></html>"

    with pytest.warns(StructuralParseWarning):
        result = parse_html(source)

    assert result.blocks == []
    assert "<main></main>" in result.theme.html


def test_parse_does_not_mutate_input(sample_page: str) -> None:
    original = str(sample_page)
    parse_html(sample_page)
    assert sample_page == original


def test_custom_wrapper_tag() -> None:
    config = ParserConfig(wrapper_tag="ARTICLE")
    source = "<body><article><h1>Hi</h1></article></body>"

    result = parse_html(source, config=config)

    assert [block.content for block in result.blocks] == ["Hi"]
    assert "<article></article>" in result.theme.html


def test_parse_theme_and_load_html_path(tmp_path, sample_page: str) -> None:
    path = tmp_path / "page.html"
    path.write_text(sample_page, encoding="utf-8")

    loaded = load_html_path(path)

    assert len(loaded.blocks) == 7
    assert parse_theme(sample_page) == loaded.theme


def test_marked_headline_scenario() -> None:
    result = parse_html('<body><main><h1 data-element="headline">Welcome</h1></main></body>')

    assert [(block.id, block.type, block.content) for block in result.blocks] == [
        ("block-1", BlockType.HEADLINE, "Welcome")
    ]
    assert BeautifulSoup(result.theme.html, "lxml").body.main.contents == []


def test_legacy_feature_marker_scenario() -> None:
    (block,) = html_to_blocks('<body><main><ul data-element="feature"><li>Fast</li><li>Secure</li></ul></main></body>')

    assert block.type is BlockType.FEATURE_LIST
    assert list(block.content.features) == ["Fast", "Secure"]


def test_inline_color_values_are_kept_as_written() -> None:
    source = '<body><main><h1 style="color: #FF0000; background: #FFFFFF">A</h1></main></body>'

    (block,) = html_to_blocks(source)

    assert block.styles == StyleRecord(color="#FF0000", background="#FFFFFF")
