from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from page_blocks.config import ParserConfig
from page_blocks.models.block import BlockType
from page_blocks.parser import classify


def _element(markup: str):
    return BeautifulSoup(markup, "lxml").body.find(True)


@pytest.mark.parametrize(
    ("markup", "expected"),
    [
        ("<h1>Title</h1>", BlockType.HEADLINE),
        ("<h2>Sub</h2>", BlockType.SUBHEADLINE),
        ("<ul><li>a</li></ul>", BlockType.FEATURE_LIST),
        ("<ol><li>a</li></ol>", BlockType.FEATURE_LIST),
        ("<button>Go</button>", BlockType.CALL_TO_ACTION),
        ("<blockquote>Nice</blockquote>", BlockType.TESTIMONIAL),
        ("<p>Text</p>", BlockType.PARAGRAPH),
        ('<a href="#">Link</a>', BlockType.LINK),
        ("<footer>Bye</footer>", BlockType.FOOTER),
        ("<svg></svg>", BlockType.ILLUSTRATION),
    ],
)
def test_classify_falls_back_to_tag_name(markup: str, expected: BlockType) -> None:
    assert classify(_element(markup)) is expected


def test_marker_attribute_beats_class_and_tag() -> None:
    element = _element('<p data-element="headline" class="testimonial">Big</p>')
    assert classify(element) is BlockType.HEADLINE


def test_secondary_marker_attribute_is_accepted() -> None:
    assert classify(_element('<div data-type="footer">x</div>')) is BlockType.FOOTER


def test_marker_aliases_resolve_to_canonical_types() -> None:
    assert classify(_element('<div data-element="cta">Go</div>')) is BlockType.CALL_TO_ACTION
    assert classify(_element('<div data-element="Feature">x</div>')) is BlockType.FEATURE_LIST


def test_unknown_marker_falls_through_to_class_hint() -> None:
    element = _element('<div data-element="carousel" class="site-footer">x</div>')
    assert classify(element) is BlockType.FOOTER


def test_class_hint_prefers_longest_vocabulary_name() -> None:
    assert classify(_element('<div class="hero-subheadline">x</div>')) is BlockType.SUBHEADLINE
    assert classify(_element('<div class="main-headline">x</div>')) is BlockType.HEADLINE
    assert classify(_element('<section class="feature-list-grid">x</section>')) is BlockType.FEATURE_LIST


def test_class_hint_beats_tag_name() -> None:
    assert classify(_element('<p class="cta-primary">Go</p>')) is BlockType.CALL_TO_ACTION


def test_unrecognised_element_is_not_a_block() -> None:
    assert classify(_element("<div>decoration</div>")) is None
    assert classify(_element('<section class="hero">x</section>')) is None


def test_custom_marker_attributes() -> None:
    config = ParserConfig(marker_attributes=("data-block",))
    element = _element('<div data-block="link" data-element="headline">x</div>')
    assert classify(element, config=config) is BlockType.LINK
