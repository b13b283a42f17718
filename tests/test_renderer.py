# tests/test_renderer.py
"""Tests for the document renderer."""

import json

import pytest

from catalog import ArticleStore, UnknownBlock, parse_article
from conftest import make_record
from rendering import (
    CategoryLink,
    DocumentRenderer,
    HeadingNode,
    ImageNode,
    InfoboxNode,
    ListNode,
    ParagraphNode,
    RelatedLink,
    ReferenceEntry,
    TocEntry,
)


@pytest.fixture
def renderer(store):
    return DocumentRenderer(store)


# =============================================================================
# End-to-end
# =============================================================================


def test_render_test_article(store, renderer):
    rendered = renderer.render(store.get_by_id("x"))

    assert rendered.nodes == (
        HeadingNode(text="Intro", level=2, anchor="intro"),
        ParagraphNode(text="Hello world"),
    )
    assert rendered.toc == (TocEntry(number=1, text="Intro", anchor="intro", level=2),)
    assert rendered.toc[0].href == "#intro"
    assert rendered.references == ()
    assert rendered.categories == (
        CategoryLink(name="Demo", href="https://en.wikipedia.org/wiki/Category:Demo"),
    )
    assert rendered.see_also == ()


def test_render_full_article(store, renderer):
    rendered = renderer.render(store.get_by_id("solar-system"))

    assert [node.type for node in rendered.nodes] == [
        "infobox", "paragraph", "heading", "list", "heading", "paragraph", "image",
    ]
    infobox = rendered.nodes[0]
    assert infobox == InfoboxNode(
        title="Solar System",
        rows=(("Age", "4.568 billion years"), ("Planets", "8")),
        variant="infobox",
    )
    assert rendered.nodes[3] == ListNode(items=("Mercury", "Venus", "Earth"))
    assert rendered.nodes[6] == ImageNode(src="/static/planets.png", alt="Planets", caption="To scale")

    assert [(e.text, e.anchor, e.level) for e in rendered.toc] == [
        ("Planets", "planets", 2),
        ("Inner  planets", "inner-planets", 3),
    ]
    assert rendered.see_also == (
        RelatedLink(id="x", title="Test", href="/article/x"),
        RelatedLink(id="quantum", title="Quantum Physics", href="/article/quantum"),
    )
    assert rendered.references == (
        ReferenceEntry(marker=1, id="nasa", text="NASA.", url="https://solarsystem.nasa.gov/"),
        ReferenceEntry(marker=2, id="book", text="A book about planets.", url=None),
    )
    assert [c.href for c in rendered.categories] == [
        "https://en.wikipedia.org/wiki/Category:Solar_System",
        "https://en.wikipedia.org/wiki/Category:Astronomy",
    ]


def test_heading_ids_match_toc_targets(store, renderer):
    for article in store:
        rendered = renderer.render(article)
        heading_anchors = [n.anchor for n in rendered.nodes if isinstance(n, HeadingNode)]
        assert heading_anchors == [entry.anchor for entry in rendered.toc]


def test_heading_level_is_clamped(store, renderer):
    heading = renderer.render(store.get_by_id("quantum")).nodes[0]
    assert heading == HeadingNode(text="History", level=6, anchor="history")


def test_table_renders_as_infobox_alias(store, renderer):
    table = renderer.render(store.get_by_id("quantum")).nodes[-1]
    assert isinstance(table, InfoboxNode)
    assert table.variant == "table"
    assert table.title == "Quantum Physics"
    assert table.rows == (("Planck constant", "6.626e-34"),)


# =============================================================================
# Degradation and policies
# =============================================================================


def _single(record):
    article = parse_article(record)
    return DocumentRenderer(ArticleStore([article])).render(article)


def test_missing_optional_fields_degrade():
    rendered = _single(make_record(
        "a",
        content=[
            {"type": "list"},
            {"type": "infobox"},
            {"type": "image", "src": "a.png"},
            {"type": "heading", "text": "No level"},
        ],
    ))
    assert rendered.nodes[0] == ListNode(items=())
    assert rendered.nodes[1].rows == ()
    assert rendered.nodes[2] == ImageNode(src="a.png", alt="", caption=None)
    assert rendered.nodes[3].level == 2


def test_unknown_blocks_render_nothing():
    rendered = _single(make_record(
        "a",
        content=[{"type": "video", "src": "v.mp4"}, {"type": "paragraph", "text": "After"}],
    ))
    assert isinstance(parse_article(make_record("a", content=[{"type": "video"}])).content[0], UnknownBlock)
    assert rendered.nodes == (ParagraphNode(text="After"),)


def test_no_headings_means_no_toc():
    rendered = _single(make_record("a", content=[{"type": "paragraph", "text": "Only text"}]))
    assert rendered.toc == ()
    assert not rendered.has_toc


def test_toc_threshold():
    article = parse_article(make_record("a", content=[{"type": "heading", "text": "One"}]))
    store = ArticleStore([article])
    assert DocumentRenderer(store, toc_min_headings=2).render(article).toc == ()
    assert len(DocumentRenderer(store, toc_min_headings=1).render(article).toc) == 1


def test_duplicate_heading_anchors_are_unique():
    rendered = _single(make_record(
        "a",
        content=[{"type": "heading", "text": "Notes"}, {"type": "heading", "text": "Notes"}],
    ))
    assert [entry.anchor for entry in rendered.toc] == ["notes", "notes-1"]


def test_blank_heading_still_has_toc_target():
    rendered = _single(make_record(
        "a",
        content=[{"type": "heading", "text": "Overview"}, {"type": "heading", "text": "   "}],
    ))
    assert [entry.anchor for entry in rendered.toc] == ["overview", "section-2"]
    assert rendered.nodes[1].anchor == "section-2"
    assert all(entry.href != "#" for entry in rendered.toc)


def test_custom_link_prefixes(store):
    renderer = DocumentRenderer(store, category_base_url="/category/", article_base_path="/wiki/")
    rendered = renderer.render(store.get_by_id("solar-system"))
    assert rendered.categories[0].href == "/category/Solar_System"
    assert rendered.see_also[0].href == "/wiki/x"


def test_categories_keep_duplicates_and_order():
    rendered = _single(make_record("a", categories=["B", "A", "B"]))
    assert [c.name for c in rendered.categories] == ["B", "A", "B"]


# =============================================================================
# Purity
# =============================================================================


def test_render_is_idempotent(store, renderer):
    for article in store:
        assert renderer.render(article) == renderer.render(article)


def test_render_does_not_modify_article(store, renderer):
    article = store.get_by_id("solar-system")
    before = article.to_dict()
    renderer.render(article)
    assert article.to_dict() == before


def test_to_dict_is_json_serializable(store, renderer):
    data = renderer.render(store.get_by_id("solar-system")).to_dict()
    encoded = json.loads(json.dumps(data))
    assert encoded["toc"][0]["href"] == "#planets"
    assert encoded["nodes"][0]["type"] == "infobox"
    assert encoded["see_also"][1]["id"] == "quantum"
