# tests/test_html_writer.py
"""Tests for HTML output of rendered articles."""

from catalog import ArticleStore, parse_article
from conftest import make_record
from rendering import (
    DocumentRenderer,
    render_article_html,
    render_home,
    render_not_found,
    render_page,
    render_search_results,
)


def _html(store, article_id):
    return render_article_html(DocumentRenderer(store).render(store.get_by_id(article_id)))


def test_test_article_html(store):
    html = _html(store, "x")

    assert '<h2 id="intro">Intro</h2>' in html
    assert '<a href="#intro">Intro</a>' in html
    assert "<p>Hello world</p>" in html
    assert 'href="https://en.wikipedia.org/wiki/Category:Demo"' in html
    assert "See also" not in html
    assert "References" not in html


def test_sections_in_reading_order(store):
    html = _html(store, "solar-system")

    positions = [
        html.index('class="toc"'),
        html.index('<table class="infobox infobox-infobox">'),
        html.index('<h2 id="planets">'),
        html.index('id="see-also"'),
        html.index('id="references"'),
        html.index('class="catlinks"'),
    ]
    assert positions == sorted(positions)
    assert '<a href="/article/quantum">Quantum Physics</a>' in html
    assert 'value="1"' in html and 'value="2"' in html
    assert '<a class="external" href="https://solarsystem.nasa.gov/">[Link]</a>' in html
    assert "<figcaption>To scale</figcaption>" in html


def test_text_is_escaped():
    article = parse_article(make_record(
        "a",
        title="<script>alert(1)</script>",
        content=[
            {"type": "paragraph", "text": "Fish & <chips>"},
            {"type": "image", "src": "x.png\" onerror=\"boom", "alt": "q\"uote"},
        ],
    ))
    html = render_article_html(DocumentRenderer(ArticleStore([article])).render(article))

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "<p>Fish &amp; &lt;chips&gt;</p>" in html
    assert 'onerror="boom' not in html


def test_search_results_fragment(store):
    assert "Enter a search term" in render_search_results("  ", [])
    assert "no results matching" in render_search_results("zzz", [])

    html = render_search_results("hello", store.search("hello"))
    assert "1 result for <b>hello</b>" in html
    assert '<a href="/article/x">Test</a>' in html


def test_not_found_fragment_has_fallbacks():
    html = render_not_found("<missing>", 21)
    assert "Article Not Found" in html
    assert "&lt;missing&gt;" in html
    assert "21 articles" in html
    assert '<a href="/">return to the main page</a>' in html


def test_home_and_page(store):
    body = render_home("Wikipedia", store.get_all(), featured=2)
    assert "<strong>3</strong> articles" in body
    assert '/article/quantum"' not in body

    page = render_page("<title>T</title>", body, store.get_all(), query='a"b')
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>T</title>" in page
    assert '<a href="/article/quantum">Quantum Physics</a>' in page
    assert 'value="a&quot;b"' in page


def test_home_shortens_long_featured_summaries():
    long_summary = "a" * 100 + "TAIL"
    articles = [
        parse_article(make_record("long", summary=long_summary)),
        parse_article(make_record("short", summary="Brief.")),
    ]
    body = render_home("Wikipedia", articles)
    assert f'<div class="summary">{"a" * 100}...</div>' in body
    assert "TAIL" not in body
    assert '<div class="summary">Brief.</div>' in body


def test_search_results_keep_full_summary():
    article = parse_article(make_record("long", summary="b" * 150))
    assert "b" * 150 in render_search_results("b", [article])
