# tests/test_page_head.py
"""Tests for applying metadata to a page head."""

from catalog import parse_article
from conftest import make_record
from seo import PageHead, SEOData, generate_article_seo, generate_home_seo


def _seo():
    article = parse_article(make_record(
        "solar-system",
        title="Solar System",
        content=[
            {"type": "paragraph", "text": "The Sun and its planets."},
            {"type": "image", "src": "https://cdn.example.org/sun.png"},
        ],
    ))
    return generate_article_seo(article, "https://example.org")


def test_apply_sets_tags():
    head = PageHead().apply(_seo())

    assert head.title == "Solar System - Wikipedia"
    assert head.get_meta("description") == "The Sun and its planets."
    assert head.get_meta("og:type", "property") == "article"
    assert head.get_meta("og:url", "property") == "https://example.org/article/solar-system"
    assert head.get_meta("og:image", "property") == "https://cdn.example.org/sun.png"
    assert head.get_meta("twitter:card") == "summary_large_image"
    assert head.canonical_url == "https://example.org/article/solar-system"
    assert [item["@type"] for item in head.structured_data] == ["Article", "BreadcrumbList"]


def test_apply_is_idempotent():
    seo = _seo()
    once = PageHead().apply(seo)
    twice = PageHead().apply(seo).apply(seo)

    assert once.to_html() == twice.to_html()
    assert len(twice.structured_data) == 2
    assert twice.to_html().count('<link rel="canonical"') == 1
    assert twice.to_html().count('name="description"') == 1


def test_apply_replaces_previous_page():
    head = PageHead().apply(_seo()).apply(generate_home_seo("https://example.org"))

    assert head.title == "Wikipedia, the free encyclopedia"
    assert head.get_meta("og:image", "property") is None
    assert [item["@type"] for item in head.structured_data] == ["WebSite"]
    assert head.to_html() == PageHead().apply(generate_home_seo("https://example.org")).to_html()


def test_no_structured_data_clears_blocks():
    seo = SEOData(
        title="T", description="D", keywords=["k"], canonical_url="/t", og_type="website",
    )
    head = PageHead().apply(_seo()).apply(seo)
    assert head.structured_data == []
    assert "application/ld+json" not in head.to_html()


def test_to_html_escapes_values():
    seo = SEOData(
        title="A <b> & \"c\"",
        description="</script><script>x</script>",
        keywords=[],
        canonical_url="/a",
        og_type="article",
        structured_data={"headline": "</script>"},
    )
    html = PageHead().apply(seo).to_html()

    assert "<title>A &lt;b&gt; &amp; &quot;c&quot;</title>" in html
    assert 'content="&lt;/script&gt;&lt;script&gt;x&lt;/script&gt;"' in html
    assert '"headline": "<\\/script>"' in html
