"""
HTML output for rendered articles.

Converts presentation trees into HTML fragments and wraps fragments in the
site chrome (header with search box, sidebar with the article list). Every
piece of catalog text is escaped before it is written.
"""

from __future__ import annotations

import html
from typing import Iterable, List, Optional, Sequence

from catalog import Article

from .document_renderer import (
    HeadingNode,
    ImageNode,
    InfoboxNode,
    ListNode,
    Node,
    ParagraphNode,
    RenderedArticle,
)

FEATURED_SUMMARY_LENGTH = 100


def _esc(text: str) -> str:
    return html.escape(text or "", quote=True)


def render_node(node: Node) -> str:
    """Convert a single body node to HTML."""
    if isinstance(node, HeadingNode):
        return f'<h{node.level} id="{_esc(node.anchor)}">{_esc(node.text)}</h{node.level}>'

    if isinstance(node, ParagraphNode):
        return f"<p>{_esc(node.text)}</p>"

    if isinstance(node, ListNode):
        items = "".join(f"<li>{_esc(item)}</li>" for item in node.items)
        return f"<ul>{items}</ul>"

    if isinstance(node, ImageNode):
        img = f'<img src="{_esc(node.src)}" alt="{_esc(node.alt)}">'
        if node.caption:
            return f'<figure class="thumb">{img}<figcaption>{_esc(node.caption)}</figcaption></figure>'
        return f'<figure class="thumb">{img}</figure>'

    if isinstance(node, InfoboxNode):
        rows = "".join(
            f"<tr><th>{_esc(key)}</th><td>{_esc(value)}</td></tr>" for key, value in node.rows
        )
        return (
            f'<table class="infobox infobox-{_esc(node.variant)}">'
            f'<caption>{_esc(node.title)}</caption>{rows}</table>'
        )

    return ""


def render_article_html(rendered: RenderedArticle) -> str:
    """Convert a rendered article into an HTML fragment.

    Sections appear in reading order: title, contents box, body, see also,
    references, categories. Empty sections are left out.
    """
    html_lines = [
        '<article class="wiki-article">',
        '<div class="breadcrumb"><a href="/">Main Page</a></div>',
        f'<h1 class="article-title">{_esc(rendered.title)}</h1>',
    ]

    if rendered.toc:
        html_lines.append('<nav class="toc"><h2>Contents</h2><ol>')
        for entry in rendered.toc:
            html_lines.append(
                f'<li class="toclevel-{entry.level}">'
                f'<a href="{_esc(entry.href)}">{_esc(entry.text)}</a></li>'
            )
        html_lines.append("</ol></nav>")

    html_lines.extend(render_node(node) for node in rendered.nodes)

    if rendered.see_also:
        html_lines.append('<h2 id="see-also">See also</h2><ul class="see-also">')
        for link in rendered.see_also:
            html_lines.append(f'<li><a href="{_esc(link.href)}">{_esc(link.title)}</a></li>')
        html_lines.append("</ul>")

    if rendered.references:
        html_lines.append('<h2 id="references">References</h2><ol class="references">')
        for ref in rendered.references:
            link = f' <a class="external" href="{_esc(ref.url)}">[Link]</a>' if ref.url else ""
            html_lines.append(
                f'<li id="cite-note-{_esc(ref.id)}" value="{ref.marker}">{_esc(ref.text)}{link}</li>'
            )
        html_lines.append("</ol>")

    if rendered.categories:
        links = " | ".join(
            f'<a href="{_esc(category.href)}">{_esc(category.name)}</a>'
            for category in rendered.categories
        )
        html_lines.append(f'<div class="catlinks"><strong>Categories:</strong> {links}</div>')

    html_lines.append("</article>")
    return "\n".join(html_lines)


def _shorten(text: str, limit: Optional[int]) -> str:
    if limit is None or len(text) <= limit:
        return text
    return text[:limit] + "..."


def render_article_list(articles: Iterable[Article], summary_length: Optional[int] = None) -> str:
    items = "".join(
        f'<li><a href="/article/{_esc(article.id)}">{_esc(article.title)}</a>'
        f'<div class="summary">{_esc(_shorten(article.summary, summary_length))}</div></li>'
        for article in articles
    )
    return f'<ul class="article-list">{items}</ul>'


def render_search_results(query: str, results: Sequence[Article]) -> str:
    """HTML fragment for a search results page."""
    html_lines = ['<div class="search-results">', "<h1>Search results</h1>"]
    if not query.strip():
        html_lines.append("<p>Enter a search term to find articles.</p>")
    elif not results:
        html_lines.append(f"<p>There were no results matching the query <b>{_esc(query)}</b>.</p>")
    else:
        noun = "result" if len(results) == 1 else "results"
        html_lines.append(f"<p>{len(results)} {noun} for <b>{_esc(query)}</b></p>")
        html_lines.append(render_article_list(results))
    html_lines.append("</div>")
    return "\n".join(html_lines)


def render_not_found(article_id: str, total_articles: int) -> str:
    """HTML fragment shown when no article has the requested id."""
    return "\n".join([
        '<div class="not-found">',
        '<div class="breadcrumb"><a href="/">Main Page</a></div>',
        "<h1>Article Not Found</h1>",
        f"<p>The article <b>{_esc(article_id)}</b> could not be found in our collection "
        f"of {total_articles} articles.</p>",
        '<p>You can browse available articles using the sidebar navigation or '
        '<a href="/">return to the main page</a>.</p>',
        '<p class="hint"><strong>Search suggestion:</strong> Try using the search box above '
        "to find articles by title or content.</p>",
        "</div>",
    ])


def render_home(site_name: str, articles: Sequence[Article], featured: int = 5) -> str:
    """HTML fragment for the main page."""
    return "\n".join([
        '<div class="main-page">',
        f"<h1>Welcome to {_esc(site_name)}</h1>",
        f"<p>the free encyclopedia. <strong>{len(articles)}</strong> articles in English.</p>",
        "<h2>Featured articles</h2>",
        render_article_list(articles[:featured], summary_length=FEATURED_SUMMARY_LENGTH),
        "</div>",
    ])


def render_page(head_html: str, body_html: str, articles: Sequence[Article], query: str = "") -> str:
    """Wrap a fragment in the full page layout.

    Args:
        head_html: Contents of <head> (see seo.PageHead.to_html)
        body_html: Main content fragment
        articles: Catalog listed in the sidebar
        query: Current search text, echoed in the search box

    Returns:
        Complete HTML document
    """
    sidebar: List[str] = [
        f'<li><a href="/article/{_esc(article.id)}">{_esc(article.title)}</a></li>'
        for article in articles
    ]
    return "\n".join([
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        head_html,
        '<link rel="stylesheet" href="/static/wiki.css">',
        "</head>",
        "<body>",
        '<header class="site-header">',
        '<a class="logo" href="/">Main Page</a>',
        '<form class="search" action="/search" method="get">',
        f'<input type="search" name="q" value="{_esc(query)}" placeholder="Search">',
        '<button type="submit">Search</button>',
        "</form>",
        "</header>",
        '<div class="layout">',
        '<aside class="sidebar"><h3>Articles</h3><ul>',
        "".join(sidebar),
        "</ul></aside>",
        f'<main class="content">{body_html}</main>',
        "</div>",
        "</body>",
        "</html>",
    ])
