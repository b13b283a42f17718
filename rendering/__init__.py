"""
Rendering package for encyclopedia articles.

Components:
- anchors: heading anchors, category slugs, heading level clamping
- document_renderer: Article -> presentation tree (body, TOC, see also, references, categories)
- html_writer: presentation tree -> HTML
"""

from .anchors import assign_anchors, category_slug, clamp_heading_level, heading_anchor
from .document_renderer import (
    CategoryLink,
    DocumentRenderer,
    HeadingNode,
    ImageNode,
    InfoboxNode,
    ListNode,
    ParagraphNode,
    ReferenceEntry,
    RelatedLink,
    RenderedArticle,
    TocEntry,
)
from .html_writer import (
    render_article_html,
    render_home,
    render_not_found,
    render_page,
    render_search_results,
)

__all__ = [
    "assign_anchors",
    "category_slug",
    "clamp_heading_level",
    "heading_anchor",
    "CategoryLink",
    "DocumentRenderer",
    "HeadingNode",
    "ImageNode",
    "InfoboxNode",
    "ListNode",
    "ParagraphNode",
    "ReferenceEntry",
    "RelatedLink",
    "RenderedArticle",
    "TocEntry",
    "render_article_html",
    "render_home",
    "render_not_found",
    "render_page",
    "render_search_results",
]
