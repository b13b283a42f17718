"""
Document renderer for encyclopedia articles.

Turns an Article into a presentation tree:
1. One node per known content block, in document order
2. Table of contents built from the heading blocks
3. "See also" links resolved through the article store
4. Numbered references
5. Category links

Rendering is a pure function of the article and the store: the same article
always produces an equal RenderedArticle.

Usage:
    from rendering import DocumentRenderer

    renderer = DocumentRenderer(store)
    rendered = renderer.render(store.get_by_id("solar-system"))
    for entry in rendered.toc:
        print(entry.number, entry.text, f"#{entry.anchor}")
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from catalog import (
    Article,
    ArticleStore,
    ContentBlock,
    HeadingBlock,
    ImageBlock,
    InfoboxBlock,
    ListBlock,
    ParagraphBlock,
    TableBlock,
)

from .anchors import assign_anchors, category_slug, clamp_heading_level

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_BASE_URL = "https://en.wikipedia.org/wiki/Category:"
DEFAULT_ARTICLE_BASE_PATH = "/article/"
DEFAULT_TOC_MIN_HEADINGS = 1


@dataclass(frozen=True)
class HeadingNode:
    text: str
    level: int
    anchor: str
    type: str = field(default="heading", init=False)


@dataclass(frozen=True)
class ParagraphNode:
    text: str
    type: str = field(default="paragraph", init=False)


@dataclass(frozen=True)
class ListNode:
    items: Tuple[str, ...]
    type: str = field(default="list", init=False)


@dataclass(frozen=True)
class ImageNode:
    src: str
    alt: str
    caption: Optional[str] = None
    type: str = field(default="image", init=False)


@dataclass(frozen=True)
class InfoboxNode:
    """Key/value panel titled with the article title.

    ``variant`` records whether the block was authored as an infobox or a
    table; both render the same way.
    """
    title: str
    rows: Tuple[Tuple[str, str], ...]
    variant: str = "infobox"
    type: str = field(default="infobox", init=False)


Node = Union[HeadingNode, ParagraphNode, ListNode, ImageNode, InfoboxNode]


@dataclass(frozen=True)
class TocEntry:
    number: int
    text: str
    anchor: str
    level: int

    @property
    def href(self) -> str:
        return f"#{self.anchor}"


@dataclass(frozen=True)
class RelatedLink:
    id: str
    title: str
    href: str


@dataclass(frozen=True)
class ReferenceEntry:
    marker: int
    id: str
    text: str
    url: Optional[str] = None


@dataclass(frozen=True)
class CategoryLink:
    name: str
    href: str


@dataclass(frozen=True)
class RenderedArticle:
    id: str
    title: str
    summary: str
    nodes: Tuple[Node, ...]
    toc: Tuple[TocEntry, ...]
    see_also: Tuple[RelatedLink, ...]
    references: Tuple[ReferenceEntry, ...]
    categories: Tuple[CategoryLink, ...]
    last_modified: str = ""

    @property
    def has_toc(self) -> bool:
        return bool(self.toc)

    def to_dict(self) -> Dict:
        """JSON-friendly representation of the tree."""
        data = asdict(self)
        for entry in data["toc"]:
            entry["href"] = f"#{entry['anchor']}"
        return data


class DocumentRenderer:
    """Render articles into presentation trees."""

    def __init__(
        self,
        store: ArticleStore,
        category_base_url: str = DEFAULT_CATEGORY_BASE_URL,
        article_base_path: str = DEFAULT_ARTICLE_BASE_PATH,
        toc_min_headings: int = DEFAULT_TOC_MIN_HEADINGS,
    ):
        """Initialize renderer.

        Args:
            store: Article store used to resolve related articles
            category_base_url: Prefix for category links
            article_base_path: Prefix for links to other articles
            toc_min_headings: Minimum number of headings before a TOC is built
        """
        self.store = store
        self.category_base_url = category_base_url
        self.article_base_path = article_base_path
        self.toc_min_headings = max(1, toc_min_headings)

    def render(self, article: Article) -> RenderedArticle:
        """Render one article.

        Args:
            article: Article to render

        Returns:
            RenderedArticle with body nodes and the derived sections
        """
        headings = list(article.headings())
        anchors = iter(assign_anchors(heading.text for heading in headings))

        nodes: List[Node] = []
        toc: List[TocEntry] = []

        for block in article.content:
            if isinstance(block, HeadingBlock):
                node = HeadingNode(
                    text=block.text,
                    level=clamp_heading_level(block.level),
                    anchor=next(anchors),
                )
                toc.append(TocEntry(len(toc) + 1, node.text, node.anchor, node.level))
                nodes.append(node)
                continue

            node = self._render_block(block, article)
            if node is not None:
                nodes.append(node)

        if len(toc) < self.toc_min_headings:
            toc = []

        return RenderedArticle(
            id=article.id,
            title=article.title,
            summary=article.summary,
            nodes=tuple(nodes),
            toc=tuple(toc),
            see_also=tuple(self._see_also(article)),
            references=tuple(
                ReferenceEntry(marker=index, id=ref.id, text=ref.text, url=ref.url)
                for index, ref in enumerate(article.references, start=1)
            ),
            categories=tuple(
                CategoryLink(name=name, href=f"{self.category_base_url}{category_slug(name)}")
                for name in article.categories
            ),
            last_modified=article.last_modified,
        )

    def _render_block(self, block: ContentBlock, article: Article) -> Optional[Node]:
        if isinstance(block, ParagraphBlock):
            return ParagraphNode(text=block.text)

        if isinstance(block, ListBlock):
            return ListNode(items=tuple(block.items or ()))

        if isinstance(block, ImageBlock):
            return ImageNode(src=block.src, alt=block.alt or "", caption=block.caption)

        if isinstance(block, InfoboxBlock):
            variant = "table" if isinstance(block, TableBlock) else "infobox"
            return InfoboxNode(title=article.title, rows=block.rows(), variant=variant)

        logger.debug(f"Skipping block of type '{block.type}' in {article.id}")
        return None

    def _see_also(self, article: Article) -> List[RelatedLink]:
        return [
            RelatedLink(id=related.id, title=related.title, href=f"{self.article_base_path}{related.id}")
            for related in self.store.get_related(article.id)
        ]
