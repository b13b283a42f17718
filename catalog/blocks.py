"""
Content block model for encyclopedia articles.

An article body is an ordered sequence of typed blocks. The JSON tag
``type`` selects the variant:

    paragraph   text
    heading     text, level (1-6, default 2)
    list        items
    image       src, alt, caption
    infobox     data (key -> value)
    table       data (rendered like an infobox)

Blocks with any other tag are kept as UnknownBlock so that the catalog can
still load; the renderer skips them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple, Union


class BlockType(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST = "list"
    IMAGE = "image"
    INFOBOX = "infobox"
    TABLE = "table"


@dataclass(frozen=True)
class ParagraphBlock:
    text: str

    type = BlockType.PARAGRAPH.value

    def to_dict(self) -> Dict:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class HeadingBlock:
    text: str
    level: Optional[int] = None

    type = BlockType.HEADING.value

    def to_dict(self) -> Dict:
        data = {"type": self.type, "text": self.text}
        if self.level is not None:
            data["level"] = self.level
        return data


@dataclass(frozen=True)
class ListBlock:
    items: Tuple[str, ...] = ()

    type = BlockType.LIST.value

    def to_dict(self) -> Dict:
        return {"type": self.type, "items": list(self.items)}


@dataclass(frozen=True)
class ImageBlock:
    src: str
    alt: Optional[str] = None
    caption: Optional[str] = None

    type = BlockType.IMAGE.value

    def to_dict(self) -> Dict:
        data = {"type": self.type, "src": self.src}
        if self.alt is not None:
            data["alt"] = self.alt
        if self.caption is not None:
            data["caption"] = self.caption
        return data


@dataclass(frozen=True)
class InfoboxBlock:
    """Key/value side panel. ``data`` keeps the authored key order."""
    data: Optional[Tuple[Tuple[str, str], ...]] = None

    type = BlockType.INFOBOX.value

    def rows(self) -> Tuple[Tuple[str, str], ...]:
        return self.data or ()

    def to_dict(self) -> Dict:
        data: Dict = {"type": self.type}
        if self.data is not None:
            data["data"] = dict(self.data)
        return data


@dataclass(frozen=True)
class TableBlock(InfoboxBlock):
    type = BlockType.TABLE.value


@dataclass(frozen=True)
class UnknownBlock:
    """Block whose tag is not one of the known types."""
    type: str
    raw: Tuple[Tuple[str, object], ...] = ()

    def to_dict(self) -> Dict:
        return dict(self.raw)


ContentBlock = Union[
    ParagraphBlock,
    HeadingBlock,
    ListBlock,
    ImageBlock,
    InfoboxBlock,
    TableBlock,
    UnknownBlock,
]


@dataclass(frozen=True)
class Reference:
    id: str
    text: str
    url: Optional[str] = None

    def to_dict(self) -> Dict:
        data = {"id": self.id, "text": self.text}
        if self.url is not None:
            data["url"] = self.url
        return data


@dataclass(frozen=True)
class Article:
    """A single catalog entry.

    Sequence fields are tuples; records are never modified once the catalog
    has been loaded.
    """
    id: str
    title: str
    summary: str
    content: Tuple[ContentBlock, ...] = ()
    categories: Tuple[str, ...] = ()
    references: Tuple[Reference, ...] = ()
    related_articles: Tuple[str, ...] = ()
    last_modified: str = ""
    source: Optional[str] = field(default=None, compare=False, repr=False)

    def paragraphs(self) -> Iterator[ParagraphBlock]:
        for block in self.content:
            if isinstance(block, ParagraphBlock):
                yield block

    def headings(self) -> Iterator[HeadingBlock]:
        for block in self.content:
            if isinstance(block, HeadingBlock):
                yield block

    def images(self) -> Iterator[ImageBlock]:
        for block in self.content:
            if isinstance(block, ImageBlock):
                yield block

    def to_dict(self) -> Dict:
        """Return the JSON record layout used by the catalog files."""
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "content": [block.to_dict() for block in self.content],
            "categories": list(self.categories),
            "references": [ref.to_dict() for ref in self.references],
            "relatedArticles": list(self.related_articles),
            "lastModified": self.last_modified,
        }
