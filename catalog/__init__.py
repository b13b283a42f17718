"""
Catalog module for the encyclopedia.

This module provides functionality for:
- The content block model (paragraph, heading, list, image, infobox, table)
- Loading and validating article records from JSON
- Looking up, searching and linking articles in memory

File structure:
    data/articles/
        article1.json       - One article record per file
        article2.json
        ...

Usage:
    from catalog import ArticleStore

    store = ArticleStore.from_path(Path("data/articles"))
    article = store.get_by_id("solar-system")
    related = store.get_related("solar-system")
    hits = store.search("planet")
"""

from .blocks import (
    Article,
    BlockType,
    ContentBlock,
    HeadingBlock,
    ImageBlock,
    InfoboxBlock,
    ListBlock,
    ParagraphBlock,
    Reference,
    TableBlock,
    UnknownBlock,
)
from .loader import CatalogError, MalformedCatalogEntry, load_articles, parse_article, parse_block
from .store import ArticleStore

__all__ = [
    "Article",
    "BlockType",
    "ContentBlock",
    "HeadingBlock",
    "ImageBlock",
    "InfoboxBlock",
    "ListBlock",
    "ParagraphBlock",
    "Reference",
    "TableBlock",
    "UnknownBlock",
    "CatalogError",
    "MalformedCatalogEntry",
    "load_articles",
    "parse_article",
    "parse_block",
    "ArticleStore",
]

__version__ = "1.0.0"
