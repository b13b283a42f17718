"""
Article store for the encyclopedia.

Holds the full catalog in memory for the lifetime of the process:
- Lookup by id
- Case-insensitive substring search over titles, summaries and paragraphs
- Resolution of "see also" links

The catalog is small and static, so search is a plain linear scan.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .blocks import Article
from .loader import CatalogError, load_articles

logger = logging.getLogger(__name__)


class ArticleStore:
    """Read-only catalog of articles."""

    def __init__(self, articles: Sequence[Article]):
        """Initialize the store.

        Args:
            articles: Articles in display order; ids must be unique

        Raises:
            CatalogError: If two articles share an id
        """
        self._articles: Tuple[Article, ...] = tuple(articles)
        self._by_id: Dict[str, Article] = {}

        for article in self._articles:
            if article.id in self._by_id:
                raise CatalogError(f"Duplicate article id '{article.id}'")
            self._by_id[article.id] = article

        broken = self.broken_references()
        if broken:
            logger.info(f"{len(broken)} related-article links point to missing articles")
            for article_id, missing_id in broken:
                logger.debug(f"  {article_id} -> {missing_id} (missing)")

    @classmethod
    def from_path(cls, path: Path) -> "ArticleStore":
        """Load a store from a catalog directory or JSON file."""
        return cls(load_articles(path))

    def __len__(self) -> int:
        return len(self._articles)

    def __iter__(self) -> Iterator[Article]:
        return iter(self._articles)

    def __contains__(self, article_id: object) -> bool:
        return article_id in self._by_id

    def get_all(self) -> List[Article]:
        """Return the full catalog in load order."""
        return list(self._articles)

    def ids(self) -> List[str]:
        return [article.id for article in self._articles]

    def get_by_id(self, article_id: str) -> Optional[Article]:
        """Get article by exact id.

        Args:
            article_id: Article identifier

        Returns:
            The article, or None if no article has this id
        """
        return self._by_id.get(article_id)

    def search(self, query: str) -> List[Article]:
        """Search articles by case-insensitive substring.

        An article matches when the query occurs in its title, its summary
        or the text of any paragraph block. Results keep catalog order.

        Args:
            query: Search text; blank queries match nothing

        Returns:
            List of matching articles

        Example:
            >>> store.search("hello")
            [Article(id='x', title='Test', ...)]
        """
        if not query or not query.strip():
            return []

        needle = query.lower()
        return [article for article in self._articles if self._matches(article, needle)]

    def get_related(self, article_id: str) -> List[Article]:
        """Resolve the related-article ids of an article.

        Ids that do not resolve are skipped.

        Args:
            article_id: Article identifier

        Returns:
            Related articles in the order they are listed
        """
        article = self.get_by_id(article_id)
        if article is None:
            return []

        related = []
        for related_id in article.related_articles:
            target = self.get_by_id(related_id)
            if target is not None:
                related.append(target)
        return related

    def broken_references(self) -> List[Tuple[str, str]]:
        """List (article_id, missing_id) pairs for unresolvable related links."""
        return [
            (article.id, related_id)
            for article in self._articles
            for related_id in article.related_articles
            if related_id not in self._by_id
        ]

    def stats(self) -> Dict:
        """Summarize the catalog.

        Returns:
            Dictionary with article, block and category counts
        """
        by_type: Dict[str, int] = {}
        categories = set()
        for article in self._articles:
            for block in article.content:
                by_type[block.type] = by_type.get(block.type, 0) + 1
            categories.update(article.categories)

        return {
            "articles_count": len(self._articles),
            "blocks_by_type": by_type,
            "categories_count": len(categories),
            "references_count": sum(len(a.references) for a in self._articles),
            "broken_related": len(self.broken_references()),
        }

    @staticmethod
    def _matches(article: Article, needle: str) -> bool:
        if needle in article.title.lower() or needle in article.summary.lower():
            return True
        return any(needle in block.text.lower() for block in article.paragraphs())
