"""
Search-engine metadata for encyclopedia pages.

Derives the page title, description, keywords, canonical URL, Open Graph
fields and schema.org structured data from catalog content. The functions
here only compute values; seo.page_head applies them to a page.

Usage:
    from seo import generate_article_seo

    seo = generate_article_seo(article, base_url="https://example.org")
    seo.description   # first two paragraphs, at most 160 characters
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from catalog import Article

DEFAULT_SITE_NAME = "Wikipedia"
DESCRIPTION_MAX_CHARS = 160
DESCRIPTION_PARAGRAPHS = 2
KEYWORD_MIN_WORD_LENGTH = 4
GENERIC_KEYWORDS = ["encyclopedia", "knowledge"]

StructuredData = Union[Dict, List[Dict]]


@dataclass
class SEOData:
    title: str
    description: str
    keywords: List[str]
    canonical_url: str
    og_type: str
    og_image: Optional[str] = None
    structured_data: Optional[StructuredData] = field(default=None)

    def to_dict(self) -> Dict:
        """Return the record in the field names used by the page head."""
        data = {
            "title": self.title,
            "description": self.description,
            "keywords": list(self.keywords),
            "canonicalUrl": self.canonical_url,
            "ogType": self.og_type,
        }
        if self.og_image is not None:
            data["ogImage"] = self.og_image
        if self.structured_data is not None:
            data["structuredData"] = self.structured_data
        return data


def article_url(article_id: str, base_url: str = "") -> str:
    return f"{base_url}/article/{article_id}"


def article_description(article: Article) -> str:
    """Description built from the first paragraphs, or "" if there are none."""
    texts = [block.text for block in article.paragraphs()][:DESCRIPTION_PARAGRAPHS]
    collapsed = re.sub(r"\s+", " ", " ".join(texts))
    return collapsed[:DESCRIPTION_MAX_CHARS].strip()


def article_keywords(article: Article, site_name: str = DEFAULT_SITE_NAME) -> List[str]:
    title_words = [word for word in article.title.split() if len(word) >= KEYWORD_MIN_WORD_LENGTH]
    return [*article.categories, *title_words, site_name, *GENERIC_KEYWORDS]


def generate_article_seo(
    article: Article,
    base_url: str = "",
    site_name: str = DEFAULT_SITE_NAME,
) -> SEOData:
    """Build the metadata record for an article page.

    Args:
        article: Article to describe
        base_url: Site origin without trailing slash (e.g. "https://example.org")
        site_name: Name used in titles, keywords and structured data

    Returns:
        SEOData with Article and BreadcrumbList structured data
    """
    base_url = base_url.rstrip("/")
    description = article_description(article)
    keywords = article_keywords(article, site_name)
    url = article_url(article.id, base_url)

    structured_data = [
        {
            "@context": "https://schema.org",
            "@type": "Article",
            "headline": article.title,
            "description": description,
            "author": {"@type": "Organization", "name": f"{site_name} Contributors"},
            "publisher": {
                "@type": "Organization",
                "name": site_name,
                "logo": {"@type": "ImageObject", "url": f"{base_url}/favicon.svg"},
            },
            "dateModified": article.last_modified,
            "datePublished": article.last_modified,
            "mainEntityOfPage": {"@type": "WebPage", "@id": url},
            "inLanguage": "en",
            "isAccessibleForFree": True,
            "genre": list(article.categories),
            "keywords": ", ".join(keywords),
        },
        {
            "@context": "https://schema.org",
            "@type": "BreadcrumbList",
            "itemListElement": [
                {"@type": "ListItem", "position": 1, "name": site_name, "item": base_url or "/"},
                {"@type": "ListItem", "position": 2, "name": article.title, "item": url},
            ],
        },
    ]

    return SEOData(
        title=f"{article.title} - {site_name}",
        description=description or f"Learn about {article.title} on {site_name}, the free encyclopedia.",
        keywords=keywords,
        canonical_url=url,
        og_type="article",
        og_image=_first_image(article, base_url),
        structured_data=structured_data,
    )


def generate_home_seo(base_url: str = "", site_name: str = DEFAULT_SITE_NAME) -> SEOData:
    base_url = base_url.rstrip("/")
    description = (
        f"{site_name} is a free online encyclopedia, created and edited by volunteers "
        "around the world."
    )
    return SEOData(
        title=f"{site_name}, the free encyclopedia",
        description=description,
        keywords=[site_name, "encyclopedia", "free", "knowledge", "education", "reference"],
        canonical_url=base_url or "/",
        og_type="website",
        structured_data={
            "@context": "https://schema.org",
            "@type": "WebSite",
            "name": site_name,
            "alternateName": f"{site_name}, the free encyclopedia",
            "description": description,
            "url": base_url or "/",
            "potentialAction": {
                "@type": "SearchAction",
                "target": {
                    "@type": "EntryPoint",
                    "urlTemplate": f"{base_url}/search?q={{search_term_string}}",
                },
                "query-input": "required name=search_term_string",
            },
        },
    )


def generate_search_seo(query: str, base_url: str = "", site_name: str = DEFAULT_SITE_NAME) -> SEOData:
    base_url = base_url.rstrip("/")
    query = " ".join(query.split())
    title = f"Search results for \"{query}\" - {site_name}" if query else f"Search - {site_name}"
    return SEOData(
        title=title,
        description=f"Search the articles of {site_name}, the free encyclopedia.",
        keywords=[site_name, "search", *GENERIC_KEYWORDS],
        canonical_url=f"{base_url}/search",
        og_type="website",
    )


def _first_image(article: Article, base_url: str) -> Optional[str]:
    for image in article.images():
        if image.src.startswith(("http://", "https://", "//")):
            return image.src
        return f"{base_url}/{image.src.lstrip('/')}"
    return None
