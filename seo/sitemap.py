"""
Sitemap and robots.txt generation.

Every catalog entry becomes one sitemap URL built from its id and
lastModified date; the home page is listed first.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional
from xml.sax.saxutils import escape

from catalog import Article

from .metadata import article_url

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


@dataclass(frozen=True)
class SitemapUrl:
    loc: str
    lastmod: str
    changefreq: str
    priority: str


def generate_sitemap(
    articles: Iterable[Article],
    base_url: str = "",
    today: Optional[date] = None,
) -> List[SitemapUrl]:
    """Build the list of crawlable URLs.

    Args:
        articles: Catalog articles in display order
        base_url: Site origin without trailing slash
        today: Date used for the home page and for articles without a date

    Returns:
        Home page entry followed by one entry per article
    """
    base_url = base_url.rstrip("/")
    current_date = (today or date.today()).isoformat()

    urls = [SitemapUrl(loc=base_url or "/", lastmod=current_date, changefreq="daily", priority="1.0")]
    for article in articles:
        urls.append(
            SitemapUrl(
                loc=article_url(article.id, base_url),
                lastmod=article.last_modified.split("T")[0] or current_date,
                changefreq="weekly",
                priority="0.8",
            )
        )
    return urls


def sitemap_xml(urls: Iterable[SitemapUrl]) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<urlset xmlns="{SITEMAP_NAMESPACE}">',
    ]
    for url in urls:
        lines.extend([
            "  <url>",
            f"    <loc>{escape(url.loc)}</loc>",
            f"    <lastmod>{escape(url.lastmod)}</lastmod>",
            f"    <changefreq>{url.changefreq}</changefreq>",
            f"    <priority>{url.priority}</priority>",
            "  </url>",
        ])
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def robots_txt(base_url: str = "") -> str:
    base_url = base_url.rstrip("/")
    return f"""User-agent: *
Allow: /

Sitemap: {base_url}/sitemap.xml

# Crawl-delay for respectful crawling
Crawl-delay: 1

Allow: /article/
Allow: /search

Disallow: /admin/
Disallow: /private/
"""
