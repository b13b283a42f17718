"""
SEO package for the encyclopedia site.

Components:
- metadata: per-page title, description, keywords and structured data
- page_head: applies metadata to a page head, replacing by key
- sitemap: sitemap.xml and robots.txt
"""

from .metadata import (
    SEOData,
    article_description,
    article_keywords,
    article_url,
    generate_article_seo,
    generate_home_seo,
    generate_search_seo,
)
from .page_head import PageHead
from .sitemap import SitemapUrl, generate_sitemap, robots_txt, sitemap_xml

__all__ = [
    "SEOData",
    "article_description",
    "article_keywords",
    "article_url",
    "generate_article_seo",
    "generate_home_seo",
    "generate_search_seo",
    "PageHead",
    "SitemapUrl",
    "generate_sitemap",
    "robots_txt",
    "sitemap_xml",
]
