"""
Page head for rendered pages.

PageHead is the single owner of a page's discoverable metadata: the title,
meta tags, the canonical link and JSON-LD blocks. Applying SEOData replaces
entries by key, so applying the same data again leaves the head unchanged.
"""

from __future__ import annotations

import html
import json
from typing import Dict, List, Optional, Tuple

from .metadata import SEOData

DEFAULT_LOCALE = "en_US"

MetaKey = Tuple[str, str]


class PageHead:
    """Metadata of one HTML page."""

    def __init__(self, site_name: str = "Wikipedia", locale: str = DEFAULT_LOCALE):
        self.site_name = site_name
        self.locale = locale
        self.title: str = ""
        self.canonical_url: Optional[str] = None
        self.structured_data: List[Dict] = []
        self._meta: Dict[MetaKey, str] = {}

    def set_meta(self, name: str, content: str, attribute: str = "name") -> None:
        """Create or replace the meta tag identified by (attribute, name)."""
        self._meta[(attribute, name)] = content

    def get_meta(self, name: str, attribute: str = "name") -> Optional[str]:
        return self._meta.get((attribute, name))

    @property
    def meta_tags(self) -> List[Tuple[str, str, str]]:
        return [(attribute, name, content) for (attribute, name), content in self._meta.items()]

    def apply(self, seo: SEOData) -> "PageHead":
        """Reflect a metadata record into the head.

        Args:
            seo: Metadata produced by seo.metadata

        Returns:
            self, for chaining
        """
        self.title = seo.title

        self.set_meta("description", seo.description)
        self.set_meta("keywords", ", ".join(seo.keywords))

        self.set_meta("og:title", seo.title, "property")
        self.set_meta("og:description", seo.description, "property")
        self.set_meta("og:type", seo.og_type, "property")
        self.set_meta("og:url", seo.canonical_url, "property")
        self.set_meta("og:site_name", self.site_name, "property")
        self.set_meta("og:locale", self.locale, "property")
        if seo.og_image:
            self.set_meta("og:image", seo.og_image, "property")
        else:
            self._meta.pop(("property", "og:image"), None)

        self.set_meta("twitter:card", "summary_large_image")
        self.set_meta("twitter:title", seo.title)
        self.set_meta("twitter:description", seo.description)

        self.canonical_url = seo.canonical_url

        # Existing JSON-LD blocks are always replaced, never appended to
        if seo.structured_data is None:
            self.structured_data = []
        elif isinstance(seo.structured_data, list):
            self.structured_data = list(seo.structured_data)
        else:
            self.structured_data = [seo.structured_data]

        return self

    def to_html(self) -> str:
        """Serialize the head contents (without the <head> element itself)."""
        lines = [
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{html.escape(self.title)}</title>",
        ]
        for attribute, name, content in self.meta_tags:
            lines.append(
                f'<meta {attribute}="{html.escape(name)}" content="{html.escape(content)}">'
            )
        if self.canonical_url:
            lines.append(f'<link rel="canonical" href="{html.escape(self.canonical_url)}">')
        for item in self.structured_data:
            payload = json.dumps(item, indent=2, ensure_ascii=False).replace("</", "<\\/")
            lines.append(f'<script type="application/ld+json">\n{payload}\n</script>')
        return "\n".join(lines)
