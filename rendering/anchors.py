"""Identifier helpers shared by heading elements, TOC links and category links."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

DEFAULT_HEADING_LEVEL = 2
MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6
FALLBACK_ANCHOR_PREFIX = "section"

_WHITESPACE = re.compile(r"\s+")


def heading_anchor(text: str) -> str:
    """Anchor for a heading: lowercased, whitespace runs collapsed to '-'.

    >>> heading_anchor("  World  War II  ")
    'world-war-ii'
    """
    return _WHITESPACE.sub("-", (text or "").strip().lower())


def category_slug(name: str) -> str:
    """URL segment for a category: whitespace runs replaced by '_'."""
    return _WHITESPACE.sub("_", (name or "").strip())


def clamp_heading_level(level: Optional[int]) -> int:
    if level is None:
        return DEFAULT_HEADING_LEVEL
    return max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, level))


def assign_anchors(texts: Iterable[str]) -> List[str]:
    """Anchors for every heading of one document, in order.

    Repeated anchors get -1, -2, ... suffixes so element ids stay unique.
    A heading with no visible text gets "section-N" (N is its 1-based
    position among the headings) so its TOC link still has a target.
    """
    anchors = []
    counts: Dict[str, int] = {}

    for position, text in enumerate(texts, start=1):
        base = heading_anchor(text) or f"{FALLBACK_ANCHOR_PREFIX}-{position}"
        anchor = base
        while anchor in counts:
            counts[base] += 1
            anchor = f"{base}-{counts[base]}"
        counts.setdefault(anchor, 0)
        anchors.append(anchor)

    return anchors
