"""
Catalog loader for the encyclopedia.

Reads article records from JSON and turns them into Article objects.

Record format (one object per article):
{
    "id": "solar-system",
    "title": "Solar System",
    "summary": "...",
    "content": [{"type": "paragraph", "text": "..."}, ...],
    "categories": ["Astronomy"],
    "references": [{"id": "1", "text": "...", "url": "https://..."}],
    "relatedArticles": ["quantum-physics"],
    "lastModified": "2024-01-15T10:00:00Z"
}

Missing required fields are fatal: the whole load is aborted with a
MalformedCatalogEntry naming the file and the field. Optional block fields
with the wrong shape are dropped (with a warning) instead.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

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

logger = logging.getLogger(__name__)

REQUIRED_ARTICLE_FIELDS = {
    "id": str,
    "title": str,
    "summary": str,
    "content": list,
    "categories": list,
    "references": list,
    "relatedArticles": list,
    "lastModified": str,
}


class CatalogError(ValueError):
    """Exception raised when the catalog cannot be loaded."""
    pass


class MalformedCatalogEntry(CatalogError):
    """An article record is missing a required field or has the wrong shape."""

    def __init__(self, source: str, field: str, message: str):
        self.source = source
        self.field = field
        super().__init__(f"{source}: field '{field}' {message}")


def parse_block(raw: Dict, where: str) -> ContentBlock:
    """Parse a single content block.

    Args:
        raw: Block object from the article JSON
        where: Location used in error messages (e.g. "article1.json content[3]")

    Returns:
        The matching block variant, or UnknownBlock for unrecognised tags

    Raises:
        MalformedCatalogEntry: If the block lacks a field its type requires
    """
    if not isinstance(raw, dict):
        raise MalformedCatalogEntry(where, "type", "block must be an object")

    block_type = raw.get("type")
    if not isinstance(block_type, str):
        raise MalformedCatalogEntry(where, "type", "is required")

    if block_type == BlockType.PARAGRAPH.value:
        return ParagraphBlock(text=_require_str(raw, "text", where))

    if block_type == BlockType.HEADING.value:
        return HeadingBlock(
            text=_require_str(raw, "text", where),
            level=_optional_level(raw, where),
        )

    if block_type == BlockType.LIST.value:
        items = raw.get("items")
        if items is None:
            return ListBlock()
        if not isinstance(items, list):
            logger.warning(f"{where}: ignoring non-list 'items'")
            return ListBlock()
        kept = tuple(item for item in items if isinstance(item, str))
        if len(kept) != len(items):
            logger.warning(f"{where}: ignoring {len(items) - len(kept)} non-string list item(s)")
        return ListBlock(items=kept)

    if block_type == BlockType.IMAGE.value:
        return ImageBlock(
            src=_require_str(raw, "src", where),
            alt=_optional_str(raw, "alt", where),
            caption=_optional_str(raw, "caption", where),
        )

    if block_type == BlockType.INFOBOX.value:
        return InfoboxBlock(data=_optional_data(raw, where))

    if block_type == BlockType.TABLE.value:
        return TableBlock(data=_optional_data(raw, where))

    logger.warning(f"{where}: unknown block type '{block_type}' will not be rendered")
    return UnknownBlock(type=block_type, raw=tuple(raw.items()))


def parse_article(raw: Dict, source: str = "unknown") -> Article:
    """Parse and validate one article record.

    Args:
        raw: Article object decoded from JSON
        source: Name of the file the record came from (for error reporting)

    Returns:
        Article object

    Raises:
        MalformedCatalogEntry: If a required field is absent or mistyped
    """
    if not isinstance(raw, dict):
        raise MalformedCatalogEntry(source, "id", "record must be an object")

    for field, expected in REQUIRED_ARTICLE_FIELDS.items():
        if field not in raw:
            raise MalformedCatalogEntry(source, field, "is required")
        if not isinstance(raw[field], expected):
            raise MalformedCatalogEntry(
                source, field, f"must be {expected.__name__}, got {type(raw[field]).__name__}"
            )

    article_id = raw["id"]
    if not article_id.strip():
        raise MalformedCatalogEntry(source, "id", "must not be empty")
    if article_id != article_id.strip():
        raise MalformedCatalogEntry(source, "id", f"must not have surrounding whitespace: {article_id!r}")

    where = f"{source} [{article_id}]"
    content = tuple(
        parse_block(block, f"{where} content[{index}]")
        for index, block in enumerate(raw["content"])
    )

    return Article(
        id=article_id,
        title=raw["title"],
        summary=raw["summary"],
        content=content,
        categories=tuple(_string_list(raw["categories"], "categories", where)),
        references=tuple(
            _parse_reference(ref, f"{where} references[{index}]")
            for index, ref in enumerate(raw["references"])
        ),
        related_articles=tuple(_string_list(raw["relatedArticles"], "relatedArticles", where)),
        last_modified=raw["lastModified"],
        source=source,
    )


def load_articles(path: Path) -> List[Article]:
    """Load all articles from a directory of JSON files or a single JSON file.

    Directory files are read in natural filename order (article2.json before
    article10.json); each file holds one article object or a list of them.

    Args:
        path: Catalog directory or JSON file

    Returns:
        List of Article objects in load order

    Raises:
        CatalogError: If the path is missing, a file is not valid JSON,
            an entry is malformed or an id is duplicated
    """
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog not found: {path}")

    if path.is_dir():
        files = sorted(path.glob("*.json"), key=_natural_key)
    else:
        files = [path]

    articles: List[Article] = []
    seen: Dict[str, str] = {}

    for json_file in files:
        try:
            payload = json.loads(json_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CatalogError(f"{json_file.name}: invalid JSON ({exc})") from exc
        except UnicodeDecodeError as exc:
            raise CatalogError(f"{json_file.name}: not valid UTF-8 ({exc})") from exc
        except OSError as exc:
            raise CatalogError(f"{json_file.name}: cannot be read ({exc})") from exc

        records = payload if isinstance(payload, list) else [payload]
        for index, record in enumerate(records):
            source = json_file.name if len(records) == 1 else f"{json_file.name}[{index}]"
            article = parse_article(record, source)
            if article.id in seen:
                raise CatalogError(
                    f"{source}: duplicate article id '{article.id}' (first defined in {seen[article.id]})"
                )
            seen[article.id] = source
            articles.append(article)

    logger.info(f"Loaded {len(articles)} articles from {path}")
    return articles


def _natural_key(path: Path) -> Tuple:
    parts = re.split(r"(\d+)", path.name)
    return tuple((0, int(part)) if part.isdigit() else (1, part) for part in parts)


def _require_str(raw: Dict, field: str, where: str) -> str:
    value = raw.get(field)
    if not isinstance(value, str):
        raise MalformedCatalogEntry(where, field, "is required")
    return value


def _optional_str(raw: Dict, field: str, where: str) -> Optional[str]:
    value = raw.get(field)
    if value is None or isinstance(value, str):
        return value
    logger.warning(f"{where}: ignoring non-string '{field}'")
    return None


def _optional_level(raw: Dict, where: str) -> Optional[int]:
    level = raw.get("level")
    if level is None:
        return None
    # bool is an int subclass
    if isinstance(level, bool) or not isinstance(level, int):
        logger.warning(f"{where}: ignoring non-integer heading level {level!r}")
        return None
    return level


def _optional_data(raw: Dict, where: str) -> Optional[Tuple[Tuple[str, str], ...]]:
    data = raw.get("data")
    if data is None:
        return None
    if not isinstance(data, dict):
        logger.warning(f"{where}: ignoring non-object 'data'")
        return None
    return tuple((str(key), str(value)) for key, value in data.items())


def _string_list(values: List, field: str, where: str) -> List[str]:
    for value in values:
        if not isinstance(value, str):
            raise MalformedCatalogEntry(where, field, "must contain only strings")
    return list(values)


def _parse_reference(raw: Dict, where: str) -> Reference:
    if not isinstance(raw, dict):
        raise MalformedCatalogEntry(where, "id", "reference must be an object")
    return Reference(
        id=_require_str(raw, "id", where),
        text=_require_str(raw, "text", where),
        url=_optional_str(raw, "url", where),
    )
