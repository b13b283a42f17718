#!/usr/bin/env python3
"""
Validate the article catalog and optionally write a sitemap.

This script:
1. Loads every article JSON file in the catalog directory
2. Fails loudly on malformed entries or duplicate ids
3. Reports block, category and reference counts
4. Lists related-article links that point to missing articles
5. Writes sitemap.xml and robots.txt when asked to

Usage:
    python Ingress/check_catalog.py
    python Ingress/check_catalog.py --catalog data/articles --verbose
    python Ingress/check_catalog.py --sitemap-dir public --base-url https://example.org
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from catalog import ArticleStore, CatalogError
from rendering import DocumentRenderer
from seo import generate_sitemap, robots_txt, sitemap_xml


BASE_DIR = Path(__file__).resolve().parents[1]
CATALOG_DIR = BASE_DIR / "data" / "articles"


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate the article catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Check the bundled catalog
    python Ingress/check_catalog.py

    # Check another catalog directory with per-article details
    python Ingress/check_catalog.py --catalog path/to/articles --verbose

    # Also write sitemap.xml and robots.txt
    python Ingress/check_catalog.py --sitemap-dir public --base-url https://example.org
        """
    )

    parser.add_argument(
        "--catalog",
        type=Path,
        default=CATALOG_DIR,
        help=f"Catalog directory or JSON file (default: {CATALOG_DIR})"
    )

    parser.add_argument(
        "--sitemap-dir",
        type=Path,
        help="Directory to write sitemap.xml and robots.txt into"
    )

    parser.add_argument(
        "--base-url",
        default="",
        help="Public site origin used in sitemap URLs (e.g. https://example.org)"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat related-article links to missing articles as errors"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output"
    )

    args = parser.parse_args(argv)

    print("\n" + "=" * 70)
    print("Article Catalog Check")
    print("=" * 70)
    print(f"\nInput: {args.catalog}")

    try:
        store = ArticleStore.from_path(args.catalog)
    except CatalogError as e:
        print(f"\n✗ Catalog error: {e}")
        return 1

    stats = store.stats()
    print(f"  ✓ Loaded {stats['articles_count']} articles")
    print(f"    Blocks by type: {stats['blocks_by_type']}")
    print(f"    Categories: {stats['categories_count']}")
    print(f"    References: {stats['references_count']}")

    if args.verbose:
        renderer = DocumentRenderer(store)
        print()
        for article in store:
            rendered = renderer.render(article)
            print(f"  • {article.title} (id: {article.id})")
            print(f"    Sections: {len(rendered.toc)}, See also: {len(rendered.see_also)}, "
                  f"References: {len(rendered.references)}")

    broken = store.broken_references()
    if broken:
        print(f"\n  ⚠ {len(broken)} related-article link(s) to missing articles:")
        for article_id, missing_id in broken:
            print(f"    {article_id} -> {missing_id}")

    if args.sitemap_dir:
        args.sitemap_dir.mkdir(parents=True, exist_ok=True)
        sitemap_file = args.sitemap_dir / "sitemap.xml"
        robots_file = args.sitemap_dir / "robots.txt"
        sitemap_file.write_text(
            sitemap_xml(generate_sitemap(store.get_all(), args.base_url)), encoding="utf-8"
        )
        robots_file.write_text(robots_txt(args.base_url), encoding="utf-8")
        print(f"\n  ✓ Wrote {sitemap_file}")
        print(f"  ✓ Wrote {robots_file}")

    print("\n" + "=" * 70)
    if broken and args.strict:
        print("CATALOG CHECK FAILED (strict mode)")
        print("=" * 70 + "\n")
        return 1

    print("CATALOG CHECK COMPLETE")
    print("=" * 70 + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
