# tests/conftest.py
"""Shared fixtures: small article catalogs written to tmp_path."""

import json
from pathlib import Path
from typing import Dict, List

import pytest

from catalog import ArticleStore, load_articles


def make_record(article_id: str, **overrides) -> Dict:
    """Build a valid article record with optional field overrides."""
    record = {
        "id": article_id,
        "title": article_id.replace("-", " ").title(),
        "summary": f"Summary of {article_id}.",
        "content": [],
        "categories": [],
        "references": [],
        "relatedArticles": [],
        "lastModified": "2024-01-15T10:00:00Z",
    }
    record.update(overrides)
    return record


def write_catalog(directory: Path, records: List[Dict]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for index, record in enumerate(records, start=1):
        (directory / f"article{index}.json").write_text(json.dumps(record), encoding="utf-8")
    return directory


@pytest.fixture
def test_record():
    """The article used by the end-to-end scenarios."""
    return make_record(
        "x",
        title="Test",
        content=[
            {"type": "heading", "text": "Intro", "level": 2},
            {"type": "paragraph", "text": "Hello world"},
        ],
        categories=["Demo"],
    )


@pytest.fixture
def sample_records(test_record):
    return [
        test_record,
        make_record(
            "solar-system",
            title="Solar System",
            summary="The Sun and the objects that orbit it.",
            content=[
                {"type": "infobox", "data": {"Age": "4.568 billion years", "Planets": "8"}},
                {"type": "paragraph", "text": "The Solar System formed  4.6 billion years ago."},
                {"type": "heading", "text": "Planets"},
                {"type": "list", "items": ["Mercury", "Venus", "Earth"]},
                {"type": "heading", "text": "Inner  planets", "level": 3},
                {"type": "paragraph", "text": "Rocky worlds close to the Sun."},
                {"type": "image", "src": "/static/planets.png", "alt": "Planets", "caption": "To scale"},
            ],
            categories=["Solar System", "Astronomy"],
            references=[
                {"id": "nasa", "text": "NASA.", "url": "https://solarsystem.nasa.gov/"},
                {"id": "book", "text": "A book about planets."},
            ],
            relatedArticles=["x", "missing-article", "quantum"],
        ),
        make_record(
            "quantum",
            title="Quantum Physics",
            summary="Nature at the scale of atoms.",
            content=[
                {"type": "heading", "text": "History", "level": 9},
                {"type": "paragraph", "text": "Planck solved the black-body problem."},
                {"type": "table", "data": {"Planck constant": "6.626e-34"}},
            ],
            relatedArticles=["solar-system"],
        ),
    ]


@pytest.fixture
def catalog_dir(tmp_path, sample_records):
    return write_catalog(tmp_path / "articles", sample_records)


@pytest.fixture
def store(catalog_dir):
    return ArticleStore(load_articles(catalog_dir))
