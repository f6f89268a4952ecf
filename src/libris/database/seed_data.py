"""
Sample catalog used for local development and demos.
"""

from __future__ import annotations

from ..logging import get_logger
from ..store import Catalog, Eq

logger = get_logger(__name__)

SAMPLE_AUTHORS: list[dict] = [
    {"name": "Patrick Rothfuss", "age": 44},
    {"name": "Brandon Sanderson", "age": 42},
    {"name": "Terry Pratchett", "age": 66},
]

# (book name, genre, author name)
SAMPLE_BOOKS: list[tuple[str, str, str]] = [
    ("Name of the Wind", "Fantasy", "Patrick Rothfuss"),
    ("The Final Empire", "Fantasy", "Brandon Sanderson"),
    ("The Hero of Ages", "Fantasy", "Brandon Sanderson"),
    ("The Long Earth", "Sci-Fi", "Terry Pratchett"),
    ("The Colour of Magic", "Fantasy", "Terry Pratchett"),
    ("The Light Fantastic", "Fantasy", "Terry Pratchett"),
]


async def seed_catalog(catalog: Catalog | None = None) -> dict[str, int]:
    """
    Insert the sample authors and books.

    Authors that already exist by name are reused, and books already present
    for that author are skipped, so running this twice is harmless.

    Returns:
        Count of authors and books that were created
    """
    catalog = catalog or Catalog()
    created = {"authors": 0, "books": 0}
    author_ids: dict[str, str] = {}

    for record in SAMPLE_AUTHORS:
        author = await catalog.authors.find_one(Eq("name", record["name"]))
        if author is None:
            author = await catalog.authors.insert(record)
            created["authors"] += 1
        author_ids[record["name"]] = str(author.id)

    for name, genre, author_name in SAMPLE_BOOKS:
        author_id = author_ids[author_name]
        if await catalog.books.find_one({"name": name, "author_id": author_id}) is not None:
            continue
        await catalog.books.insert({"name": name, "genre": genre, "author_id": author_id})
        created["books"] += 1

    logger.info("Sample catalog seeded", **created)
    return created
