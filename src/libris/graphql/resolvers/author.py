from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ...store import Eq, Sort
from ..access_control import get_catalog_from_info

if TYPE_CHECKING:
    from ..types.author import Author
    from ..types.book import Book

logger = get_logger(__name__)


# Query resolvers
async def resolve_author_by_id(info: strawberry.Info, id: str) -> Author | None:
    """Resolve an author by ID; unknown IDs resolve to null."""
    catalog = get_catalog_from_info(info)
    author = await catalog.authors.find_by_id(id)
    if author is None:
        logger.info("Author not found", author_id=id)
        return None

    from ..types.author import Author as AuthorType

    return AuthorType.from_model(author)


async def resolve_authors(info: strawberry.Info) -> list[Author]:
    catalog = get_catalog_from_info(info)
    authors = await catalog.authors.find(order_by=Sort("name"))

    from ..types.author import Author as AuthorType

    return [AuthorType.from_model(author) for author in authors]


# Author field resolvers
async def resolve_author_books(author: Author, info: strawberry.Info) -> list[Book]:
    """Books whose author_id points back at this author."""
    catalog = get_catalog_from_info(info)
    books = await catalog.books.find(Eq("author_id", str(author.id)), order_by=Sort("created_at"))

    from ..types.book import Book as BookType

    return [BookType.from_model(book) for book in books]


# Mutation resolvers
async def add_author(info: strawberry.Info, name: str, age: int) -> Author:
    """
    Create an author.

    Open to anonymous callers, unlike updateBook and deleteBook.
    """
    catalog = get_catalog_from_info(info)
    author = await catalog.authors.insert({"name": name, "age": age})

    logger.info("Author created", author_id=str(author.id), name=author.name)

    from ..types.author import Author as AuthorType

    return AuthorType.from_model(author)
