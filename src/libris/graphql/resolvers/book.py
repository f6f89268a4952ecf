from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry

from ...errors import NotFoundError
from ...logging import get_logger
from ...store import AllOf, AnyOf, Catalog, Eq, IContains, In, Predicate, Sort, coerce_id
from ..access_control import get_catalog_from_info, get_identity_from_info

if TYPE_CHECKING:
    from ..types.author import Author
    from ..types.book import Book

logger = get_logger(__name__)

SORT_OLDEST = "oldest"

# Optional book columns that updateBook may set back to null
CLEARABLE_BOOK_FIELDS = {"cover", "url"}


def normalize_author_id(author_id: str) -> str:
    """Store UUID-shaped author references in canonical form so joins match."""
    parsed = coerce_id(author_id)
    return str(parsed) if parsed is not None else author_id


async def build_books_filter(
    catalog: Catalog, search: str | None, is_favorite: bool | None
) -> Predicate:
    """
    Compose the books filter.

    A search term matches books whose name contains it or whose author's name
    contains it (both case-insensitive). ``is_favorite`` narrows the result
    further by exact match.
    """
    clauses: list[Predicate] = []

    if search:
        authors = await catalog.authors.find(IContains("name", search))
        author_ids = [str(author.id) for author in authors]
        clauses.append(AnyOf(IContains("name", search), In("author_id", author_ids)))

    if is_favorite is not None:
        clauses.append(Eq("is_favorite", is_favorite))

    return AllOf(*clauses)


# Query resolvers
async def resolve_book_by_id(info: strawberry.Info, id: str) -> Book | None:
    """Resolve a book by ID; unknown IDs resolve to null."""
    catalog = get_catalog_from_info(info)
    book = await catalog.books.find_by_id(id)
    if book is None:
        logger.info("Book not found", book_id=id)
        return None

    from ..types.book import Book as BookType

    return BookType.from_model(book)


async def resolve_books(
    info: strawberry.Info,
    search: str | None = None,
    sort_by: str | None = None,
    is_favorite: bool | None = None,
) -> list[Book]:
    """
    Resolve the book list with optional search and favorite filter.

    Ordered by creation time, newest first unless ``sort_by`` is "oldest".
    """
    catalog = get_catalog_from_info(info)
    where = await build_books_filter(catalog, search, is_favorite)
    order_by = Sort("created_at", descending=sort_by != SORT_OLDEST)

    books = await catalog.books.find(where, order_by=order_by)

    from ..types.book import Book as BookType

    return [BookType.from_model(book) for book in books]


# Book field resolvers
async def resolve_book_author(book: Book, info: strawberry.Info) -> Author | None:
    """Follow the weak author reference; a deleted author resolves to null."""
    catalog = get_catalog_from_info(info)
    author = await catalog.authors.find_by_id(book.author_id)
    if author is None:
        logger.debug("Book references a missing author", book_id=book.id, author_id=book.author_id)
        return None

    from ..types.author import Author as AuthorType

    return AuthorType.from_model(author)


# Mutation resolvers
async def add_book(
    info: strawberry.Info,
    name: str,
    genre: str,
    author_id: str,
    cover: str | None = None,
    url: str | None = None,
    is_favorite: bool | None = None,
) -> Book:
    """
    Create a book.

    Open to anonymous callers, unlike updateBook and deleteBook. The author
    reference is stored as given and is not checked for existence.
    """
    catalog = get_catalog_from_info(info)
    book = await catalog.books.insert(
        {
            "name": name,
            "genre": genre,
            "author_id": normalize_author_id(author_id),
            "cover": cover,
            "url": url,
            "is_favorite": bool(is_favorite),
        }
    )

    logger.info("Book created", book_id=str(book.id), author_id=book.author_id)

    from ..types.book import Book as BookType

    return BookType.from_model(book)


async def update_book(
    info: strawberry.Info,
    id: str,
    name: str | None = strawberry.UNSET,
    genre: str | None = strawberry.UNSET,
    author_id: str | None = strawberry.UNSET,
    cover: str | None = strawberry.UNSET,
    url: str | None = strawberry.UNSET,
    is_favorite: bool | None = strawberry.UNSET,
) -> Book | None:
    """
    Apply a partial update to a book. Admin only (enforced by the field permission).

    Arguments left out are not touched. An explicit null clears ``cover`` or
    ``url``; null for a required field is ignored. Returns null if the book
    does not exist.
    """
    if isinstance(author_id, str):
        author_id = normalize_author_id(author_id)

    patch: dict[str, Any] = {
        k: v
        for k, v in {
            "name": name,
            "genre": genre,
            "author_id": author_id,
            "cover": cover,
            "url": url,
            "is_favorite": is_favorite,
        }.items()
        if v is not strawberry.UNSET and (v is not None or k in CLEARABLE_BOOK_FIELDS)
    }

    catalog = get_catalog_from_info(info)
    book = await catalog.books.update_by_id(id, patch)
    identity = get_identity_from_info(info)

    if book is None:
        logger.info("Book not found for update", book_id=id)
        return None

    logger.info(
        "Book updated",
        book_id=id,
        updated_fields=list(patch),
        user_id=identity.user_id if identity else None,
    )

    from ..types.book import Book as BookType

    return BookType.from_model(book)


async def delete_book(info: strawberry.Info, id: str) -> Book | None:
    """
    Delete a book. Admin only (enforced by the field permission).

    Returns the deleted book, or null if nothing had that ID.
    """
    catalog = get_catalog_from_info(info)
    book = await catalog.books.delete_by_id(id)

    if book is None:
        logger.info("Book not found for delete", book_id=id)
        return None

    identity = get_identity_from_info(info)
    logger.info("Book deleted", book_id=id, user_id=identity.user_id if identity else None)

    from ..types.book import Book as BookType

    return BookType.from_model(book)


async def toggle_favorite(info: strawberry.Info, book_id: str, is_favorite: bool) -> Book:
    """
    Set a book's favorite flag.

    Raises:
        NotFoundError: If no book has the given ID
    """
    catalog = get_catalog_from_info(info)
    book = await catalog.books.update_by_id(book_id, {"is_favorite": is_favorite})

    if book is None:
        raise NotFoundError("Book not found")

    logger.info("Book favorite toggled", book_id=book_id, is_favorite=is_favorite)

    from ..types.book import Book as BookType

    return BookType.from_model(book)
