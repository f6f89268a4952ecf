"""
Book GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

import strawberry

from ...dbmodels import Books

if TYPE_CHECKING:
    from .author import Author


@strawberry.type
class Book:
    """Book type for GraphQL API."""

    id: strawberry.ID
    name: str
    genre: str
    author_id: strawberry.ID
    cover: str | None
    url: str | None
    is_favorite: bool
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    async def author(
        self, info: strawberry.Info
    ) -> Annotated["Author", strawberry.lazy(".author")] | None:
        """Get the author of this book, or null if the author no longer exists."""
        from ..resolvers.book import resolve_book_author

        return await resolve_book_author(self, info)

    @classmethod
    def from_model(cls, book: Books) -> "Book":
        return cls(
            id=strawberry.ID(str(book.id)),
            name=book.name,
            genre=book.genre,
            author_id=strawberry.ID(book.author_id),
            cover=book.cover,
            url=book.url,
            is_favorite=book.is_favorite,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )
