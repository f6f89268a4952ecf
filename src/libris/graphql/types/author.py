"""
Author GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

from ...dbmodels import Authors

if TYPE_CHECKING:
    from .book import Book


@strawberry.type
class Author:
    """Author type for GraphQL API."""

    id: strawberry.ID
    name: str
    age: int

    @strawberry.field
    async def books(
        self, info: strawberry.Info
    ) -> list[Annotated["Book", strawberry.lazy(".book")]]:  # noqa: E501
        """Get books written by this author."""
        from ..resolvers.author import resolve_author_books

        return await resolve_author_books(self, info)

    @classmethod
    def from_model(cls, author: Authors) -> "Author":
        return cls(id=strawberry.ID(str(author.id)), name=author.name, age=author.age)
