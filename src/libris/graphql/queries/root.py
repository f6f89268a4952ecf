"""
Root GraphQL query definitions
"""

import strawberry

from ..access_control import AdminRequired
from ..types.author import Author
from ..types.book import Book
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def book(self, info: strawberry.Info, id: strawberry.ID) -> Book | None:
        """Get a book by ID."""
        from ..resolvers.book import resolve_book_by_id

        return await resolve_book_by_id(info, id)

    @strawberry.field
    async def books(
        self,
        info: strawberry.Info,
        search: str | None = None,
        sort_by: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[Book] | None:
        """Get books, newest first; sortBy "oldest" reverses the order."""
        from ..resolvers.book import resolve_books

        return await resolve_books(info, search, sort_by, is_favorite)

    @strawberry.field
    async def author(self, info: strawberry.Info, id: strawberry.ID) -> Author | None:
        """Get an author by ID."""
        from ..resolvers.author import resolve_author_by_id

        return await resolve_author_by_id(info, id)

    @strawberry.field
    async def authors(self, info: strawberry.Info) -> list[Author] | None:
        """Get all authors."""
        from ..resolvers.author import resolve_authors

        return await resolve_authors(info)

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.user import resolve_current_user

        return await resolve_current_user(info)

    @strawberry.field(permission_classes=[AdminRequired])
    async def users(self, info: strawberry.Info) -> list[User] | None:
        """Get all users (admin only)."""
        from ..resolvers.user import resolve_users

        return await resolve_users(info)

    @strawberry.field(permission_classes=[AdminRequired])
    async def user(self, info: strawberry.Info, id: strawberry.ID) -> User | None:
        """Get a user by ID (admin only)."""
        from ..resolvers.user import resolve_user_by_id

        return await resolve_user_by_id(info, id)
