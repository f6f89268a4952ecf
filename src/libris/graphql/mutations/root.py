"""
Root GraphQL mutation definitions
"""

import strawberry

from ...auth.context import Role
from ..access_control import AdminRequired
from ..types.author import Author
from ..types.book import Book
from ..types.user import User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type.

    Root fields are nullable so a failing operation reports its error without
    nulling the results of sibling operations in the same document.
    """

    # User mutations
    @strawberry.mutation(name="registerUser")
    async def register_user(
        self,
        info: strawberry.Info,
        username: str,
        email: str,
        password: str,
        role: Role | None = None,
    ) -> User | None:
        """Register a new user."""
        from ..resolvers.user import register_user

        return await register_user(info, username, email, password, role)

    @strawberry.mutation(name="loginUser")
    async def login_user(self, info: strawberry.Info, email: str, password: str) -> str | None:
        """Log in and receive a bearer token valid for one day."""
        from ..resolvers.user import login_user

        return await login_user(info, email, password)

    # Catalog mutations
    @strawberry.mutation(name="addAuthor")
    async def add_author(self, info: strawberry.Info, name: str, age: int) -> Author | None:
        """Create an author."""
        from ..resolvers.author import add_author

        return await add_author(info, name, age)

    @strawberry.mutation(name="addBook")
    async def add_book(
        self,
        info: strawberry.Info,
        name: str,
        genre: str,
        author_id: strawberry.ID,
        cover: str | None = None,
        url: str | None = None,
        is_favorite: bool | None = None,
    ) -> Book | None:
        """Create a book."""
        from ..resolvers.book import add_book

        return await add_book(info, name, genre, author_id, cover, url, is_favorite)

    @strawberry.mutation(name="updateBook", permission_classes=[AdminRequired])
    async def update_book(
        self,
        info: strawberry.Info,
        id: strawberry.ID,
        name: str | None = strawberry.UNSET,
        genre: str | None = strawberry.UNSET,
        author_id: strawberry.ID | None = strawberry.UNSET,
        cover: str | None = strawberry.UNSET,
        url: str | None = strawberry.UNSET,
        is_favorite: bool | None = strawberry.UNSET,
    ) -> Book | None:
        """Update fields of a book (admin only). Pass null to clear cover or url."""
        from ..resolvers.book import update_book

        return await update_book(info, id, name, genre, author_id, cover, url, is_favorite)

    @strawberry.mutation(name="deleteBook", permission_classes=[AdminRequired])
    async def delete_book(self, info: strawberry.Info, id: strawberry.ID) -> Book | None:
        """Delete a book (admin only)."""
        from ..resolvers.book import delete_book

        return await delete_book(info, id)

    @strawberry.mutation(name="toggleFavorite")
    async def toggle_favorite(
        self, info: strawberry.Info, book_id: strawberry.ID, is_favorite: bool
    ) -> Book | None:
        """Mark or unmark a book as favorite."""
        from ..resolvers.book import toggle_favorite

        return await toggle_favorite(info, book_id, is_favorite)
