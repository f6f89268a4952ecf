"""
User GraphQL type definitions
"""

from datetime import datetime

import strawberry

from ...auth.context import Role
from ...dbmodels import Users

strawberry.enum(Role, description="User role")


@strawberry.type
class User:
    """User type for GraphQL API. The password hash is never exposed."""

    id: strawberry.ID
    username: str
    email: str
    role: Role
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: Users) -> "User":
        return cls(
            id=strawberry.ID(str(user.id)),
            username=user.username,
            email=user.email,
            role=Role(user.role),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
