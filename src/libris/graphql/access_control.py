"""
Shared access control logic for GraphQL resolvers
"""

from collections.abc import Mapping
from typing import Any

import strawberry
from strawberry.permission import BasePermission

from ..auth.context import AuthenticatedIdentity, Role
from ..errors import UnauthorizedError
from ..logging import get_logger
from ..store import Catalog

logger = get_logger(__name__)


def get_identity_from_info(info: strawberry.Info) -> AuthenticatedIdentity | None:
    """Identity attached to the current request, or None when anonymous."""
    return info.context.get("identity")


def get_catalog_from_info(info: strawberry.Info) -> Catalog:
    return info.context["catalog"]


def require_role(context: Mapping[str, Any], role: Role) -> AuthenticatedIdentity:
    """
    Reject the operation unless the request identity holds ``role``.

    Raises:
        UnauthorizedError: If the request is anonymous or has a different role
    """
    identity: AuthenticatedIdentity | None = context.get("identity")
    if identity is None or not identity.has_role(role):
        logger.info(
            "Authorization denied",
            required_role=role.value,
            user_id=identity.user_id if identity else None,
            role=identity.role.value if identity else None,
        )
        raise UnauthorizedError()
    return identity


class AdminRequired(BasePermission):
    """Field-level guard for operations restricted to administrators."""

    message = UnauthorizedError.default_message

    def has_permission(self, source: Any, info: strawberry.Info, **kwargs: Any) -> bool:
        require_role(info.context, Role.ADMIN)
        return True
