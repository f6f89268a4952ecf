"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    """User role enumeration."""

    CANDIDATE = "Candidate"
    ADMIN = "Admin"


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Identity decoded from a valid bearer token. Lives for one request only."""

    user_id: str
    email: str
    role: Role

    def has_role(self, role: Role) -> bool:
        return self.role is role
