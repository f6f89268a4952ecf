from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import strawberry
from sqlalchemy.exc import IntegrityError

from ...auth.context import Role
from ...auth.passwords import MIN_PASSWORD_LENGTH, hash_password, verify_password
from ...auth.tokens import CredentialIssuer
from ...errors import ConflictError, InvalidCredentialsError, NotFoundError, ValidationError
from ...logging import get_logger
from ...store import Sort
from ..access_control import get_catalog_from_info, get_identity_from_info

if TYPE_CHECKING:
    from ..types.user import User

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


# Query resolvers
async def resolve_current_user(info: strawberry.Info) -> User | None:
    """Resolve the user behind the request's bearer token, or null when anonymous."""
    identity = get_identity_from_info(info)
    if identity is None:
        return None

    catalog = get_catalog_from_info(info)
    user = await catalog.users.find_by_id(identity.user_id)
    if user is None:
        return None

    from ..types.user import User as UserType

    return UserType.from_model(user)


async def resolve_users(info: strawberry.Info) -> list[User]:
    """List every user. Admin only (enforced by the field permission)."""
    catalog = get_catalog_from_info(info)
    users = await catalog.users.find(order_by=Sort("created_at"))

    from ..types.user import User as UserType

    return [UserType.from_model(user) for user in users]


async def resolve_user_by_id(info: strawberry.Info, id: str) -> User | None:
    """Resolve a user by ID. Admin only (enforced by the field permission)."""
    catalog = get_catalog_from_info(info)
    user = await catalog.users.find_by_id(id)
    if user is None:
        return None

    from ..types.user import User as UserType

    return UserType.from_model(user)


# Mutation resolvers
async def register_user(
    info: strawberry.Info,
    username: str,
    email: str,
    password: str,
    role: Role | None = None,
) -> User:
    """
    Register a new user with a bcrypt-hashed password.

    Raises:
        ValidationError: If a field is blank or the password is too short
        ConflictError: If the email is already registered
    """
    username = username.strip()
    email = normalize_email(email)

    if not username:
        raise ValidationError("Please enter your Username")
    if not email:
        raise ValidationError("Please enter your email")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    catalog = get_catalog_from_info(info)
    if await catalog.users.find_one({"email": email}) is not None:
        logger.info("Registration rejected, email already registered")
        raise ConflictError("User already exists")

    # bcrypt is CPU-bound; keep it off the event loop
    password_hash = await asyncio.to_thread(hash_password, password)

    try:
        user = await catalog.users.insert(
            {
                "username": username,
                "email": email,
                "password": password_hash,
                "role": (role or Role.CANDIDATE).value,
            }
        )
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        raise ConflictError("User already exists") from e

    logger.info("User registered", user_id=str(user.id), role=user.role)

    from ..types.user import User as UserType

    return UserType.from_model(user)


async def login_user(info: strawberry.Info, email: str, password: str) -> str:
    """
    Check a user's password and issue a signed credential.

    Raises:
        NotFoundError: If no user has the given email
        InvalidCredentialsError: If the password does not match
    """
    catalog = get_catalog_from_info(info)
    user = await catalog.users.find_one({"email": normalize_email(email)})
    if user is None:
        raise NotFoundError("User not found")

    if not await asyncio.to_thread(verify_password, password, user.password):
        logger.info("Login rejected, password mismatch", user_id=str(user.id))
        raise InvalidCredentialsError()

    issuer: CredentialIssuer = info.context["issuer"]
    token = issuer.issue(user)

    logger.info("User logged in", user_id=str(user.id))
    return token
