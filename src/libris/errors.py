"""
Operation errors surfaced to GraphQL clients.

Anything raised from a resolver that is not a LibrisError is treated as an
internal failure and masked before it reaches the client.
"""


class LibrisError(Exception):
    """Base class for errors whose message is safe to show to callers."""

    default_message = "Operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class UnauthorizedError(LibrisError):
    """Caller has no identity or lacks the required role."""

    default_message = "Unauthorized"


class NotFoundError(LibrisError):
    default_message = "Not found"


class ConflictError(LibrisError):
    """A unique field already holds the given value."""

    default_message = "Already exists"


class InvalidCredentialsError(LibrisError):
    default_message = "Invalid credentials"


class ValidationError(LibrisError):
    default_message = "Invalid input"
