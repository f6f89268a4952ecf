"""Catalog store adapter: collections for users, authors and books."""

from ..dbmodels import Authors, Books, Users
from .collection import Collection, SessionFactory, coerce_id
from .predicates import AllOf, AnyOf, Eq, IContains, In, Predicate, Sort, as_predicate


class Catalog:
    """The three collections every resolver works against."""

    def __init__(self, session_factory: SessionFactory | None = None):
        self.users: Collection[Users] = Collection(Users, session_factory)
        self.authors: Collection[Authors] = Collection(Authors, session_factory)
        self.books: Collection[Books] = Collection(Books, session_factory)


__all__ = [
    "AllOf",
    "AnyOf",
    "Catalog",
    "Collection",
    "Eq",
    "IContains",
    "In",
    "Predicate",
    "SessionFactory",
    "Sort",
    "as_predicate",
    "coerce_id",
]
