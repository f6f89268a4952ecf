"""
Filter and sort expressions understood by the catalog store.

Predicates are small immutable values that compile to SQLAlchemy clauses for
a given model, so resolvers can describe what they want without building
statements themselves.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, false, or_, true
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement

from ..dbmodels import Base


def column(model: type[Base], field: str) -> InstrumentedAttribute:
    """Return the mapped column attribute named ``field``, rejecting anything else."""
    if field not in model.__mapper__.columns:
        raise ValueError(f"Unknown field {field!r} for {model.__tablename__}")
    return getattr(model, field)


def escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class Predicate:
    """Base class for filter expressions."""

    def compile(self, model: type[Base]) -> ColumnElement[bool]:
        raise NotImplementedError


@dataclass(frozen=True)
class Eq(Predicate):
    """Exact match on a scalar field."""

    field: str
    value: Any

    def compile(self, model: type[Base]) -> ColumnElement[bool]:
        col = column(model, self.field)
        if self.value is None:
            return col.is_(None)
        return col == self.value


@dataclass(frozen=True)
class IContains(Predicate):
    """Case-insensitive substring match on a text field."""

    field: str
    text: str

    def compile(self, model: type[Base]) -> ColumnElement[bool]:
        return column(model, self.field).ilike(f"%{escape_like(self.text)}%", escape="\\")


@dataclass(frozen=True, init=False)
class In(Predicate):
    """Field value is one of ``values``; an empty set matches nothing."""

    field: str
    values: tuple[Any, ...]

    def __init__(self, field: str, values: Iterable[Any]):
        object.__setattr__(self, "field", field)
        object.__setattr__(self, "values", tuple(values))

    def compile(self, model: type[Base]) -> ColumnElement[bool]:
        if not self.values:
            return false()
        return column(model, self.field).in_(self.values)


class AnyOf(Predicate):
    """Disjunction of clauses."""

    def __init__(self, *clauses: Predicate):
        self.clauses = clauses

    def compile(self, model: type[Base]) -> ColumnElement[bool]:
        if not self.clauses:
            return false()
        return or_(*(clause.compile(model) for clause in self.clauses))

    def __repr__(self) -> str:
        return f"AnyOf{self.clauses!r}"


class AllOf(Predicate):
    """Conjunction of clauses; with no clauses it matches everything."""

    def __init__(self, *clauses: Predicate):
        self.clauses = clauses

    def compile(self, model: type[Base]) -> ColumnElement[bool]:
        if not self.clauses:
            return true()
        return and_(*(clause.compile(model) for clause in self.clauses))

    def __repr__(self) -> str:
        return f"AllOf{self.clauses!r}"


@dataclass(frozen=True)
class Sort:
    field: str
    descending: bool = False

    def compile(self, model: type[Base]):
        col = column(model, self.field)
        return col.desc() if self.descending else col.asc()


Where = Predicate | Mapping[str, Any] | None


def as_predicate(where: Where) -> Predicate | None:
    """Normalize a filter argument; a mapping means exact match on every key."""
    if where is None or isinstance(where, Predicate):
        return where
    return AllOf(*(Eq(field, value) for field, value in where.items()))
