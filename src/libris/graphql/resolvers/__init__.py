"""Resolver package for GraphQL schema.

One module per entity; each function resolves a single root or nested field
from its parent value, arguments and the request context carried by
``strawberry.Info``.
"""
