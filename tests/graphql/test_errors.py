"""
Tests for how failures surface to GraphQL clients
"""

import re
import warnings
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from graphql import GraphQLError

from libris.errors import NotFoundError
from libris.graphql.schema import (
    INTERNAL_ERROR_MESSAGE,
    MaskInternalErrors,
    schema,
    should_mask_error,
)


class TestShouldMaskError:
    def test_validation_errors_pass_through(self):
        assert should_mask_error(GraphQLError("Field 'x' is not defined")) is False

    def test_operation_errors_pass_through(self):
        error = GraphQLError("Book not found", original_error=NotFoundError("Book not found"))
        assert should_mask_error(error) is False

    def test_unexpected_errors_are_masked(self):
        error = GraphQLError("boom", original_error=RuntimeError("boom"))
        assert should_mask_error(error) is True


class TestMaskingExtension:
    def test_registered_as_class(self):
        assert MaskInternalErrors in schema.extensions
        assert all(isinstance(ext, type) for ext in schema.extensions)

    def test_preset_message(self):
        extension = MaskInternalErrors()

        assert extension.error_message == INTERNAL_ERROR_MESSAGE
        assert extension.should_mask_error is should_mask_error

    @pytest.mark.asyncio
    async def test_execution_emits_no_extension_warning(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            result = await schema.execute("{ __typename }")

        assert result.errors is None
        assert not [w for w in caught if "extension" in str(w.message).lower()]


@pytest.mark.asyncio
class TestErrorSurfacing:
    async def test_store_failure_is_masked(self, run_graphql, catalog, monkeypatch):
        monkeypatch.setattr(
            catalog.books, "find", AsyncMock(side_effect=RuntimeError("connection refused"))
        )

        result = await run_graphql("{ books { id } }")

        assert result.data == {"books": None}
        assert [e.message for e in result.errors] == [INTERNAL_ERROR_MESSAGE]

    async def test_failing_operation_keeps_sibling_results(self, run_graphql, catalog):
        result = await run_graphql(
            """
            mutation ($missing: ID!) {
                addAuthor(name: "Ann Leckie", age: 58) { name }
                toggleFavorite(bookId: $missing, isFavorite: true) { id }
            }
            """,
            {"missing": str(uuid4())},
        )

        assert result.data == {"addAuthor": {"name": "Ann Leckie"}, "toggleFavorite": None}
        assert [e.message for e in result.errors] == ["Book not found"]
        assert result.errors[0].path == ["toggleFavorite"]
        assert len(await catalog.authors.find({"name": "Ann Leckie"})) == 1

    async def test_missing_required_argument_names_it(self, run_graphql):
        result = await run_graphql("{ book { id } }")

        assert result.data is None
        assert len(result.errors) == 1
        message = result.errors[0].message
        assert re.search(r"\bid\b", message)
        assert "required" in message

    async def test_unknown_field_is_rejected(self, run_graphql):
        result = await run_graphql("{ books { rating } }")

        assert result.data is None
        assert "rating" in result.errors[0].message
