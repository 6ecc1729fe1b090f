"""Tests for the QueryHandler."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from dune_provisioner.engine.errors import (
    CredentialError,
    MissingIdentifier,
    RemoteRejected,
    TransportFailure,
    ValidationError,
)
from dune_provisioner.engine.query_handler import QueryHandler, explicit_id
from dune_provisioner.engine.types import Mode
from dune_provisioner.resources.query import QueryResource

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from dune_provisioner.engine.handlers import EngineContext


@pytest.fixture
def handler() -> QueryHandler:
    return QueryHandler()


# ---------------------------------------------------------------------------
# Explicit id reuse
# ---------------------------------------------------------------------------


class TestExistingId:
    @pytest.mark.parametrize("query_id", ["42", 42, "abc", " 7"])
    def test_reuses_id_without_network(
        self,
        ctx: EngineContext,
        handler: QueryHandler,
        mock_client: MagicMock,
        query_id: str | int,
    ) -> None:
        desired = QueryResource(name="Rev", sql="select 1", query_id=query_id)
        result = handler.resolve_or_create(ctx, desired)

        assert result.mode == Mode.EXISTING
        assert result.id == str(query_id)
        mock_client.post_json.assert_not_called()
        mock_client.get_json.assert_not_called()

    def test_no_credential_needed(self, no_cred_ctx: EngineContext, handler: QueryHandler) -> None:
        desired = QueryResource(name="Rev", sql="select 1", query_id="42")
        result = handler.resolve_or_create(no_cred_ctx, desired)
        assert result.model_dump(include={"id", "mode"}) == {"id": "42", "mode": Mode.EXISTING}

    def test_no_validation_of_body(self, ctx: EngineContext, handler: QueryHandler) -> None:
        result = handler.resolve_or_create(ctx, QueryResource(query_id="42"))
        assert result.id == "42"

    @pytest.mark.parametrize("query_id", [None, "", "0", 0, "null"])
    def test_unset_ids_are_not_explicit(self, query_id: str | int | None) -> None:
        assert explicit_id(QueryResource(name="Rev", sql="select 1", query_id=query_id)) is None


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


class TestCreate:
    def test_creates_once(
        self, ctx: EngineContext, handler: QueryHandler, mock_client: MagicMock
    ) -> None:
        mock_client.post_json.return_value = (200, {"query_id": 99})
        result = handler.resolve_or_create(ctx, QueryResource(name="Rev", sql="select 1"))

        assert result.id == "99"
        assert result.mode == Mode.CREATED
        mock_client.post_json.assert_called_once_with(
            "query", {"name": "Rev", "query_sql": "select 1", "is_private": True}
        )

    @pytest.mark.parametrize("query_id", ["0", 0, ""])
    def test_zero_id_creates(
        self,
        ctx: EngineContext,
        handler: QueryHandler,
        mock_client: MagicMock,
        query_id: str | int,
    ) -> None:
        mock_client.post_json.return_value = (200, {"query_id": 5})
        desired = QueryResource(name="Rev", sql="select 1", query_id=query_id)
        assert handler.resolve_or_create(ctx, desired).mode == Mode.CREATED
        assert mock_client.post_json.call_count == 1

    def test_nested_response_shape(
        self, ctx: EngineContext, handler: QueryHandler, mock_client: MagicMock
    ) -> None:
        mock_client.post_json.return_value = (200, {"base": {"query_id": 99}})
        result = handler.resolve_or_create(ctx, QueryResource(name="Rev", sql="select 1"))
        assert result.id == "99"

    def test_is_private_forwarded(
        self, ctx: EngineContext, handler: QueryHandler, mock_client: MagicMock
    ) -> None:
        mock_client.post_json.return_value = (200, {"query_id": 1})
        handler.create(ctx, QueryResource(name="Rev", sql="select 1", is_private=False))
        _, body = mock_client.post_json.call_args.args
        assert body["is_private"] is False

    def test_remote_rejected(
        self, ctx: EngineContext, handler: QueryHandler, mock_client: MagicMock
    ) -> None:
        mock_client.post_json.return_value = (400, {"error": "Invalid SQL"})
        with pytest.raises(RemoteRejected, match="^Invalid SQL$"):
            handler.create(ctx, QueryResource(name="Rev", sql="selec"))

    def test_missing_identifier(
        self, ctx: EngineContext, handler: QueryHandler, mock_client: MagicMock
    ) -> None:
        mock_client.post_json.return_value = (200, {"ok": True})
        with pytest.raises(MissingIdentifier):
            handler.create(ctx, QueryResource(name="Rev", sql="select 1"))

    def test_transport_failure_not_retried(
        self, ctx: EngineContext, handler: QueryHandler, mock_client: MagicMock
    ) -> None:
        mock_client.post_json.side_effect = TransportFailure("POST", "/query", "reset")
        with pytest.raises(TransportFailure):
            handler.create(ctx, QueryResource(name="Rev", sql="select 1"))
        assert mock_client.post_json.call_count == 1


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_missing_credential(self, no_cred_ctx: EngineContext, handler: QueryHandler) -> None:
        with pytest.raises(CredentialError):
            handler.resolve_or_create(no_cred_ctx, QueryResource(name="Rev", sql="select 1"))

    @pytest.mark.parametrize(
        ("fields", "missing"),
        [
            ({"sql": "select 1"}, ["name is required"]),
            ({"name": "Rev"}, ["sql is required"]),
            ({"name": "null", "sql": ""}, ["name is required", "sql is required"]),
        ],
    )
    def test_missing_fields_before_network(
        self,
        ctx: EngineContext,
        handler: QueryHandler,
        mock_client: MagicMock,
        fields: dict[str, str],
        missing: list[str],
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            handler.resolve_or_create(ctx, QueryResource(**fields))
        assert exc_info.value.errors == missing
        mock_client.post_json.assert_not_called()
