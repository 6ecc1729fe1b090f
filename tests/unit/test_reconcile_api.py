"""End-to-end behaviour of the public reconciliation API with a mocked client."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from dune_provisioner import (
    DriftExpectation,
    DuneProvider,
    MaterializedViewResource,
    QueryResource,
    resolve_or_create_query,
    upsert_materialized_view,
    verify_materialized_view,
)
from dune_provisioner.engine.types import DriftStatus, Mode


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def provider(client: MagicMock) -> DuneProvider:
    return DuneProvider.from_client(client, team="team")


def test_existing_query_id_is_returned_without_api_call(
    provider: DuneProvider, client: MagicMock
) -> None:
    result = resolve_or_create_query(
        provider, QueryResource(name="Rev", sql="select 1", query_id="42")
    )
    assert (result.id, result.mode) == ("42", Mode.EXISTING)
    assert client.mock_calls == []


def test_query_created_exactly_once(provider: DuneProvider, client: MagicMock) -> None:
    client.post_json.return_value = (200, {"query_id": 99})
    result = resolve_or_create_query(provider, QueryResource(name="Rev", sql="select 1"))
    assert (result.id, result.mode) == ("99", Mode.CREATED)
    assert client.post_json.call_count == 1


def test_materialized_view_upsert(provider: DuneProvider, client: MagicMock) -> None:
    client.post_json.return_value = (200, {"execution_id": "abc", "name": "dune.team.mv1"})
    result = upsert_materialized_view(
        provider, MaterializedViewResource(name="mv1", query_id=10, cron_expression="0 * * * *")
    )
    assert result.full_name == "dune.team.mv1"
    assert result.execution_id == "abc"
    assert result.mode == Mode.UPDATED


def test_verify_reports_drift(provider: DuneProvider, client: MagicMock) -> None:
    client.get_json.return_value = (200, {"query_id": 99})
    report = verify_materialized_view(provider, DriftExpectation(name="mv1", query_id=10))
    assert report.status == DriftStatus.DRIFT
    assert "10" in report.message
    assert "99" in report.message


def test_verify_skips_without_credential() -> None:
    report = verify_materialized_view(DuneProvider(), DriftExpectation(name="mv1", query_id=10))
    assert report.status == DriftStatus.SKIP


def test_unverifiable_fields_never_compared(provider: DuneProvider, client: MagicMock) -> None:
    client.get_json.return_value = (200, {"query_id": 10})
    desired = DriftExpectation(name="mv1", query_id=10, cron_expression="0 * * * *")
    report = verify_materialized_view(provider, desired)
    assert report.unverifiable_fields.isdisjoint(report.verified_fields)
    assert "cron_expression" in report.unverifiable_fields
