"""CLI command implementations.

Each command reads one JSON object from stdin and writes one JSON object to
stdout, so they can be used as external data sources by other tooling.
"""

from __future__ import annotations

import json
import sys
from typing import Any

import typer

from dune_provisioner.cli import app
from dune_provisioner.cli.errors import handle_error


def _read_input() -> dict[str, Any]:
    raw = sys.stdin.read()
    data = json.loads(raw) if raw.strip() else {}
    if not isinstance(data, dict):
        raise ValueError("input must be a JSON object")
    return data


def _is_private(data: dict[str, Any]) -> Any:
    """``is_private`` defaults to true when absent or null."""
    value = data.get("is_private")
    return True if value is None else value


def _emit(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload))


@app.command(name="create-or-get-query")
def create_or_get_query() -> None:
    """Return the given query_id, or create the query and return the new one.

    Input: ``{name, sql, is_private?, query_id?}``.
    """
    from dune_provisioner.config import load_provider, resolve_or_create_query
    from dune_provisioner.resources import QueryResource

    try:
        data = _read_input()
        spec = QueryResource(
            name=data.get("name"),
            sql=data.get("sql"),
            is_private=_is_private(data),
            query_id=data.get("query_id"),
        )
        result = resolve_or_create_query(load_provider(), spec)
    except Exception as exc:
        raise typer.Exit(handle_error(exc)) from exc

    _emit({"query_id": result.id, "mode": result.mode.value})


@app.command(name="update-matview")
def update_matview() -> None:
    """Create or update a materialized view through the upsert endpoint.

    Input: ``{name, query_id, cron, performance?, is_private?, team?}``.
    """
    from dune_provisioner.config import load_provider, upsert_materialized_view
    from dune_provisioner.resources import MaterializedViewResource

    try:
        data = _read_input()
        spec = MaterializedViewResource(
            name=data.get("name"),
            query_id=data.get("query_id"),
            cron_expression=data.get("cron"),
            performance=data.get("performance") or "medium",
            is_private=_is_private(data),
            team=data.get("team") or None,
        )
        result = upsert_materialized_view(load_provider(), spec)
    except Exception as exc:
        raise typer.Exit(handle_error(exc)) from exc

    _emit(
        {
            "name": result.name,
            "full_name": result.full_name,
            "updated": "true",
            "execution_id": result.execution_id or "",
        }
    )


@app.command(name="verify-matview")
def verify_matview() -> None:
    """Check a materialized view against its expected query and schedule.

    Input: ``{name, expected_query_id?, expected_cron?}``. Fields the API
    does not return are reported as unverifiable, never as matching.
    """
    from dune_provisioner.config import load_provider, verify_materialized_view
    from dune_provisioner.engine.drift import DriftExpectation

    try:
        data = _read_input()
        desired = DriftExpectation(
            name=data.get("name"),
            query_id=data.get("expected_query_id"),
            cron_expression=data.get("expected_cron"),
        )
        report = verify_materialized_view(load_provider(), desired)
    except Exception as exc:
        raise typer.Exit(handle_error(exc)) from exc

    _emit(
        {
            "status": report.status.value,
            "actual_cron": report.observed.get("cron_expression") or "unknown",
            "actual_query_id": report.observed.get("query_id") or "0",
            "unverifiable_fields": sorted(report.unverifiable_fields),
            "message": report.message,
        }
    )
