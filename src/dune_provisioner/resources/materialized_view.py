"""Materialized view resource model."""

from __future__ import annotations

from typing import ClassVar, Literal

from dune_provisioner.resources.base import Identifier, Resource

Performance = Literal["medium", "large"]


class MaterializedViewResource(Resource):
    """A scheduled materialized refresh of a query's results.

    The remote service matches an upsert to an existing view by ``query_id``.
    ``team`` is only used to build the full view name when the API does not
    return one.
    """

    resource_type: ClassVar[str] = "dune_materialized_view"
    required_fields: ClassVar[tuple[str, ...]] = ("name", "query_id", "cron_expression")

    query_id: Identifier = None
    cron_expression: str | None = None
    performance: Performance = "medium"
    team: str | None = None
