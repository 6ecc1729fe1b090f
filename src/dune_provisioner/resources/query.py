"""Query resource model."""

from __future__ import annotations

from typing import ClassVar

from dune_provisioner.resources.base import Identifier, Resource


class QueryResource(Resource):
    """A saved Dune query.

    ``query_id`` binds the resource to an existing remote query. When it is
    set, reconciliation reuses it as-is and never creates anything.
    """

    resource_type: ClassVar[str] = "dune_query"
    required_fields: ClassVar[tuple[str, ...]] = ("name", "sql")

    sql: str | None = None
    query_id: Identifier = None
