"""Query handler: reuse an explicit query id or create the query once."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dune_provisioner.engine.handlers import ResourceHandler
from dune_provisioner.engine.normalize import extract_id
from dune_provisioner.engine.types import Mode, ReconciliationResult

if TYPE_CHECKING:
    from dune_provisioner.engine.handlers import EngineContext
    from dune_provisioner.resources.query import QueryResource

logger = logging.getLogger(__name__)

_UNSET_IDS = frozenset({"", "null", "0"})


def explicit_id(desired: QueryResource) -> str | None:
    """Return the caller-supplied query id exactly as given, if it is usable."""
    if desired.query_id is None or desired.query_id in _UNSET_IDS:
        return None
    return desired.query_id


class QueryHandler(ResourceHandler["QueryResource"]):
    """Handler for saved queries."""

    def resolve_or_create(self, ctx: EngineContext, desired: QueryResource) -> ReconciliationResult:
        """Reuse ``desired.query_id`` when set, otherwise create the query.

        The explicit-id path performs no network call and does not check that
        the id exists remotely.
        """
        existing = explicit_id(desired)
        if existing is not None:
            logger.debug("Reusing query %s for %s", existing, desired.address)
            return ReconciliationResult(id=existing, mode=Mode.EXISTING, name=desired.name)
        return self.create(ctx, desired)

    def create(self, ctx: EngineContext, desired: QueryResource) -> ReconciliationResult:
        """Create the query in Dune with a single, unretried call.

        Raises:
            CredentialError: No API key configured.
            ValidationError: ``name`` or ``sql`` missing.
            RemoteRejected: The API answered with an error payload.
            MissingIdentifier: The reply carried no recognizable query id.
            TransportFailure: The call did not complete.
        """
        client = ctx.require_client()
        self.check(ctx, desired)

        status, payload = client.post_json(
            "query",
            {"name": desired.name, "query_sql": desired.sql, "is_private": desired.is_private},
        )
        query_id = extract_id(payload, resource_type="query", status_code=status)

        logger.info("Created query %s (query_id=%s)", desired.name, query_id)
        return ReconciliationResult(id=query_id, mode=Mode.CREATED, name=desired.name)
