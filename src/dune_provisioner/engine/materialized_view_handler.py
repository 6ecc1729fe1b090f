"""Materialized view handler: upsert, read and verify via the Dune API."""

from __future__ import annotations

import logging
import re
from functools import partial
from typing import TYPE_CHECKING, Any

from dune_provisioner.engine.drift import check_drift
from dune_provisioner.engine.errors import ValidationError
from dune_provisioner.engine.handlers import ResourceHandler
from dune_provisioner.engine.normalize import (
    canonical_id,
    extract_error,
    extract_name,
    is_blank,
    raise_for_error,
)
from dune_provisioner.engine.types import Mode, ReconciliationResult, RemoteResource

if TYPE_CHECKING:
    from dune_provisioner.engine.drift import DriftExpectation
    from dune_provisioner.engine.handlers import EngineContext
    from dune_provisioner.engine.types import DriftReport
    from dune_provisioner.resources.materialized_view import MaterializedViewResource

logger = logging.getLogger(__name__)

_ENDPOINT = "materialized-views"
_NOT_FOUND = re.compile(r"not found|does not exist", re.IGNORECASE)
_INTEGER = re.compile(r"\d+", re.ASCII)


def full_name(namespace: str | None, team: str | None, name: str) -> str:
    """Build ``<namespace>.<team>.<name>``, dropping empty segments."""
    return ".".join(p for p in (namespace, team, name) if p)


class MaterializedViewHandler(ResourceHandler["MaterializedViewResource"]):
    """Handler for materialized views.

    The upsert endpoint decides by itself whether to create a view or update
    the one bound to ``query_id``; this handler only supplies inputs and
    interprets the reply.
    """

    def validate(self, ctx: EngineContext, desired: MaterializedViewResource) -> list[str]:
        errors = super().validate(ctx, desired)
        missing = set(desired.missing_fields())
        if "query_id" not in missing and not _INTEGER.fullmatch(str(desired.query_id).strip()):
            errors.append(f"query_id must be an integer, got '{desired.query_id}'")
        if "cron_expression" not in missing:
            sections = str(desired.cron_expression).split()
            if len(sections) != 5:
                errors.append(
                    f"cron_expression must have 5 sections, got {len(sections)}: "
                    f"'{desired.cron_expression}'"
                )
        return errors

    def _body(self, desired: MaterializedViewResource, name: str) -> dict[str, Any]:
        return {
            "name": name,
            "query_id": int(str(desired.query_id).strip()),
            "cron_expression": desired.cron_expression,
            "performance": desired.performance,
            "is_private": desired.is_private,
        }

    def upsert(
        self, ctx: EngineContext, desired: MaterializedViewResource
    ) -> ReconciliationResult:
        """Create or update the view with a single, unretried call.

        An "already exists" conflict (the name is bound to another query) is
        reported as ``RemoteRejected``; ownership is never rebound.

        Raises:
            CredentialError: No API key configured.
            ValidationError: Required fields missing or malformed.
            RemoteRejected: The API answered with an error payload.
            TransportFailure: The call did not complete.
        """
        client = ctx.require_client()
        self.check(ctx, desired)
        name = str(desired.name)

        status, payload = client.post_json(_ENDPOINT, self._body(desired, name))
        raise_for_error(payload, status_code=status)

        execution_id = canonical_id(payload.get("execution_id"))
        resolved = extract_name(payload) or full_name(
            ctx.provider.namespace, desired.team or ctx.provider.team, name
        )
        if execution_id:
            logger.info("Upserted %s, refresh triggered (execution_id=%s)", resolved, execution_id)
        else:
            logger.info("Upserted %s", resolved)

        return ReconciliationResult(
            id=resolved,
            mode=Mode.UPDATED,
            name=name,
            full_name=resolved,
            execution_id=execution_id,
        )

    def read(self, ctx: EngineContext, name: str) -> RemoteResource | None:
        """Read the view from Dune. Return ``None`` if it does not exist.

        Only fields present in the reply become observable; the endpoint is
        known not to return the cron schedule or performance tier.

        Raises:
            CredentialError: No API key configured.
            RemoteRejected: Any error other than not-found.
            TransportFailure: The read did not complete (after retries).
        """
        client = ctx.require_client()
        status, payload = client.get_json(_ENDPOINT, name)

        error = extract_error(payload)
        if status == 404 or (error is not None and _NOT_FOUND.search(error)):
            logger.debug("Materialized view %s not found", name)
            return None
        raise_for_error(payload, status_code=status)

        observable = {k: v for k, v in payload.items() if v is not None}
        if "query_id" in observable:
            observable["query_id"] = canonical_id(observable["query_id"])
        return RemoteResource(id=extract_name(payload) or name, observable_fields=observable)

    def verify(self, ctx: EngineContext, desired: DriftExpectation) -> DriftReport:
        """Compare *desired* with the live view.

        Without a credential nothing is read or validated and the report is
        ``skip``.

        Raises:
            ValidationError: ``name`` is missing.
        """
        if not ctx.provider.has_credential:
            return check_drift(desired, None)
        name = desired.name
        if name is None or is_blank(name):
            raise ValidationError(["name is required"])
        return check_drift(desired, partial(self.read, ctx, name))
