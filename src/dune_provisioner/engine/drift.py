"""Drift detection between desired settings and what the API exposes.

The read endpoint for materialized views returns the bound query but not the
refresh schedule or performance tier. A report therefore only ever claims
``ok`` or ``drift`` about fields that came back in the snapshot; everything
else requested is listed as unverifiable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from dune_provisioner.engine.normalize import canonical_id, is_blank
from dune_provisioner.engine.types import DriftReport, DriftStatus
from dune_provisioner.resources.base import Identifier

if TYPE_CHECKING:
    from collections.abc import Callable

    from dune_provisioner.engine.types import RemoteResource

    Fetch = Callable[[], RemoteResource | None]

logger = logging.getLogger(__name__)

# Fields compared by identity rather than by raw value.
_ID_FIELDS = frozenset({"query_id"})


class DriftExpectation(BaseModel):
    """Desired values to verify. ``None`` means "not asked about"."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str | None = None
    query_id: Identifier = None
    cron_expression: str | None = None
    performance: str | None = None

    def requested(self) -> dict[str, Any]:
        """Fields the caller wants verified, with their desired values."""
        fields = self.model_dump(exclude={"name"})
        out = {}
        for field, value in fields.items():
            if is_blank(value):
                continue
            if field in _ID_FIELDS and canonical_id(value) is None:
                continue
            out[field] = value
        return out


def _same(field: str, desired: Any, actual: Any) -> bool:
    if field in _ID_FIELDS:
        return canonical_id(desired) == canonical_id(actual)
    return desired == actual


def _unverifiable_note(fields: frozenset[str]) -> str:
    return f"{', '.join(sorted(fields))} cannot be verified via API"


def check_drift(desired: DriftExpectation, fetch: Fetch | None) -> DriftReport:
    """Classify the remote state against *desired*.

    Args:
        desired: Values to verify.
        fetch: Zero-argument read of the remote resource, returning ``None``
            when the resource does not exist. ``None`` itself means the
            remote state is not observable (no credential) and nothing is
            compared.

    Raises:
        TransportFailure: Propagated from *fetch*. A failed read says nothing
            about whether the resource exists.
    """
    requested = desired.requested()
    label = desired.name or "resource"

    if fetch is None:
        logger.info("Skipping verification of %s: no credential", label)
        return DriftReport(
            status=DriftStatus.SKIP,
            unverifiable_fields=frozenset(requested),
            message="No API credential configured, skipping verification",
            desired=requested,
        )

    remote = fetch()
    if remote is None:
        logger.warning("%s does not exist", label)
        return DriftReport(
            status=DriftStatus.MISSING,
            message=f"{label} does not exist",
            desired=requested,
        )

    observed = remote.observable_fields
    unverifiable = frozenset(f for f in requested if f not in observed)
    actual = {f: observed[f] for f in requested if f in observed}
    mismatches = [f for f, v in actual.items() if not _same(f, requested[f], v)]

    if mismatches:
        parts = [f"{f} is '{actual[f]}' but expected '{requested[f]}'" for f in mismatches]
        message = "DRIFT: " + "; ".join(parts)
        status = DriftStatus.DRIFT
        logger.warning("Drift on %s: %s", label, "; ".join(parts))
    else:
        message = f"{label} exists"
        status = DriftStatus.OK
        logger.info("No drift on %s", label)

    if unverifiable:
        message += f" (note: {_unverifiable_note(unverifiable)})"

    return DriftReport(
        status=status,
        unverifiable_fields=unverifiable,
        message=message,
        desired=requested,
        actual=actual,
        observed=dict(observed),
    )
