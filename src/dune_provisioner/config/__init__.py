"""Environment configuration and the convenience reconciliation API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dune_provisioner.config.schema import ProviderConfig
from dune_provisioner.engine.handlers import EngineContext
from dune_provisioner.engine.materialized_view_handler import MaterializedViewHandler
from dune_provisioner.engine.query_handler import QueryHandler

if TYPE_CHECKING:
    from dune_provisioner.core.provider import DuneProvider
    from dune_provisioner.engine.drift import DriftExpectation
    from dune_provisioner.engine.types import DriftReport, ReconciliationResult
    from dune_provisioner.resources import MaterializedViewResource, QueryResource

__all__ = [
    "ProviderConfig",
    "load_provider",
    "resolve_or_create_query",
    "upsert_materialized_view",
    "verify_materialized_view",
]


def load_provider(**overrides: Any) -> DuneProvider:
    """Resolve provider settings from the environment (and ``.env``)."""
    return ProviderConfig(**overrides).to_provider()


def resolve_or_create_query(provider: DuneProvider, spec: QueryResource) -> ReconciliationResult:
    """Return the query's existing id, or create it exactly once."""
    return QueryHandler().resolve_or_create(EngineContext(provider=provider), spec)


def upsert_materialized_view(
    provider: DuneProvider, spec: MaterializedViewResource
) -> ReconciliationResult:
    """Create or update a materialized view; the API decides which."""
    return MaterializedViewHandler().upsert(EngineContext(provider=provider), spec)


def verify_materialized_view(provider: DuneProvider, desired: DriftExpectation) -> DriftReport:
    """Check a materialized view for drift against *desired*."""
    return MaterializedViewHandler().verify(EngineContext(provider=provider), desired)
