"""Desired-state reconciliation for Dune queries and materialized views."""

from dune_provisioner.config import (
    ProviderConfig,
    load_provider,
    resolve_or_create_query,
    upsert_materialized_view,
    verify_materialized_view,
)
from dune_provisioner.core import ApiKeyAuth, DuneProvider
from dune_provisioner.engine import DriftExpectation, check_drift
from dune_provisioner.resources import MaterializedViewResource, QueryResource

__version__ = "0.1.0"

__all__ = [
    "ApiKeyAuth",
    "DriftExpectation",
    "DuneProvider",
    "MaterializedViewResource",
    "ProviderConfig",
    "QueryResource",
    "__version__",
    "check_drift",
    "load_provider",
    "resolve_or_create_query",
    "upsert_materialized_view",
    "verify_materialized_view",
]
