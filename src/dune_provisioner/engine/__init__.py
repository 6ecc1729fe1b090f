"""Reconciliation engine for Dune resources."""

from dune_provisioner.engine.drift import DriftExpectation, check_drift
from dune_provisioner.engine.errors import (
    CredentialError,
    MissingIdentifier,
    ProvisionerError,
    RemoteRejected,
    TransportFailure,
    ValidationError,
)
from dune_provisioner.engine.handlers import EngineContext, ResourceHandler
from dune_provisioner.engine.materialized_view_handler import MaterializedViewHandler
from dune_provisioner.engine.query_handler import QueryHandler
from dune_provisioner.engine.types import (
    DriftReport,
    DriftStatus,
    Mode,
    ReconciliationResult,
    RemoteResource,
)

__all__ = [
    "CredentialError",
    "DriftExpectation",
    "DriftReport",
    "DriftStatus",
    "EngineContext",
    "MaterializedViewHandler",
    "MissingIdentifier",
    "Mode",
    "ProvisionerError",
    "QueryHandler",
    "ReconciliationResult",
    "RemoteRejected",
    "RemoteResource",
    "ResourceHandler",
    "TransportFailure",
    "ValidationError",
    "check_drift",
]
