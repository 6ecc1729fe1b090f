"""Dune resource definitions."""

from dune_provisioner.resources.base import Resource
from dune_provisioner.resources.materialized_view import MaterializedViewResource
from dune_provisioner.resources.query import QueryResource

__all__ = [
    "MaterializedViewResource",
    "QueryResource",
    "Resource",
]
