"""Core infrastructure components for Dune Provisioner."""

from dune_provisioner.core.client import DEFAULT_API_URL, DuneClient
from dune_provisioner.core.provider import ApiKeyAuth, DuneProvider

__all__ = ["DEFAULT_API_URL", "ApiKeyAuth", "DuneClient", "DuneProvider"]
